from collections.abc import Generator
from contextlib import contextmanager

from botocore.exceptions import BotoCoreError, ClientError


class LazyAwsError(Exception):
    """Base exception for all lazyaws errors."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class DecodeError(LazyAwsError):
    """Raised when a response body is malformed or has an unexpected shape."""

    def __init__(
        self,
        message: str,
        shape: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.shape = shape


class PreconditionError(LazyAwsError):
    """
    Raised when a result is used without the context it needs
    (transport, request template) or the prefetch slot is misused.
    """


class UpstreamError(LazyAwsError):
    """Raised when a request failed at the transport layer."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        error_code: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.operation = operation
        self.error_code = error_code


class ResourceNotFoundError(UpstreamError):
    """Raised when the table, bucket or queue does not exist."""


class ThrottlingError(UpstreamError):
    """Raised when the service throttles requests."""


class ValidationError(UpstreamError):
    """Raised when the service rejects the request parameters."""


class AccessDeniedError(UpstreamError):
    """Raised when the caller is not allowed to perform the operation."""


class RequestTimeoutError(UpstreamError):
    """Raised when a request to the service times out."""


_ERROR_CODES: dict[str, type[UpstreamError]] = {
    "ResourceNotFoundException": ResourceNotFoundError,
    "NoSuchBucket": ResourceNotFoundError,
    "AWS.SimpleQueueService.NonExistentQueue": ResourceNotFoundError,
    "QueueDoesNotExist": ResourceNotFoundError,
    "ProvisionedThroughputExceededException": ThrottlingError,
    "ThrottlingException": ThrottlingError,
    "RequestLimitExceeded": ThrottlingError,
    "SlowDown": ThrottlingError,
    "ValidationException": ValidationError,
    "SerializationException": ValidationError,
    "InvalidArgument": ValidationError,
    "AccessDeniedException": AccessDeniedError,
    "AccessDenied": AccessDeniedError,
    "RequestTimeout": RequestTimeoutError,
    "RequestTimeoutException": RequestTimeoutError,
}


@contextmanager
def handle_client_errors(operation: str | None = None) -> Generator[None, None, None]:
    """
    Context manager that catches botocore errors
    and raises the appropriate UpstreamError subclass.

    Args:
        operation: Optional operation name for better error messages

    Usage:
        with handle_client_errors(operation="Scan"):
            client.scan(...)
    """
    try:
        yield
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code", "Unknown")
        error_message = e.response.get("Error", {}).get("Message", str(e))

        error_cls = _ERROR_CODES.get(error_code)
        if error_cls is not None:
            raise error_cls(
                error_message, operation=operation, error_code=error_code, original_error=e
            ) from e

        # Unknown error: wrap in generic UpstreamError
        raise UpstreamError(
            f"{operation or 'AWS'} error ({error_code}): {error_message}",
            operation=operation,
            error_code=error_code,
            original_error=e,
        ) from e
    except BotoCoreError as e:
        raise UpstreamError(
            f"{operation or 'AWS'} request failed: {e!s}", operation=operation, original_error=e
        ) from e
