"""
Transport layer for lazyaws.

The transport dispatches a Request without waiting for it and hands back a
ResponseHandle; the response is only awaited when a result needs its data.
BotoTransport runs the boto3 calls on a small thread pool so that a follow-up
page can be in flight while the caller is still consuming the current one.
"""

from collections.abc import Mapping
from concurrent.futures import CancelledError, Executor, Future, ThreadPoolExecutor
from typing import Any, Protocol

from botocore import xform_name

from ._logging import logger
from .exceptions import DecodeError, UpstreamError, handle_client_errors
from .request import Request


class ResponseHandle:
    """A dispatched request whose response may not have arrived yet."""

    def __init__(self, future: "Future[Any]", operation: str) -> None:
        self._future = future
        self.operation = operation

    @classmethod
    def completed(cls, body: Any, operation: str = "") -> "ResponseHandle":
        """Wraps an already-available response body."""
        future: Future[Any] = Future()
        future.set_result(body)
        return cls(future, operation)

    @classmethod
    def failed(cls, error: BaseException, operation: str = "") -> "ResponseHandle":
        """Wraps a request that already failed."""
        future: Future[Any] = Future()
        future.set_exception(error)
        return cls(future, operation)

    def done(self) -> bool:
        return self._future.done()

    def cancel(self) -> bool:
        """Cancels the request if it has not started. Returns True on success."""
        return self._future.cancel()

    def result(self, timeout: float | None = None) -> Any:
        """
        Blocks until the response is available and returns the raw body.

        Raises:
            UpstreamError: If the request failed or was cancelled
        """
        try:
            return self._future.result(timeout)
        except CancelledError as e:
            raise UpstreamError(
                f"{self.operation} request was cancelled",
                operation=self.operation,
                original_error=e,
            ) from e


class Transport(Protocol):
    def send(self, request: Request) -> ResponseHandle: ...

    def decode_body(self, handle: ResponseHandle, strict: bool = True) -> dict[str, Any]: ...


class BotoTransport:
    """
    Transport backed by a low-level boto3 client.

    Signing, retries and connection pooling are left to botocore.
    """

    def __init__(
        self, client: Any, executor: Executor | None = None, max_workers: int = 4
    ) -> None:
        self.client = client
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="lazyaws"
        )

    def send(self, request: Request) -> ResponseHandle:
        """
        Dispatches the request and returns immediately.

        A request that cannot be dispatched (unknown operation, transport
        already closed) comes back as a failed handle; the UpstreamError is
        raised when the response is awaited.
        """
        logger.info(
            "Dispatching request",
            extra={"operation": request.operation, "param_names": sorted(request.params)},
        )

        try:
            method = getattr(self.client, xform_name(request.operation))
            future = self._executor.submit(self._call, method, request)
        except (AttributeError, RuntimeError) as e:
            logger.warning(
                "Dispatch failed",
                extra={"operation": request.operation, "error": str(e)},
            )
            return ResponseHandle.failed(
                UpstreamError(
                    f"{request.operation} request could not be dispatched: {e!s}",
                    operation=request.operation,
                    original_error=e,
                ),
                request.operation,
            )
        return ResponseHandle(future, request.operation)

    def decode_body(self, handle: ResponseHandle, strict: bool = True) -> dict[str, Any]:
        """
        Awaits the response and returns its body as a plain dict.

        boto3 has already parsed the wire format; this only checks the shape
        and strips the transport metadata.

        Args:
            handle: Handle returned by send()
            strict: When True an empty (None) body is rejected as well

        Raises:
            UpstreamError: If the request failed
            DecodeError: If the body is not a mapping
        """
        body = handle.result()
        if body is None and not strict:
            return {}
        if not isinstance(body, Mapping):
            raise DecodeError(
                f"Unexpected {type(body).__name__} body for {handle.operation}",
                shape=handle.operation,
            )
        return {k: v for k, v in body.items() if k != "ResponseMetadata"}

    def close(self) -> None:
        """Stops the executor, cancelling requests that have not started."""
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> "BotoTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @staticmethod
    def _call(method: Any, request: Request) -> Any:
        with handle_client_errors(operation=request.operation):
            return method(**request.params)
