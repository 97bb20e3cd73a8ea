"""
Page walking with one-page-ahead prefetch.

iter_pages() is a stateless generator over (transport, template, start). For
every page it first dispatches the request for the next page (when the page
carries a continuation key) and only then hands the page to the consumer, so
the round trip for page N+1 overlaps with the consumption of page N.

    page = start
    loop:
        key present?  -> send template + {start_field: key}, park it in the slot
        yield page
        no next page? -> stop
        take next page out of the slot, continue with it

At most one follow-up request is in flight per walk. Closing the generator
early releases the slot (cancelling the pending request if it has not
started) and never issues another page.
"""

from collections.abc import Iterator
from contextlib import closing
from typing import TYPE_CHECKING, Any, TypeVar

from ._logging import logger, redact_key
from .exceptions import LazyAwsError, PreconditionError, UpstreamError
from .request import Request
from .transport import ResponseHandle

if TYPE_CHECKING:
    from .result import PaginatedResult
    from .transport import Transport

R = TypeVar("R", bound="PaginatedResult[Any]")


class PrefetchSlot:
    """
    Bookkeeping for the follow-up page a walk has dispatched but not yet reached.

    Holds at most one pending result: the walk prefetches exactly one page ahead.
    """

    def __init__(self) -> None:
        self._pending: "PaginatedResult[Any] | None" = None

    @property
    def pending(self) -> "PaginatedResult[Any] | None":
        return self._pending

    def register(self, result: "PaginatedResult[Any]") -> None:
        if self._pending is not None:
            raise PreconditionError("a prefetched page is already pending")
        self._pending = result

    def unregister(self, result: "PaginatedResult[Any]") -> None:
        if self._pending is result:
            self._pending = None

    def release(self) -> bool:
        """
        Drops the pending page without draining it.

        Returns:
            True if a pending page was dropped
        """
        pending = self._pending
        if pending is None:
            return False
        self._pending = None
        cancelled = pending.cancel()
        logger.debug(
            "Released pending prefetch",
            extra={"cancelled": cancelled, "populated": pending.populated},
        )
        return True


def _send(transport: "Transport", request: Request) -> ResponseHandle:
    """
    Dispatches a follow-up request.

    A send that fails synchronously becomes a failed handle, so the current
    page is still yielded and the error surfaces when the follow-up is reached.
    """
    try:
        return transport.send(request)
    except LazyAwsError as e:
        return ResponseHandle.failed(e, request.operation)
    except Exception as e:
        error = UpstreamError(
            f"{request.operation} request could not be dispatched: {e!s}",
            operation=request.operation,
            original_error=e,
        )
        return ResponseHandle.failed(error, request.operation)


def iter_pages(
    transport: "Transport | None", template: Request | None, start: R
) -> Iterator[R]:
    """
    Yields start and every following page, prefetching one page ahead.

    Args:
        transport: Transport used to dispatch follow-up requests
        template: The request that produced start; cloned for each follow-up
        start: The first page

    Raises:
        PreconditionError: If transport or template is missing
        UpstreamError: When the consumer reaches a page whose request failed
        DecodeError: When the consumer reaches a page that cannot be decoded
    """
    if transport is None:
        raise PreconditionError("missing transport injected in paginated result")
    if template is None:
        raise PreconditionError("missing last request injected in paginated result")

    result_cls = type(start)
    start_field = result_cls.shape.start_field
    slot = PrefetchSlot()
    page = start
    page_number = 1

    try:
        while True:
            key = page.continuation_key
            if key is not None:
                request = template.with_param(start_field, key)
                next_page = result_cls(
                    _send(transport, request), transport, request, strict=start.strict
                )
                slot.register(next_page)
                logger.debug(
                    "Prefetching next page",
                    extra={
                        "operation": template.operation,
                        "page_number": page_number + 1,
                        "key_hash": redact_key(key),
                    },
                )
            else:
                next_page = None

            yield page

            if next_page is None:
                logger.debug(
                    "Pagination finished",
                    extra={"operation": template.operation, "page_count": page_number},
                )
                return

            slot.unregister(next_page)
            page = next_page
            page_number += 1
    finally:
        slot.release()


def iter_items(
    transport: "Transport | None", template: Request | None, start: "PaginatedResult[Any]"
) -> Iterator[Any]:
    """Flattens iter_pages() into one lazy sequence of items, in page order."""
    with closing(iter_pages(transport, template, start)) as pages:
        for page in pages:
            yield from page.items(current_page_only=True)
