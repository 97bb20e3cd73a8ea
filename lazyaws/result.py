"""
Lazy results.

A Result wraps the handle of a dispatched request. Nothing is awaited or
decoded until an accessor needs the data; then the body is decoded exactly
once and cached. A failure during decoding is cached too: every later access
re-raises the same exception without touching the transport again.
"""

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from ._logging import logger
from .cursor import iter_items, iter_pages
from .exceptions import LazyAwsError, PreconditionError
from .pages import Page, Shape
from .request import Request
from .transport import ResponseHandle

if TYPE_CHECKING:
    from .transport import Transport

D = TypeVar("D", bound=Shape)
P = TypeVar("P", bound=Page)
R = TypeVar("R", bound="PaginatedResult[Any]")


class Result(Generic[D]):
    """Result of a single operation call, populated on first access."""

    shape: ClassVar[type[Shape]]

    def __init__(
        self,
        handle: ResponseHandle,
        transport: "Transport | None" = None,
        request: Request | None = None,
        *,
        strict: bool = True,
    ) -> None:
        self._handle = handle
        self._transport = transport
        self._request = request
        self._strict = strict
        self._data: D | None = None
        self._error: LazyAwsError | None = None

    @property
    def transport(self) -> "Transport | None":
        return self._transport

    @property
    def request(self) -> Request | None:
        return self._request

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def populated(self) -> bool:
        return self._data is not None

    def ensure_populated(self) -> D:
        """
        Awaits the response and decodes it, once.

        Raises:
            PreconditionError: If no transport was injected
            UpstreamError: If the request failed
            DecodeError: If the body does not match the expected shape
        """
        if self._data is not None:
            return self._data
        if self._error is not None:
            raise self._error
        if self._transport is None:
            raise PreconditionError(f"missing transport injected in {type(self).__name__}")

        try:
            body = self._transport.decode_body(self._handle, self._strict)
            data = self.shape.decode(body)
        except LazyAwsError as e:
            self._error = e
            raise

        logger.debug(
            "Decoded response",
            extra={"operation": self._handle.operation, "shape": self.shape.__name__},
        )
        self._data = data  # type: ignore[assignment]
        return self._data  # type: ignore[return-value]

    @property
    def data(self) -> D:
        return self.ensure_populated()

    def resolve(self) -> bool:
        """Forces the request to complete and its body to be decoded."""
        self.ensure_populated()
        return True

    def cancel(self) -> bool:
        """Cancels the request if it has not started yet."""
        if self.populated:
            return False
        return self._handle.cancel()


class PaginatedResult(Result[P]):
    """
    Result of a paginated operation.

    Iterating the result walks every page, fetching the next page while the
    current one is consumed. Use items(current_page_only=True) to stay on
    this page.
    """

    shape: ClassVar[type[Page]]

    @property
    def page(self) -> P:
        return self.ensure_populated()

    @property
    def continuation_key(self) -> Any | None:
        return self.page.continuation_key

    @property
    def has_more(self) -> bool:
        return self.page.has_more

    def items(self, current_page_only: bool = False) -> Iterator[Any]:
        """
        Yields the items of this page, or of every page from this one on.

        Args:
            current_page_only: When True, iterates over the items of the current
                               page only. Otherwise also fetches the next pages.
        """
        if current_page_only:
            yield from self.page.page_items
            return

        yield from iter_items(self._transport, self._request, self)

    def pages(self: R) -> Iterator[R]:
        """Yields this result and every following page as results."""
        yield from iter_pages(self._transport, self._request, self)

    def __iter__(self) -> Iterator[Any]:
        return self.items()
