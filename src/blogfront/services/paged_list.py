"""Paginated list state kept in sync with a backend collection."""

import logging
import math
from typing import Callable, Generic, Optional, TypeVar

from ..models.page import PageResult
from .api_client import ApiError
from .notifications import Notifier

logger = logging.getLogger(__name__)

T = TypeVar("T")

FetchPage = Callable[[int, int], PageResult[T]]


class PagedList(Generic[T]):
    """One page of a resource collection plus its loading state.

    The backend is always the source of truth: every page change and every
    mutation reloads the current page rather than patching items locally.

    Each fetch is tagged with a sequence number. Only the response to the most
    recently issued fetch is applied, so a slow, older response can never
    overwrite newer data.

    `page` is 1-based as the backend expects; UI code talks 0-based page
    indexes through `seek`/`change_page`/`page_index`.
    """

    def __init__(
        self,
        fetch_page: FetchPage,
        page_size: int = 10,
        notifier: Optional[Notifier] = None,
        error_message: str = "Failed to load items.",
        name: str = "items",
    ):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self._fetch_page = fetch_page
        self.notifier = notifier
        self.error_message = error_message
        self.name = name

        self.items: list[T] = []
        self.total_count = 0
        self.page = 1
        self.page_size = page_size
        self.is_loading = True
        self._sequence = 0

    @property
    def page_index(self) -> int:
        """Current page as a 0-based UI index."""
        return self.page - 1

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total_count / self.page_size))

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.last_page

    def seek(self, page_index: int, page_size: Optional[int] = None) -> None:
        """Move to a 0-based page index without loading."""
        if page_index < 0:
            raise ValueError("page_index must not be negative")
        if page_size is not None:
            if page_size < 1:
                raise ValueError("page_size must be at least 1")
            self.page_size = page_size
        self.page = page_index + 1

    def change_page(self, page_index: int, page_size: Optional[int] = None) -> bool:
        """Move to a 0-based page index and load it."""
        self.seek(page_index, page_size)
        return self.load()

    def after_mutation(self) -> bool:
        """Reload the current page after a create/update/delete.

        The page is not adjusted: removing the last item of the last page
        leaves an empty page.
        """
        return self.load()

    def clear(self) -> None:
        """Empty the list and drop any fetch still in flight."""
        self._sequence += 1
        self.items = []
        self.total_count = 0
        self.is_loading = False

    def load(self) -> bool:
        """Fetch the current page. Returns True if the result was applied."""
        self._sequence += 1
        sequence = self._sequence
        self.is_loading = True

        try:
            result = self._fetch_page(self.page, self.page_size)
        except ApiError as e:
            return self._fail(sequence, e.message)
        except Exception:
            logger.exception(f"Loading {self.name} failed")
            return self._fail(sequence, None)

        if sequence != self._sequence:
            logger.debug(f"Discarding stale {self.name} response (#{sequence}, latest #{self._sequence})")
            return False

        self.items = list(result.items)[: self.page_size]
        self.total_count = max(int(result.total), 0)
        self.is_loading = False
        return True

    def _fail(self, sequence: int, message: Optional[str]) -> bool:
        if sequence != self._sequence:
            logger.debug(f"Ignoring failure of stale {self.name} request #{sequence}")
            return False
        self.is_loading = False
        logger.warning(f"Loading {self.name} page {self.page} failed: {message or 'unexpected error'}")
        if self.notifier is not None:
            self.notifier.error(self.error_message)
        return False
