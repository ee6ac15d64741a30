# core/list_controller.py
"""
Paginated / searched / filtered view of one entity type plus its CRUD dispatch.

Every admin management screen owns one controller (kept in st.session_state)
and calls these handlers from widget callbacks:

- fetch: replace items + pagination wholesale on success; on failure keep the
  previous items visible and record the error.
- on_search_submit / on_filter_change: reset to page 1 and refetch.
- on_page_change: clamp into [1, total_pages]; out of range is a no-op.
- on_create / on_edit / on_delete: mutate, then refetch the current page.

Each fetch takes a ticket from a monotonic counter and its response is only
applied while that ticket is still the newest one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, TypeVar

from pydantic import ValidationError

from core.api.client import ApiError, GENERIC_ERROR
from core.models import PagedResult
from core.notify import LogNotifier, Notifier

logger = logging.getLogger(__name__)

T = TypeVar("T")

FetchFn = Callable[..., PagedResult]
MALFORMED_DATA = "Received malformed data from the server."


@dataclass
class ListState(Generic[T]):
    page: int = 1
    per_page: int = 10
    search_term: str = ""
    status_filter: Optional[str] = None
    items: List[T] = field(default_factory=list)
    pagination: Optional[PagedResult] = None
    loading: bool = False    # a request is in flight
    error: Optional[str] = None
    loaded: bool = False     # at least one fetch succeeded
    attempted: bool = False  # at least one fetch was made


def error_message(exc: Exception) -> str:
    if isinstance(exc, ApiError):
        return exc.message or GENERIC_ERROR
    if isinstance(exc, ValidationError):
        return MALFORMED_DATA
    return str(exc) or GENERIC_ERROR


class EntityListController(Generic[T]):
    def __init__(
        self,
        noun: str,
        fetch_fn: FetchFn,
        *,
        title: str = "",
        create_fn: Optional[Callable[[Mapping[str, Any]], Any]] = None,
        edit_fn: Optional[Callable[[Any, Mapping[str, Any]], Any]] = None,
        delete_fn: Optional[Callable[[Any], Any]] = None,
        delete_all_fn: Optional[Callable[[], Any]] = None,
        per_page: int = 10,
        default_filter: Optional[str] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.noun = noun
        self.title = title or noun.rstrip("s").capitalize()
        self.fetch_fn = fetch_fn
        self.create_fn = create_fn
        self.edit_fn = edit_fn
        self.delete_fn = delete_fn
        self.delete_all_fn = delete_all_fn
        self.default_filter = default_filter
        self.notifier: Notifier = notifier or LogNotifier()
        self.state: ListState[T] = ListState(per_page=per_page, status_filter=default_filter)
        self._seq = 0

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------
    @property
    def uses_filter(self) -> bool:
        return self.default_filter is not None

    @property
    def latest_ticket(self) -> int:
        return self._seq

    def is_filtered(self) -> bool:
        if self.state.search_term.strip():
            return True
        return self.uses_filter and self.state.status_filter != self.default_filter

    def empty_message(self) -> Optional[str]:
        p = self.state.pagination
        if p is None or p.total_items > 0:
            return None
        if self.is_filtered():
            return f"No {self.noun} match your search or filter."
        return f"No {self.noun} yet."

    # ------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------
    def ensure_loaded(self) -> None:
        """Fetch-on-mount: runs once; failures wait for the user to retry."""
        if not self.state.attempted:
            self.fetch()

    def refresh(self) -> bool:
        return self.fetch()

    def fetch(self, page: Optional[int] = None, search: Optional[str] = None,
              status_filter: Optional[str] = None) -> bool:
        """Load one page. The query is committed to state only when it succeeds."""
        s = self.state
        page = s.page if page is None else page
        search = s.search_term if search is None else search
        status_filter = s.status_filter if status_filter is None else status_filter

        self._seq += 1
        ticket = self._seq
        s.loading = True
        s.attempted = True

        kwargs: Dict[str, Any] = {"page": page, "limit": s.per_page, "search": search}
        if self.uses_filter:
            kwargs["status"] = status_filter
        try:
            result = self.fetch_fn(**kwargs)
        except (ApiError, ValueError) as e:
            return self._apply_failure(ticket, error_message(e))
        return self._apply_success(ticket, result, search, status_filter)

    def _apply_success(self, ticket: int, result: PagedResult, search: str,
                       status_filter: Optional[str]) -> bool:
        if ticket != self._seq:
            logger.debug("Discarding stale %s response (ticket %d < %d)", self.noun, ticket, self._seq)
            return False
        s = self.state
        s.items = list(result.items)
        s.pagination = result
        s.page = result.page
        s.search_term = search
        s.status_filter = status_filter
        s.error = None
        s.loading = False
        s.loaded = True
        return True

    def _apply_failure(self, ticket: int, message: str) -> bool:
        if ticket != self._seq:
            logger.debug("Discarding stale %s failure (ticket %d < %d)", self.noun, ticket, self._seq)
            return False
        self.state.error = message
        self.state.loading = False
        logger.warning("Failed to load %s: %s", self.noun, message)
        self.notifier.notify("error", "Error", message)
        return False

    # ------------------------------------------------------------
    # User intents
    # ------------------------------------------------------------
    def on_search_submit(self, term: str) -> bool:
        return self.fetch(page=1, search=(term or "").strip())

    def on_filter_change(self, status_filter: Optional[str]) -> bool:
        chosen = status_filter if status_filter is not None else self.default_filter
        return self.fetch(page=1, status_filter=chosen)

    def on_page_change(self, delta: int) -> bool:
        p = self.state.pagination
        if p is None:
            return False
        target = p.page + delta
        if target < 1 or target > p.total_pages or target == p.page:
            return False
        return self.fetch(page=target)

    def on_create(self, payload: Mapping[str, Any]) -> bool:
        return self._mutate(self.create_fn, "create", (payload,), "Added!",
                            f"{self.title} has been added.")

    def on_edit(self, item_id: Any, payload: Mapping[str, Any]) -> bool:
        return self._mutate(self.edit_fn, "edit", (item_id, payload), "Updated!",
                            f"{self.title} has been updated.")

    def on_delete(self, item_id: Any) -> bool:
        return self._mutate(self.delete_fn, "delete", (item_id,), "Deleted!",
                            f"{self.title} has been deleted.")

    def on_delete_all(self) -> bool:
        return self._mutate(self.delete_all_fn, "delete all", (), "Deleted!",
                            f"All {self.noun} have been deleted.")

    def _mutate(self, fn, verb: str, args: tuple, title: str, default_message: str) -> bool:
        if fn is None:
            raise RuntimeError(f"The {self.noun} list does not support {verb}")
        try:
            res = fn(*args)
        except (ApiError, ValueError) as e:
            message = error_message(e)
            logger.warning("Failed to %s %s: %s", verb, self.title.lower(), message)
            self.notifier.notify("error", "Error", message)
            return False
        message = res.get("message") if isinstance(res, dict) else None
        self.notifier.notify("success", title, message or default_message)
        if self.fetch():
            self._step_back_if_past_end()
        return True

    def _step_back_if_past_end(self) -> None:
        # deleting the last row of the last page leaves us past the end
        p = self.state.pagination
        if p is not None and not p.items and p.page > 1 and p.total_pages < p.page:
            self.fetch(page=max(1, p.total_pages))
