"""SelectionSession: the single actor that owns rule, overrides and the loaded page."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Hashable, Iterable, Mapping

import param

from ..core.evaluator import (
    CheckboxState,
    PageSelectionSummary,
    checkbox_state,
    is_selected,
    total_selected,
)
from ..core.mutator import (
    deselect_all_on_page,
    replace_page_selection,
    select_all_on_page,
    set_row_selected,
    toggle_page,
)
from ..core.overrides import OverrideSets
from ..core.page import Page, Row
from ..core.paging import page_count
from ..core.rule import FirstN, InvalidRule, parse_rule_count
from ..source.base import PagedDataSource, PageFetchError
from .commands import (
    ApplyRule,
    ChangePage,
    DeselectAllOnPage,
    ReplacePageSelection,
    SelectAllOnPage,
    ToggleSelectAll,
)
from .notices import NoticeChannel


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowView:
    """What the rendering surface needs for one row."""

    id: Hashable
    global_position: int
    selected: bool
    record: Mapping = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class PageView:
    """Snapshot of everything the rendering surface displays."""

    page_number: int
    page_count: int
    rows: tuple[RowView, ...]
    checkbox: CheckboxState
    total_selected: int
    total_records: int
    loading: bool = False

    @property
    def selected_positions(self) -> list[int]:
        """In-page positions of the selected rows."""
        return [i for i, r in enumerate(self.rows) if r.selected]


class SelectionSession(param.Parameterized):
    """Owns the selection rule, the override sets and the loaded page.

    Selection commands are synchronous and run to completion. Loading a
    page is the only awaiting operation; each request gets a token and a
    completion is applied only if its token is still the latest one.

    ``revision`` is bumped after every state change so a rendering surface
    can watch a single parameter.
    """

    page_size = param.Integer(default=12, bounds=(1, None))
    current_page = param.Integer(default=1, bounds=(1, None))

    rule = param.ClassSelector(class_=FirstN, default=None, allow_None=True)
    overrides = param.ClassSelector(
        class_=OverrideSets, default=OverrideSets(), instantiate=False,
    )
    page = param.ClassSelector(class_=Page, default=None, allow_None=True)

    # Last known collection size; kept across failed fetches
    total_records = param.Integer(default=0, bounds=(0, None))

    loading = param.Boolean(default=False)
    last_error = param.String(default="")
    revision = param.Integer(default=0)

    def __init__(
        self,
        source: PagedDataSource,
        notices: NoticeChannel | None = None,
        **params,
    ) -> None:
        super().__init__(**params)
        self._source = source
        self._request_token = 0
        self.notices = notices if notices is not None else NoticeChannel()

    @property
    def source(self) -> PagedDataSource:
        return self._source

    @property
    def rows(self) -> tuple[Row, ...]:
        return self.page.rows if self.page is not None else ()

    @property
    def page_count(self) -> int:
        return page_count(self.total_records, self.page_size)

    def _commit(self, **changes) -> None:
        self.param.update(revision=self.revision + 1, **changes)

    # --- Rule ---

    def apply_rule(self, n: Any, allow_clear: bool = False) -> bool:
        """Replace the rule with "first n" and reset all overrides.

        Reapplying an identical rule still resets. Invalid input is rejected
        with a warning notice and leaves every piece of state untouched.
        Returns True when the rule was applied.
        """
        if n is None and allow_clear:
            self._commit(rule=None, overrides=self.overrides.cleared())
            logger.info("Selection rule cleared")
            self.notices.info("Selection cleared", "No rows are selected by rule.")
            return True
        try:
            rule = FirstN(parse_rule_count(n))
        except InvalidRule as exc:
            logger.info("Rejected selection rule input %r: %s", n, exc)
            self.notices.warning("Invalid input", str(exc))
            return False

        self._commit(rule=rule, overrides=self.overrides.cleared())
        logger.info("Applied selection rule: first %d rows", rule.n)
        self.notices.info("Selection rule applied", rule.describe())
        return True

    # --- Selection mutations (current page only) ---

    def _set_overrides(self, overrides: OverrideSets) -> None:
        if overrides is not self.overrides:
            self._commit(overrides=overrides)

    def replace_page_selection(self, selected_ids: Iterable[Hashable]) -> None:
        self._set_overrides(
            replace_page_selection(self.rule, self.overrides, self.rows, selected_ids)
        )

    def select_all_on_page(self) -> None:
        self._set_overrides(select_all_on_page(self.rule, self.overrides, self.rows))

    def deselect_all_on_page(self) -> None:
        self._set_overrides(deselect_all_on_page(self.rule, self.overrides, self.rows))

    def toggle_select_all(self, checked: bool) -> None:
        self._set_overrides(toggle_page(self.rule, self.overrides, self.rows, checked))

    def set_row_selected(self, row_id: Hashable, selected: bool) -> None:
        """Toggle one loaded row. Unknown IDs raise KeyError."""
        for row in self.rows:
            if row.id == row_id:
                self._set_overrides(
                    set_row_selected(self.rule, self.overrides, row, selected)
                )
                return
        raise KeyError(f"Row {row_id!r} is not on the loaded page.")

    # --- Commands ---

    def dispatch(self, command) -> bool:
        """Apply a synchronous command. Returns False if it was rejected."""
        if isinstance(command, ApplyRule):
            return self.apply_rule(command.n)
        if isinstance(command, ReplacePageSelection):
            self.replace_page_selection(command.selected_ids)
        elif isinstance(command, SelectAllOnPage):
            self.select_all_on_page()
        elif isinstance(command, DeselectAllOnPage):
            self.deselect_all_on_page()
        elif isinstance(command, ToggleSelectAll):
            self.toggle_select_all(command.checked)
        elif isinstance(command, ChangePage):
            raise TypeError("ChangePage loads data; use `await session.handle(...)`.")
        else:
            raise TypeError(f"Unknown command: {type(command).__name__}")
        return True

    async def handle(self, command) -> bool:
        """Apply any command, awaiting page loads."""
        if isinstance(command, ChangePage):
            return await self.load_page(command.page_number)
        return self.dispatch(command)

    # --- Paging ---

    async def load_page(self, page_number: int) -> bool:
        """Fetch a page and make it current.

        Returns True if the fetched page was applied. A completion whose
        request has been superseded is dropped without touching state.
        """
        if page_number < 1:
            raise ValueError(f"page_number must be >= 1, got {page_number}.")

        self._request_token += 1
        token = self._request_token
        self.param.update(current_page=page_number, loading=True)

        try:
            page = await self._source.fetch_page(page_number, self.page_size)
        except PageFetchError as exc:
            if token != self._request_token:
                logger.debug("Ignoring failure of superseded request for page %d", page_number)
                return False
            logger.warning("%s", exc)
            self._commit(
                page=Page.empty(page_number, self.page_size, self.total_records),
                loading=False,
                last_error=str(exc),
            )
            self.notices.error("Could not load page", str(exc))
            return False
        except BaseException:
            if token == self._request_token:
                self.loading = False
            raise

        if token != self._request_token:
            logger.debug("Discarding stale response for page %d", page_number)
            return False

        self._commit(
            page=page,
            total_records=page.total_records,
            loading=False,
            last_error="",
        )
        logger.debug("Loaded page %d (%d rows, %d total)",
                     page_number, len(page), page.total_records)
        return True

    async def next_page(self) -> bool:
        if self.current_page >= self.page_count:
            return False
        return await self.load_page(self.current_page + 1)

    async def previous_page(self) -> bool:
        if self.current_page <= 1:
            return False
        return await self.load_page(self.current_page - 1)

    async def reload(self) -> bool:
        return await self.load_page(self.current_page)

    # --- Derived state (recomputed on every read) ---

    def is_selected(self, row_id: Hashable, position: int) -> bool:
        return is_selected(self.rule, self.overrides, row_id, position)

    @property
    def total_selected(self) -> int:
        return total_selected(self.rule, self.overrides, self.total_records)

    @property
    def checkbox(self) -> CheckboxState:
        return checkbox_state(self.rule, self.overrides, self.rows)

    def view(self) -> PageView:
        rows = tuple(
            RowView(
                id=row.id,
                global_position=row.global_position,
                selected=is_selected(self.rule, self.overrides, row.id, row.global_position),
                record=row.record,
            )
            for row in self.rows
        )
        summary = PageSelectionSummary(
            n_rows=len(rows), n_selected=sum(r.selected for r in rows),
        )
        return PageView(
            page_number=self.page.page_number if self.page is not None else self.current_page,
            page_count=self.page_count,
            rows=rows,
            checkbox=summary.state,
            total_selected=self.total_selected,
            total_records=self.total_records,
            loading=self.loading,
        )

    def __repr__(self) -> str:
        return (
            f"SelectionSession(page={self.current_page}, rule={self.rule}, "
            f"overrides={self.overrides!r}, total={self.total_records})"
        )
