"""Tests for SelectionSession: rule lifecycle, commands, page loading races."""

import asyncio

import pytest

from paged_selection.core.evaluator import CheckboxState
from paged_selection.core.page import Page
from paged_selection.core.rule import FirstN
from paged_selection.session.commands import (
    ApplyRule,
    ChangePage,
    DeselectAllOnPage,
    ReplacePageSelection,
    SelectAllOnPage,
    ToggleSelectAll,
)
from paged_selection.session.notices import Notice, NoticeChannel
from paged_selection.session.state import SelectionSession
from paged_selection.source.base import PagedDataSource, PageFetchError

from conftest import PAGE_SIZE, ControlledSource, make_page, row_id, settle


class FailingSource(PagedDataSource):
    def __init__(self, good_pages=()) -> None:
        self.good_pages = set(good_pages)

    async def fetch_page(self, page_number, page_size):
        if page_number in self.good_pages:
            return make_page(page_number, page_size)
        raise PageFetchError(page_number, "HTTP 500")


@pytest.fixture
def session(frame_source):
    return SelectionSession(frame_source, page_size=PAGE_SIZE)


class TestApplyRule:
    def test_apply_sets_rule(self, session):
        assert session.apply_rule(5)
        assert session.rule == FirstN(5)

    def test_reapply_identical_rule_still_resets(self, session):
        session.apply_rule(5)
        session.overrides = session.overrides.exclude(["a"]).include(["b"])
        assert session.apply_rule(5)
        assert session.overrides.is_empty

    def test_new_rule_resets(self, session):
        session.apply_rule(5)
        session.overrides = session.overrides.exclude(["a"])
        session.apply_rule(7)
        assert session.rule == FirstN(7)
        assert session.overrides.is_empty

    @pytest.mark.parametrize("bad", [None, 0, -4, "abc", 1.5])
    def test_invalid_input_changes_nothing(self, session, bad):
        session.apply_rule(5)
        session.overrides = session.overrides.exclude(["a"])
        before = (session.rule, session.overrides, session.revision)

        assert not session.apply_rule(bad)
        assert (session.rule, session.overrides, session.revision) == before

    def test_invalid_input_publishes_warning(self, session):
        session.apply_rule(0)
        notice = session.notices.latest
        assert notice.level == "warning"
        assert notice.summary == "Invalid input"

    def test_valid_input_publishes_info(self, session):
        session.apply_rule("5")
        notice = session.notices.latest
        assert notice.level == "info"
        assert "First 5 rows" in notice.detail

    def test_clear_rule(self, session):
        session.apply_rule(5)
        session.overrides = session.overrides.include(["b"])
        assert session.apply_rule(None, allow_clear=True)
        assert session.rule is None
        assert session.overrides.is_empty

    def test_none_without_allow_clear_rejected(self, session):
        session.apply_rule(5)
        assert not session.apply_rule(None)
        assert session.rule == FirstN(5)


class TestDispatch:
    @pytest.mark.asyncio
    async def test_commands_route(self, session):
        await session.load_page(1)
        session.dispatch(ApplyRule(5))

        session.dispatch(SelectAllOnPage())
        assert session.view().checkbox == CheckboxState.CHECKED

        session.dispatch(DeselectAllOnPage())
        assert session.view().checkbox == CheckboxState.UNCHECKED

        session.dispatch(ToggleSelectAll(True))
        assert session.view().checkbox == CheckboxState.CHECKED

        session.dispatch(ReplacePageSelection([row_id(0)]))
        assert session.view().selected_positions == [0]

    def test_change_page_needs_handle(self, session):
        with pytest.raises(TypeError, match="handle"):
            session.dispatch(ChangePage(2))

    def test_unknown_command(self, session):
        with pytest.raises(TypeError, match="Unknown command"):
            session.dispatch("select everything")

    @pytest.mark.asyncio
    async def test_handle_change_page(self, session):
        assert await session.handle(ChangePage(2))
        assert session.page.page_number == 2

    @pytest.mark.asyncio
    async def test_handle_sync_command(self, session):
        assert await session.handle(ApplyRule(3))
        assert session.rule == FirstN(3)

    def test_replace_normalizes_ids(self):
        cmd = ReplacePageSelection([1, 2, 2])
        assert cmd.selected_ids == frozenset({1, 2})

    @pytest.mark.asyncio
    async def test_mutations_bump_revision(self, session):
        await session.load_page(1)
        rev = session.revision
        session.dispatch(ToggleSelectAll(True))
        assert session.revision == rev + 1

    @pytest.mark.asyncio
    async def test_noop_mutation_keeps_revision(self, session):
        await session.load_page(1)
        session.dispatch(DeselectAllOnPage())
        rev = session.revision
        session.dispatch(DeselectAllOnPage())
        assert session.revision == rev

    @pytest.mark.asyncio
    async def test_set_row_selected_unknown_row(self, session):
        await session.load_page(1)
        with pytest.raises(KeyError):
            session.set_row_selected("missing", True)

    def test_mutation_without_page_is_noop(self, session):
        session.apply_rule(5)
        session.dispatch(SelectAllOnPage())
        assert session.overrides.is_empty


class TestPageLoading:
    @pytest.mark.asyncio
    async def test_load_sets_total_and_page(self, session):
        assert await session.load_page(1)
        assert session.total_records == 40
        assert session.page_count == 4
        assert not session.loading
        assert len(session.rows) == 12

    @pytest.mark.asyncio
    async def test_invalid_page_number(self, session):
        with pytest.raises(ValueError):
            await session.load_page(0)

    @pytest.mark.asyncio
    async def test_next_and_previous_are_bounded(self, session):
        assert not await session.previous_page()
        await session.load_page(4)
        assert not await session.next_page()
        assert await session.previous_page()
        assert session.current_page == 3
        assert await session.next_page()
        assert session.current_page == 4

    @pytest.mark.asyncio
    async def test_stale_response_discarded(self):
        source = ControlledSource()
        session = SelectionSession(source, page_size=PAGE_SIZE)

        first = asyncio.ensure_future(session.load_page(1))
        await settle()
        second = asyncio.ensure_future(session.load_page(2))
        await settle()

        # Page 2 resolves first, then the slow page 1 response arrives
        source.release(2)
        assert await second is True
        source.release(1)
        assert await first is False

        assert session.page.page_number == 2
        assert session.current_page == 2
        assert [r.global_position for r in session.rows] == list(range(12, 24))
        assert not session.loading

    @pytest.mark.asyncio
    async def test_stale_response_does_not_clear_loading_of_newer(self):
        source = ControlledSource()
        session = SelectionSession(source, page_size=PAGE_SIZE)

        first = asyncio.ensure_future(session.load_page(1))
        await settle()
        second = asyncio.ensure_future(session.load_page(2))
        await settle()

        source.release(1)
        assert await first is False
        assert session.loading
        assert session.page is None

        source.release(2)
        assert await second is True
        assert not session.loading

    @pytest.mark.asyncio
    async def test_stale_failure_is_silent(self):
        source = ControlledSource()
        session = SelectionSession(source, page_size=PAGE_SIZE)

        first = asyncio.ensure_future(session.load_page(1))
        await settle()
        second = asyncio.ensure_future(session.load_page(2))
        await settle()

        source.release(2)
        await second
        source.fail(1)
        assert await first is False
        assert session.last_error == ""
        assert session.notices.latest is None
        assert len(session.rows) == 12

    @pytest.mark.asyncio
    async def test_failure_clears_rows_keeps_total(self):
        session = SelectionSession(FailingSource(good_pages={1}), page_size=PAGE_SIZE)
        session.apply_rule(5)
        await session.load_page(1)
        assert session.total_selected == 5

        assert not await session.load_page(2)
        assert session.rows == ()
        assert session.total_records == 40
        assert session.total_selected == 5
        assert not session.loading
        assert "HTTP 500" in session.last_error
        assert session.notices.latest.level == "error"
        assert session.view().checkbox == CheckboxState.UNCHECKED

    @pytest.mark.asyncio
    async def test_retry_after_failure(self):
        source = FailingSource()
        session = SelectionSession(source, page_size=PAGE_SIZE)
        assert not await session.load_page(1)
        source.good_pages.add(1)
        assert await session.reload()
        assert session.last_error == ""
        assert len(session.rows) == 12


class TestView:
    @pytest.mark.asyncio
    async def test_view_snapshot(self, session):
        session.apply_rule(3)
        await session.load_page(1)
        view = session.view()
        assert view.page_number == 1
        assert view.page_count == 4
        assert view.total_records == 40
        assert view.total_selected == 3
        assert view.selected_positions == [0, 1, 2]
        assert view.rows[0].record["title"] == "Artwork 0"

    def test_view_before_load(self, session):
        view = session.view()
        assert view.rows == ()
        assert view.page_number == 1
        assert view.checkbox == CheckboxState.UNCHECKED
        assert view.total_selected == 0


class TestNotices:
    def test_subscribe(self):
        channel = NoticeChannel()
        received = []
        channel.subscribe(received.append)
        channel.warning("Invalid input", "bad")
        assert received == [Notice("warning", "Invalid input", "bad")]

    def test_history_is_bounded(self):
        channel = NoticeChannel(max_history=2)
        for i in range(5):
            channel.info(str(i))
        assert [n.summary for n in channel.history] == ["3", "4"]

    def test_session_uses_injected_channel(self, frame_source):
        channel = NoticeChannel()
        session = SelectionSession(frame_source, notices=channel)
        session.apply_rule(-1)
        assert channel.latest.level == "warning"
