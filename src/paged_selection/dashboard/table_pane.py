"""PageTable: Panel Tabulator showing the loaded page with checkbox selection."""

from __future__ import annotations

import pandas as pd
import panel as pn

from ..core.page import records_frame
from ..display_utils import format_inscriptions, prettify_name
from ..session.commands import ReplacePageSelection
from ..session.state import PageView, SelectionSession


_FORMATTERS = {"inscriptions": format_inscriptions}


class PageTable:
    """Bridges a Tabulator widget and a SelectionSession.

    Session → table: rows and their selected flags are pushed on every
    session revision. Table → session: a user selection change is reported
    as the full set of IDs selected on the page (ReplacePageSelection).
    Programmatic updates never echo back as user events.
    """

    def __init__(self, session: SelectionSession, columns: list[str]) -> None:
        self.session = session
        self.columns = [c for c in columns if c != "id"]
        self._syncing = False

        self.table = pn.widgets.Tabulator(
            self.build_frame(session.view()),
            selectable="checkbox",
            show_index=False,
            disabled=True,
            hidden_columns=["id"],
            titles={c: prettify_name(c) for c in self.columns},
            layout="fit_data_stretch",
            sizing_mode="stretch_width",
            min_height=200,
        )

        self.table.param.watch(self._on_table_selection, "selection")
        session.param.watch(self.refresh, ["revision", "loading"])
        self.refresh()

    def build_frame(self, view: PageView) -> pd.DataFrame:
        """DataFrame of the visible rows, in page order."""
        return records_frame(view.rows, self.columns, _FORMATTERS)

    def refresh(self, *events) -> None:
        """Push the session's current view into the table."""
        view = self.session.view()
        self._syncing = True
        try:
            self.table.value = self.build_frame(view)
            self.table.selection = view.selected_positions
            self.table.loading = view.loading
        finally:
            self._syncing = False

    def _on_table_selection(self, event) -> None:
        if self._syncing:
            return
        df = self.table.value
        positions = [i for i in event.new if 0 <= i < len(df)]
        ids = df["id"].iloc[positions].tolist()
        self.session.dispatch(ReplacePageSelection(ids))

    def panel(self) -> pn.widgets.Tabulator:
        return self.table
