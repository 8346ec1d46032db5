"""BrowserApp: assembles the Panel template and serves the paged table."""

from __future__ import annotations

import asyncio
import logging

import panel as pn

from ..config import BrowserConfig
from ..session.commands import ApplyRule, ToggleSelectAll
from ..session.notices import Notice
from ..session.state import SelectionSession
from ..source.artic import ArtworkSource
from ..source.base import PagedDataSource
from .table_pane import PageTable


logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Custom CSS
# ---------------------------------------------------------------------------

_BROWSER_CSS = """
:root, :host {
  --design-primary-color: #1a73e8;
  --panel-primary-color: #1a73e8;
  --mdc-theme-primary: #1a73e8;
}

/* ---- Pill buttons ---- */
.bk-btn-primary {
  border-radius: 24px !important;
  background-color: #1a73e8 !important;
  border-color: #1a73e8 !important;
  text-transform: none !important;
}

/* ---- Selection summary line ---- */
.ps-summary {
  font-size: 13px !important;
  color: #5f6368 !important;
}
"""

_CHECKBOX_LABELS = {
    "checked": "all rows on this page selected",
    "indeterminate": "some rows on this page selected",
    "unchecked": "no rows on this page selected",
}


class BrowserApp:
    """Paged collection browser with cross-page "first N" selection.

    Assembles a Panel MaterialTemplate with:
    - Sidebar: rule input, page navigation, page select/clear buttons
    - Main area: selected-count summary + the current page table
    """

    def __init__(
        self,
        config: BrowserConfig | None = None,
        source: PagedDataSource | None = None,
    ) -> None:
        pn.extension("tabulator", notifications=True, sizing_mode="stretch_width")
        if _BROWSER_CSS not in pn.config.raw_css:
            pn.config.raw_css.append(_BROWSER_CSS)

        self.config = config if config is not None else BrowserConfig.from_env()
        # A source created here belongs to this browser session and is closed with it
        self._owns_source = source is None
        self.source = source if source is not None else ArtworkSource(self.config)

        # Centralized state
        self.session = SelectionSession(self.source, page_size=self.config.page_size)
        self.session.notices.subscribe(self._show_notice)

        self.page_table = PageTable(self.session, self.config.fields)
        self._build_widgets()

        self.session.param.watch(
            self._update_summary, ["revision", "loading", "current_page"],
        )
        self._update_summary()

    def _build_widgets(self) -> None:
        self.rule_input = pn.widgets.IntInput(
            name="Rows to select", value=None, start=1, placeholder="e.g., 5",
        )
        self.apply_button = pn.widgets.Button(name="Select", button_type="primary")
        self.apply_button.on_click(self._on_apply_rule)

        self.prev_button = pn.widgets.Button(name="‹ Previous")
        self.next_button = pn.widgets.Button(name="Next ›")
        self.prev_button.on_click(self._on_previous)
        self.next_button.on_click(self._on_next)

        self.select_page_button = pn.widgets.Button(name="Select page")
        self.clear_page_button = pn.widgets.Button(name="Clear page")
        self.select_page_button.on_click(
            lambda event: self.session.dispatch(ToggleSelectAll(True))
        )
        self.clear_page_button.on_click(
            lambda event: self.session.dispatch(ToggleSelectAll(False))
        )

        self.summary = pn.pane.Markdown("", css_classes=["ps-summary"], margin=(0, 10))

    # --- Callbacks ---

    def _on_apply_rule(self, event) -> None:
        if self.session.dispatch(ApplyRule(self.rule_input.value)):
            self.rule_input.value = None

    async def _on_previous(self, event) -> None:
        await self.session.previous_page()

    async def _on_next(self, event) -> None:
        await self.session.next_page()

    async def _load_first_page(self) -> None:
        await self.session.load_page(1)

    async def aclose(self) -> None:
        """Release the data source if this app created it."""
        if self._owns_source:
            await self.source.aclose()

    def _on_session_destroyed(self, session_context) -> asyncio.Future:
        return asyncio.ensure_future(self.aclose())

    def _show_notice(self, notice: Notice) -> None:
        notifications = pn.state.notifications
        if notifications is None:
            return
        message = f"{notice.summary}: {notice.detail}" if notice.detail else notice.summary
        show = getattr(notifications, notice.level, notifications.info)
        show(message, duration=4000)

    def _update_summary(self, *events) -> None:
        view = self.session.view()
        # The loaded page lags behind the requested one until the fetch lands
        page_number = self.session.current_page if view.loading else view.page_number
        self.summary.object = (
            f"**Selected: {view.total_selected} rows** · "
            f"page {page_number} of {view.page_count} "
            f"({view.total_records} records) · "
            f"{_CHECKBOX_LABELS[view.checkbox.value]}"
            + (" · loading…" if view.loading else "")
        )
        self.prev_button.disabled = view.loading or self.session.current_page <= 1
        self.next_button.disabled = (
            view.loading or self.session.current_page >= view.page_count
        )

    # --- Layout ---

    def build_sidebar(self) -> pn.Column:
        return pn.Column(
            pn.pane.Markdown("### Select multiple rows"),
            pn.pane.Markdown("Enter number of rows to select across all pages."),
            self.rule_input,
            self.apply_button,
            pn.layout.Divider(),
            pn.Row(self.prev_button, self.next_button),
            pn.Row(self.select_page_button, self.clear_page_button),
        )

    def build_template(self) -> pn.template.MaterialTemplate:
        """Build the Panel MaterialTemplate layout and schedule the first load."""
        template = pn.template.MaterialTemplate(
            title="Art Institute of Chicago - Artworks",
            sidebar=[self.build_sidebar()],
            sidebar_width=260,
            header_background="#fafafa",
            header_color="#202124",
        )
        template.main.append(
            pn.Column(self.summary, self.page_table.panel(), sizing_mode="stretch_width")
        )
        pn.state.onload(self._load_first_page)
        pn.state.on_session_destroyed(self._on_session_destroyed)
        return template


def serve(
    config: BrowserConfig | None = None,
    source: PagedDataSource | None = None,
    port: int = 0,
    show: bool = True,
    **kwargs,
) -> None:
    """Start the Panel server; every browser session gets its own SelectionSession.

    Parameters
    ----------
    config : BrowserConfig, optional
        Defaults to ``BrowserConfig.from_env()``.
    source : PagedDataSource, optional
        Shared by all sessions and left open for the caller to close. When
        omitted, every session opens its own ArtworkSource and closes it when
        the session is destroyed.
    port : int
        Port number. 0 = auto-assign.
    show : bool
        Whether to open the browser automatically.
    **kwargs
        Additional keyword arguments passed to pn.serve().
    """
    config = config if config is not None else BrowserConfig.from_env()
    source_name = type(source).__name__ if source is not None else ArtworkSource.__name__
    logger.info("Serving %s with page size %d", source_name, config.page_size)

    pn.serve(
        lambda: BrowserApp(config=config, source=source).build_template(),
        port=port or 0,
        show=show,
        title="paged-selection",
        **kwargs,
    )
