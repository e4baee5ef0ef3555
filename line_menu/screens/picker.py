"""Picker screen: fuzzy query over piped lines.

Every query edit re-ranks the whole candidate set and replaces the result
list. Large candidate sets are ranked on a worker thread; only the pass for
the latest query is ever displayed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from functools import partial

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.reactive import reactive
from textual.screen import Screen
from textual.widgets import Input, Static
from textual.worker import Worker, WorkerState

from ..models.match import RankedItem
from ..services.config import MenuConfig
from ..services.fuzzy import clamp_selection
from ..services.ranking import RankCoordinator, RankPass
from ..widgets.candidate_item import CandidateItem
from ..widgets.status import MatchCounter

logger = logging.getLogger(__name__)

RANK_WORKER = "rank"


class PickerScreen(Screen):
    """Searchable list of candidate lines."""

    BINDINGS = [
        Binding("escape", "clear_or_cancel", "Cancel"),
        Binding("up", "move_up", "Up", show=False),
        Binding("down", "move_down", "Down", show=False),
        Binding("ctrl+p", "move_up", "Up", show=False),
        Binding("ctrl+n", "move_down", "Down", show=False),
    ]

    selected_index: reactive[int] = reactive(0)

    def __init__(self, candidates: Sequence[str], config: MenuConfig) -> None:
        super().__init__()
        self._candidates = candidates
        self._config = config
        self._score_config = config.scoring.to_score_config()
        self._coordinator = RankCoordinator()
        self._items: list[RankedItem] = []
        self._updating = False  # Guard flag for DOM updates

    @property
    def items(self) -> list[RankedItem]:
        """The ranked list currently displayed."""
        return self._items

    @property
    def coordinator(self) -> RankCoordinator:
        return self._coordinator

    def compose(self) -> ComposeResult:
        with Vertical(id="picker"):
            yield Input(placeholder=self._config.effective_placeholder, id="query")
            yield VerticalScroll(id="results", classes="list-container")
        yield MatchCounter(id="counter")

    def on_mount(self) -> None:
        # Initial list: empty query, every candidate in input order
        self._request_rank("")
        self.query_one("#query", Input).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        """Re-rank as the user types."""
        self._request_rank(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.action_choose()

    def _request_rank(self, query: str) -> None:
        """Start a rank pass for query, in the background for large inputs."""
        generation = self._coordinator.begin(query)
        if len(self._candidates) < self._config.effective_background_threshold:
            self._apply_pass(self._coordinator.run(
                generation, query, self._candidates, self._score_config,
            ))
            return

        self.run_worker(
            partial(
                self._coordinator.run,
                generation,
                query,
                self._candidates,
                self._score_config,
            ),
            name=RANK_WORKER,
            group=RANK_WORKER,
            exclusive=True,
            thread=True,
        )

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        """Display background rank passes that are still current."""
        if event.worker.name != RANK_WORKER:
            return
        if event.state == WorkerState.SUCCESS and event.worker.result is not None:
            self._apply_pass(event.worker.result)
        elif event.state == WorkerState.ERROR:
            logger.error(f"Rank worker failed: {event.worker.error}")

    def _apply_pass(self, rank_pass: RankPass) -> None:
        """Replace the displayed list with a finished pass."""
        if not self._coordinator.complete(rank_pass):
            return
        self._items = rank_pass.items
        # Selection goes back to the top; the rebuild below marks it
        self.set_reactive(PickerScreen.selected_index, clamp_selection(0, len(self._items)) or 0)
        self._update_results()

    def _update_results(self) -> None:
        """Rebuild the results list."""
        self._updating = True
        try:
            results = self.query_one("#results", VerticalScroll)
            results.remove_children()
            results.scroll_home(animate=False)

            visible = self._items[: self._config.effective_max_visible]
            self.query_one("#counter", MatchCounter).update_counts(
                matched=len(self._items),
                total=len(self._candidates),
                shown=len(visible),
            )

            if not visible:
                results.mount(Static("no matches", classes="empty-list"))
                return

            rows = []
            for row, ranked in enumerate(visible):
                item = CandidateItem(ranked, row)
                if row == self.selected_index:
                    item.add_class("selected")
                rows.append(item)
            results.mount_all(rows)
        finally:
            self._updating = False

    def watch_selected_index(self, new_index: int) -> None:
        """Update visual selection."""
        if self._updating:
            return  # Skip during DOM rebuild
        for child in self.query(CandidateItem):
            if child.row == new_index:
                child.add_class("selected")
                child.scroll_visible()
            else:
                child.remove_class("selected")

    def selected_text(self) -> str | None:
        """The currently selected line, or None when nothing matches."""
        index = clamp_selection(self.selected_index, self._visible_length())
        if index is None:
            return None
        return self._items[index].text

    def _visible_length(self) -> int:
        return min(len(self._items), self._config.effective_max_visible)

    def action_move_down(self) -> None:
        """Move selection down."""
        count = self._visible_length()
        if count:
            self.selected_index = min(self.selected_index + 1, count - 1)

    def action_move_up(self) -> None:
        """Move selection up."""
        if self._items:
            self.selected_index = max(self.selected_index - 1, 0)

    def action_choose(self) -> None:
        """Exit with the selected line; no-op on an empty list."""
        text = self.selected_text()
        if text is None:
            return
        self.app.exit(text)

    def action_clear_or_cancel(self) -> None:
        """Clear a non-empty query, otherwise cancel the picker."""
        query_input = self.query_one("#query", Input)
        if query_input.value:
            query_input.value = ""
            return
        self.app.exit(None)

    def on_candidate_item_chosen(self, event: CandidateItem.Chosen) -> None:
        """Clicking a row chooses it."""
        self.selected_index = event.item.row
        self.action_choose()
