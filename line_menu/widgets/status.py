"""Status bar widget showing match counts."""

from textual.reactive import reactive
from textual.widgets import Static


class MatchCounter(Static):
    """One-line bar: matched/total and key hints."""

    DEFAULT_CSS = """
    MatchCounter {
        dock: bottom;
        height: 1;
        background: $surface;
        color: $text-muted;
        padding: 0 1;
    }
    """

    matched = reactive(0)
    total = reactive(0)
    shown = reactive(0)

    def render(self) -> str:
        """Render the status bar."""
        counts = f"{self.matched}/{self.total}"
        if self.shown < self.matched:
            counts += f" (showing {self.shown})"
        return f"  {counts}  │  ↑↓ navigate  enter select  esc clear/quit"

    def update_counts(self, matched: int, total: int, shown: int) -> None:
        """Update from the latest rank pass."""
        self.matched = matched
        self.total = total
        self.shown = shown
