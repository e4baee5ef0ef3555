"""A single candidate row in the result list."""

from textual.message import Message
from textual.widgets import Static

from ..models.match import RankedItem


class CandidateItem(Static):
    """One ranked line; clicking it chooses it."""

    class Chosen(Message):
        """Posted when the row is clicked."""

        def __init__(self, item: "CandidateItem") -> None:
            super().__init__()
            self.item = item

    def __init__(self, ranked: RankedItem, row: int, **kwargs) -> None:
        # Input lines are arbitrary text, never markup
        super().__init__(ranked.text, markup=False, **kwargs)
        self.ranked = ranked
        self.row = row
        self.add_class("list-row")

    def on_click(self) -> None:
        self.post_message(self.Chosen(self))
