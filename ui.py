# ui.py
from typing import List, Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.message import Message
from textual.widgets import (Button, DataTable, Input, Label, Markdown, RichLog,
                             Static)

from models import NOT_AVAILABLE, AppState, Candidate, SeriesDetail

class SearchControls(Static):
    """Widget for the search input and button."""
    class SearchRequested(Message):
        def __init__(self, query: str) -> None:
            self.query = query
            super().__init__()

    def compose(self) -> ComposeResult:
        yield Label("Enter TV series name:")
        yield Input(placeholder="e.g., Breaking Bad", id="search-input")
        yield Button("Search", id="search-button", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.post_search_message()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.post_search_message()

    def post_search_message(self) -> None:
        self.post_message(self.SearchRequested(self.query_one(Input).value))

    def set_loading(self, is_loading: bool) -> None:
        button = self.query_one(Button)
        button.disabled = is_loading
        button.label = "Searching..." if is_loading else "Search"


class StatusLine(Static):
    """Shows the loading indicator or the current error."""
    def update_status(self, state: AppState) -> None:
        if state.is_loading:
            self.update(Text("Loading...", style="bold blue"))
        elif state.error:
            self.update(Text(state.error, style="bold red"))
        else:
            self.update("")


class DetailsPane(Static):
    """Widget to display the selected series and its recap."""
    def on_mount(self) -> None:
        self.update_details(None, None)

    def update_details(self, detail: Optional[SeriesDetail], recap: Optional[str]) -> None:
        if detail:
            poster = f"`{detail.poster}`" if detail.poster else "*No Image*"
            content = (
                f"## {detail.title}\n\n"
                f"- **First Aired**: {detail.year or NOT_AVAILABLE}\n"
                f"- **Genres**: {detail.genre or NOT_AVAILABLE}\n"
                f"- **Poster**: {poster}\n\n"
                f"{detail.plot or '*No plot available.*'}"
            )
            if recap:
                content += f"\n\n### AI-Generated Recap:\n\n> \"{recap}\""
        else:
            content = "## Details\n\n*Select a series to see its mood recap.*"
        self.query_one(Markdown).update(content)

    def compose(self) -> ComposeResult:
        yield Markdown()


class ResultsDisplay(DataTable):
    """Widget for the search results table."""
    class SeriesChosen(Message):
        def __init__(self, index: int) -> None:
            self.index = index
            super().__init__()

    def on_mount(self) -> None:
        self.add_columns("Title", "Year", "Poster")
        self.cursor_type = "row"

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if event.row_key.value is not None:
            self.post_message(self.SeriesChosen(int(event.row_key.value)))

    def update_results(self, results: List[Candidate]) -> None:
        self.clear()
        # Rows are keyed by position since the provider may repeat an id.
        for index, candidate in enumerate(results):
            poster = "Yes" if candidate.poster else "No Image"
            self.add_row(candidate.title, candidate.year or NOT_AVAILABLE, poster, key=str(index))
        if results:
            self.focus()


class LogPane(RichLog):
    """A dedicated widget for logging application events."""
    def add_message(self, message: str) -> None:
        self.write(message)
