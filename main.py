# main.py
import asyncio
import logging

try:
    import pyperclip
except ImportError:
    pyperclip = None

import httpx
from rich.markup import escape
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, Vertical, VerticalScroll
from textual.logging import TextualHandler
from textual.reactive import reactive
from textual.widgets import Footer, Header, Input

from config import Config, Credentials
from controller import SessionController
from models import AppState, Candidate
from services import OmdbService, RecapService
from ui import DetailsPane, LogPane, ResultsDisplay, SearchControls, StatusLine

class RecapperApp(App):
    BINDINGS = [
        ("d", "toggle_dark", "Toggle dark mode"),
        ("q", "quit", "Quit"),
        ("c", "copy_recap", "Copy Recap"),
        ("b", "back", "Back to Results"),
    ]
    CSS_PATH = "recapper.tcss"
    TITLE = "TV Series Mood Recapper"

    app_state = reactive(AppState(), always_update=True, init=False)

    def __init__(self, omdb_service: OmdbService, recap_service: RecapService):
        super().__init__()
        self.controller = SessionController(omdb_service, recap_service, publish=self.publish_state)

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="main-container"):
            yield SearchControls()
            yield StatusLine(id="status")
            with Horizontal(id="app-grid"):
                with Vertical(id="left-pane"):
                    yield ResultsDisplay(id="results-table")
                with VerticalScroll(id="right-pane"):
                    yield DetailsPane(id="details-pane")
            yield LogPane(id="log", wrap=True, highlight=True, markup=True)
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(Input).focus()
        log = self.query_one(LogPane)
        if pyperclip:
            log.add_message("[green]✅ Clipboard found.[/green]")
        else:
            log.add_message("[yellow]⚠️ 'pyperclip' not installed.[/yellow]")

    def publish_state(self, state: AppState) -> None:
        self.app_state = state

    def watch_app_state(self, old_state: AppState, new_state: AppState) -> None:
        results_table = self.query_one(ResultsDisplay)
        if old_state.results != new_state.results:
            results_table.update_results(new_state.results)
        results_table.display = new_state.shows_results
        if (old_state.selected, old_state.recap) != (new_state.selected, new_state.recap):
            self.query_one(DetailsPane).update_details(new_state.selected, new_state.recap)
        if new_state.selected and not old_state.selected:
            self.query_one("#right-pane").focus()
        self.query_one(SearchControls).set_loading(new_state.is_loading)
        self.query_one(StatusLine).update_status(new_state)

    def action_copy_recap(self) -> None:
        log = self.query_one(LogPane)
        if not pyperclip:
            log.add_message("[red]❌ 'pyperclip' not installed.[/red]")
            return
        state = self.app_state
        if state.selected and state.recap:
            pyperclip.copy(state.recap)
            log.add_message(f"📋 Copied recap for '[b]{escape(state.selected.title)}[/b]'.")
        else:
            log.add_message("[yellow]⚠️ No recap to copy.[/yellow]")

    def action_back(self) -> None:
        if self.app_state.selected is None:
            return
        self.workers.cancel_group(self, "session_worker")
        self.controller.back_to_results()
        self.query_one(ResultsDisplay).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        self.controller.set_query(event.value)

    def on_search_controls_search_requested(self, message: SearchControls.SearchRequested) -> None:
        if message.query.strip():
            self.query_one(LogPane).add_message(f"🔎 Searching for '{escape(message.query.strip())}'...")
        self.run_worker(self.perform_search(message.query), group="session_worker", exclusive=True)

    def on_results_display_series_chosen(self, message: ResultsDisplay.SeriesChosen) -> None:
        results = self.app_state.results
        if 0 <= message.index < len(results):
            self.run_worker(self.perform_select(results[message.index]),
                            group="session_worker", exclusive=True)

    async def perform_search(self, query: str) -> None:
        log = self.query_one(LogPane)
        state = await self.controller.search(query)
        if state.error:
            log.add_message(f"[red]❌ {escape(state.error)}[/red]")
        else:
            log.add_message(f"📺 Found {len(state.results)} series for '{escape(query.strip())}'.")

    async def perform_select(self, candidate: Candidate) -> None:
        log = self.query_one(LogPane)
        log.add_message(f"🎬 Fetching details for '[b]{escape(candidate.title)}[/b]'...")
        state = await self.controller.select_series(candidate.imdb_id)
        if state.error:
            log.add_message(f"[red]❌ {escape(state.error)}[/red]")
        elif state.recap:
            log.add_message(f"[green]✅ Recap ready for '[b]{escape(candidate.title)}[/b]'.[/green]")


async def run_app(config: Config, credentials: Credentials) -> None:
    async with httpx.AsyncClient(timeout=config.HTTP_TIMEOUT) as client:
        omdb_service = OmdbService(client, credentials.omdb_api_key, config.OMDB_BASE_URL)
        recap_service = RecapService(client, credentials.gemini_api_key, config.GEMINI_MODEL, config.GEMINI_BASE_URL)
        app = RecapperApp(omdb_service, recap_service)
        await app.run_async()


def main() -> None:
    app_config = Config()
    logging.basicConfig(
        level=app_config.LOG_LEVEL,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        handlers=[TextualHandler()],
    )
    asyncio.run(run_app(app_config, Credentials()))


if __name__ == "__main__":
    main()
