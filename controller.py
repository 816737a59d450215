# controller.py
"""Session flow: search, then detail fetch, then recap generation.

The controller owns the single ``AppState`` of a session. Each transition
builds a new state and hands it to ``publish``; the Textual app assigns it to
its reactive so the widgets redraw. Every search starts a new generation and
results that arrive for an older generation are dropped.
"""
import logging
from dataclasses import replace
from typing import Callable, Optional

from errors import DetailError, EmptyQuery, RecapError, SearchError
from models import AppState, SeriesDetail
from services import OmdbService, RecapService

logger = logging.getLogger(__name__)


class SessionController:
    """Drives the search -> detail -> recap flow for one session."""
    def __init__(
        self,
        omdb: OmdbService,
        recapper: RecapService,
        publish: Optional[Callable[[AppState], None]] = None,
    ):
        self.omdb = omdb
        self.recapper = recapper
        self._publish = publish or (lambda state: None)
        self.state = AppState()

    def _update(self, generation: int, **changes) -> bool:
        """Applies changes unless a newer session has replaced this one."""
        if generation != self.state.generation:
            logger.debug("Dropping update from stale session %d", generation)
            return False
        new_state = replace(self.state, **changes)
        if new_state != self.state:
            self.state = new_state
            self._publish(new_state)
        return True

    def set_query(self, query: str) -> AppState:
        self._update(self.state.generation, query=query)
        return self.state

    def back_to_results(self) -> AppState:
        """Leaves the detail view and abandons any outstanding detail or recap."""
        self.state = replace(
            self.state, selected=None, recap=None, error=None, is_loading=False,
            generation=self.state.generation + 1,
        )
        self._publish(self.state)
        return self.state

    async def search(self, query: str) -> AppState:
        """Starts a fresh session and searches for series matching the query."""
        generation = self.state.generation + 1
        self.state = AppState(query=query, is_loading=True, generation=generation)
        self._publish(self.state)

        changes = {}
        try:
            changes["results"] = await self.omdb.search(query)
        except (EmptyQuery, SearchError) as e:
            logger.info("Search for %r failed: %s", query, e.message)
            changes["error"] = e.message
        finally:
            self._update(generation, is_loading=False, **changes)
        return self.state

    async def select_series(self, imdb_id: str) -> AppState:
        """Fetches details for a search hit, then generates its recap."""
        generation = self.state.generation
        self._update(generation, is_loading=True, error=None, recap=None)

        try:
            try:
                detail = await self.omdb.fetch_detail(imdb_id)
            except DetailError as e:
                logger.info("Detail fetch for %s failed: %s", imdb_id, e.message)
                self._update(generation, error=e.message, is_loading=False)
                return self.state

            if self._update(generation, selected=detail):
                await self.generate_recap(detail)
        finally:
            self._update(generation, is_loading=False)
        return self.state

    async def generate_recap(self, detail: SeriesDetail) -> AppState:
        generation = self.state.generation
        self._update(generation, is_loading=True, error=None)

        changes = {}
        try:
            changes["recap"] = await self.recapper.generate(detail)
        except RecapError as e:
            logger.info("Recap for %s failed: %s", detail.title, e.message)
            changes["error"] = f"Failed to generate recap: {e.message}"
        finally:
            self._update(generation, is_loading=False, **changes)
        return self.state
