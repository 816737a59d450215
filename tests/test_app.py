"""Drives the Textual app headlessly against stubbed HTTP responses."""

import pytest
from textual.widgets import Button, Input

from main import RecapperApp
from services import OmdbService, RecapService
from ui import ResultsDisplay

SEARCH_PAYLOAD = {
    "Search": [
        {"Title": "Breaking Bad", "Year": "2008–2013", "imdbID": "tt0903747", "Poster": "N/A"},
    ],
    "Response": "True",
}

DETAIL_PAYLOAD = {
    "Title": "Breaking Bad",
    "Year": "2008–2013",
    "Genre": "Crime, Drama, Thriller",
    "Plot": "A chemistry teacher turns to crime.",
    "Poster": "N/A",
    "imdbID": "tt0903747",
    "Response": "True",
}

RECAP_PAYLOAD = {"candidates": [{"content": {"parts": [{"text": "Walter cooks. Jesse helps. Chaos."}]}}]}


@pytest.fixture
def app(client):
    omdb = OmdbService(client, "omdb-key", "https://www.omdbapi.com/")
    recapper = RecapService(client, "gemini-key", "gemini-2.0-flash", "https://example.com/v1beta")
    return RecapperApp(omdb, recapper)


async def settle(app, pilot):
    await pilot.pause()
    await app.workers.wait_for_complete()
    await pilot.pause()


@pytest.mark.asyncio
async def test_blank_search_reports_error_without_request(app, client):
    async with app.run_test() as pilot:
        await pilot.press("enter")
        await settle(app, pilot)

        assert app.app_state.error == "Please enter a TV series name."
        assert app.app_state.is_loading is False
        client.get.assert_not_called()


@pytest.mark.asyncio
async def test_search_select_and_recap(app, client, make_response):
    client.get.side_effect = [make_response(SEARCH_PAYLOAD), make_response(DETAIL_PAYLOAD)]
    client.post.return_value = make_response(RECAP_PAYLOAD)

    async with app.run_test() as pilot:
        app.query_one(Input).value = "Breaking Bad"
        await pilot.press("enter")
        await settle(app, pilot)

        table = app.query_one(ResultsDisplay)
        assert table.row_count == 1
        assert app.app_state.query == "Breaking Bad"

        table.focus()
        await pilot.pause()
        await pilot.press("enter")
        await settle(app, pilot)

        state = app.app_state
        assert state.selected is not None
        assert state.selected.title == "Breaking Bad"
        assert state.recap == "Walter cooks. Jesse helps. Chaos."
        assert state.is_loading is False
        assert table.display is False
        assert str(app.query_one(Button).label) == "Search"
        client.post.assert_called_once()
        prompt = client.post.call_args.kwargs["json"]["contents"][0]["parts"][0]["text"]
        assert DETAIL_PAYLOAD["Plot"] in prompt

        app.set_focus(None)
        await pilot.press("b")
        await settle(app, pilot)

        assert app.app_state.selected is None
        assert table.display is True
