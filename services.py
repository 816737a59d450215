# services.py
import logging
import random
from typing import Any, Callable, List, Optional, Sequence

import httpx

from errors import (DetailError, EmptyQuery, RecapNoContent, RecapTransportError,
                    SearchError)
from models import NOT_AVAILABLE, Candidate, SeriesDetail

logger = logging.getLogger(__name__)

TONES = ("funny and sarcastic", "emotional and reflective")

RECAP_PROMPT = """Generate a 3-sentence recap for the TV series "{title}".
The recap should be {tone}.
Here's some information about the series:
Overview: {overview}
Genres: {genres}
First Air Date: {first_air_date}

Recap for "{title}":"""


def _describe(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


def _optional(raw: dict, key: str) -> Optional[str]:
    """Returns a provider field, treating blanks and the "N/A" sentinel as absent."""
    value = raw.get(key)
    if not value or value == NOT_AVAILABLE:
        return None
    return value


class OmdbService:
    """A service to handle interactions with the OMDb metadata API."""
    def __init__(self, client: httpx.AsyncClient, api_key: str, base_url: str):
        self.client = client
        self.api_key = api_key
        self.base_url = base_url

    async def search(self, query: str) -> List[Candidate]:
        """Searches for TV series by name, returning hits in provider order."""
        query = query.strip()
        if not query:
            raise EmptyQuery()

        params = {"s": query, "type": "series", "apikey": self.api_key}
        data = await self._get_json(params, "Failed to search TV series", SearchError)

        hits = data.get("Search") or []
        if not isinstance(hits, list) or not all(isinstance(item, dict) for item in hits):
            logger.error("OMDb search for %r returned malformed hits", query)
            raise SearchError("Failed to search TV series: unexpected response")
        if data.get("Response") == "True" and hits:
            return [self._parse_candidate(item) for item in hits]

        logger.warning("OMDb search for %r returned no results: %s", query, data.get("Error"))
        raise SearchError(data.get("Error") or f'No TV series found for "{query}".')

    async def fetch_detail(self, imdb_id: str) -> SeriesDetail:
        """Fetches the full-plot record for one series."""
        params = {"i": imdb_id, "plot": "full", "apikey": self.api_key}
        data = await self._get_json(params, "Failed to fetch series details", DetailError)

        if data.get("Response") != "True":
            logger.warning("OMDb detail lookup for %s failed: %s", imdb_id, data.get("Error"))
            raise DetailError(data.get("Error") or f"Failed to fetch details for series ID: {imdb_id}")
        return self._parse_detail(data, imdb_id)

    async def _get_json(self, params: dict, failure: str, error_cls: type) -> dict:
        logger.debug("GET %s (%s)", self.base_url, {k: v for k, v in params.items() if k != "apikey"})
        try:
            response = await self.client.get(self.base_url, params=params)
        except httpx.HTTPError as e:
            logger.error("OMDb request failed: %s", e)
            raise error_cls(f"{failure}: {_describe(e)}") from e

        if not response.is_success:
            logger.error("OMDb returned status %s", response.status_code)
            raise error_cls(f"{failure}: OMDb API error: {response.reason_phrase}")

        try:
            data = response.json()
        except ValueError as e:
            logger.error("OMDb returned malformed JSON: %s", e)
            raise error_cls(f"{failure}: {_describe(e)}") from e

        if not isinstance(data, dict):
            logger.error("OMDb returned a %s body", type(data).__name__)
            raise error_cls(f"{failure}: unexpected response")
        return data

    def _parse_candidate(self, item: dict) -> Candidate:
        """Parses a single raw search hit into our Candidate data model."""
        return Candidate(
            imdb_id=item.get("imdbID", ""),
            title=item.get("Title", NOT_AVAILABLE),
            year=_optional(item, "Year"),
            poster=_optional(item, "Poster"),
        )

    def _parse_detail(self, data: dict, imdb_id: str) -> SeriesDetail:
        return SeriesDetail(
            imdb_id=data.get("imdbID") or imdb_id,
            title=data.get("Title", NOT_AVAILABLE),
            plot=_optional(data, "Plot"),
            genre=_optional(data, "Genre"),
            year=_optional(data, "Year"),
            poster=_optional(data, "Poster"),
        )


class RecapService:
    """A service to generate mood recaps with the Gemini generateContent API."""
    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        model: str,
        base_url: str,
        choose_tone: Callable[[Sequence[str]], str] = random.choice,
    ):
        self.client = client
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.choose_tone = choose_tone

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def build_prompt(self, detail: SeriesDetail, tone: str) -> str:
        return RECAP_PROMPT.format(
            title=detail.title,
            tone=tone,
            overview=detail.plot or "No overview available.",
            genres=detail.genre or "Unknown genres.",
            first_air_date=detail.year or "Unknown date.",
        )

    async def generate(self, detail: SeriesDetail) -> str:
        """Sends a single-turn prompt for the series and returns the recap text."""
        tone = self.choose_tone(TONES)
        payload = {"contents": [{"role": "user", "parts": [{"text": self.build_prompt(detail, tone)}]}]}
        logger.debug("Requesting a %s recap for %s", tone, detail.title)

        try:
            response = await self.client.post(self.endpoint, params={"key": self.api_key}, json=payload)
        except httpx.HTTPError as e:
            logger.error("Gemini request failed: %s", e)
            raise RecapTransportError(_describe(e)) from e

        if not response.is_success:
            logger.error("Gemini returned status %s", response.status_code)
            raise RecapTransportError(f"Gemini API error: {response.status_code} {response.reason_phrase}")

        try:
            result = response.json()
        except ValueError as e:
            raise RecapTransportError(_describe(e)) from e
        return self._extract_text(result)

    @staticmethod
    def _extract_text(result: Any) -> str:
        """Pulls the first part's text out of the first candidate."""
        candidates = result.get("candidates") if isinstance(result, dict) else None
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            raise RecapNoContent()
        content = candidates[0].get("content") or {}
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
            raise RecapNoContent()
        text = parts[0].get("text")
        if not isinstance(text, str) or not text:
            raise RecapNoContent()
        return text
