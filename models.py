# models.py
from dataclasses import dataclass, field
from typing import List, Optional

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class Candidate:
    """A single series hit from a metadata search."""
    imdb_id: str
    title: str
    year: Optional[str] = None
    poster: Optional[str] = None


@dataclass(frozen=True)
class SeriesDetail:
    """Full metadata for one selected series."""
    imdb_id: str
    title: str
    plot: Optional[str] = None
    genre: Optional[str] = None
    year: Optional[str] = None
    poster: Optional[str] = None


@dataclass(frozen=True)
class AppState:
    """A single object to hold the entire application state."""
    query: str = ""
    results: List[Candidate] = field(default_factory=list)
    selected: Optional[SeriesDetail] = None
    recap: Optional[str] = None
    is_loading: bool = False
    error: Optional[str] = None
    generation: int = 0

    @property
    def shows_results(self) -> bool:
        return bool(self.results) and self.selected is None
