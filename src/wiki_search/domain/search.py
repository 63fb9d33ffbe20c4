"""Domain models for search results.

Value objects are immutable (frozen=True) so a page of results handed to the
HTTP layer cannot drift from what the engine computed.
"""

from pydantic import BaseModel, ConfigDict, Field


class SearchHit(BaseModel):
    """A single ranked document with its highlighted snippet.

    ``snippet`` is an HTML fragment: ``&``, ``<`` and ``>`` from the page are
    escaped and matches are wrapped in ``<mark>``.
    """

    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    score: float
    snippet: str


class SearchPage(BaseModel):
    """One page of ranked hits plus the total number of matching documents."""

    model_config = ConfigDict(frozen=True)

    results: list[SearchHit] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 20

    @classmethod
    def empty(cls, page: int, page_size: int) -> "SearchPage":
        return cls(results=[], total=0, page=page, page_size=page_size)

    @property
    def has_next(self) -> bool:
        return self.page * self.page_size < self.total
