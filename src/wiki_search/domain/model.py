"""Domain model - wiki pages as immutable value objects.

The corpus is assembled once at startup and never mutated, so every document
is a frozen Pydantic dataclass. Position in the corpus is the internal
document id; ``slug`` is the public identifier used in links.
"""

from pydantic import Field
from pydantic.dataclasses import dataclass


@dataclass(frozen=True)
class PageMetadata:
    """Descriptive metadata read from a page's front matter.

    Carried alongside the document for display; never indexed.
    """

    category: str | None = None
    last_updated: str | None = None
    tags: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "category": self.category,
            "last_updated": self.last_updated,
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class Document:
    """A wiki page: unique slug, title and raw markdown content."""

    slug: str = Field(min_length=1)
    title: str = ""
    content: str = ""
    metadata: PageMetadata = Field(default_factory=PageMetadata)

    @property
    def indexed_text(self) -> str:
        """Text fed to the analyzer: title and content joined by a space."""
        return f"{self.title} {self.content}"
