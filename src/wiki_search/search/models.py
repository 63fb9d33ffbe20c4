"""Search data models."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Posting:
    """A posting records how often a term occurs in one document."""

    doc: int
    tf: int

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for serialization."""
        return {"doc": self.doc, "tf": self.tf}
