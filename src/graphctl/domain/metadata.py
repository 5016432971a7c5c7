"""Per-vertex side-table record: free-form properties plus access bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass
class VertexMetadata:
    """Metadata kept in lockstep with a vertex's adjacency entry.

    Attributes:
        properties: Arbitrary caller-supplied key/value pairs.
        last_accessed: UTC timestamp of the most recent recorded access.
        access_count: Number of recorded accesses since creation.
    """

    properties: dict[str, Any] = field(default_factory=dict)
    last_accessed: datetime = field(default_factory=_now)
    access_count: int = 0

    def record_access(self) -> None:
        self.last_accessed = _now()
        self.access_count += 1

    def copy(self) -> VertexMetadata:
        """Return an independent snapshot (properties are shallow-copied)."""
        return VertexMetadata(
            properties=dict(self.properties),
            last_accessed=self.last_accessed,
            access_count=self.access_count,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "properties": dict(self.properties),
            "last_accessed": self.last_accessed.isoformat(),
            "access_count": self.access_count,
        }
