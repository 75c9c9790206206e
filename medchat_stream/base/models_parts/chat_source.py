"""
ChatSource model: one citation attached to an AI answer.

The backend sends citations as ``{"documentId", "chunkId", "chunkIndex"}``
objects. Parsing is lenient because historical payloads omit fields or send
the index as a string; a malformed entry is skipped rather than failing the
whole list.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping


def _coerce_index(raw: Any) -> int:
    # JSON allows 1e999, which parses to inf
    if isinstance(raw, float) and not math.isfinite(raw):
        return 0
    try:
        return int(raw)
    except (TypeError, ValueError, OverflowError):
        return 0


@dataclass(frozen=True)
class ChatSource:
    """A retrieved document chunk cited by the answer."""

    document_id: str
    chunk_id: str
    chunk_index: int

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "ChatSource":
        """Build a source from a wire mapping, tolerating snake_case keys."""
        return cls(
            document_id=str(data.get("documentId") or data.get("document_id") or ""),
            chunk_id=str(data.get("chunkId") or data.get("chunk_id") or ""),
            chunk_index=_coerce_index(data.get("chunkIndex", data.get("chunk_index", 0))),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the camelCase wire representation."""
        return {"documentId": self.document_id, "chunkId": self.chunk_id, "chunkIndex": self.chunk_index}


def parse_sources(items: Any) -> List[ChatSource]:
    """Parse a wire ``sources`` list, dropping entries that are not objects."""
    if not isinstance(items, list):
        return []
    return [ChatSource.from_payload(item) for item in items if isinstance(item, Mapping)]


__all__ = ["ChatSource", "parse_sources"]
