"""Streaming metrics data structures.

Isolated within the streaming package to keep orchestration code small.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass
class StreamMetrics:
    """Counters collected for a single decode call.

    Fields:
      chunks / bytes_read: transport reads that produced data
      lines: complete lines handed to the recognizer (incl. the close flush)
      records: records produced (excluding blank lines)
      unrecognized: lines dropped as ``Unrecognized``
      emitted: records that reached a callback (content + sources)
      time_to_first_content_ms: latency until the first content delta
      total_duration_ms: wall time of the whole call
    """

    chunks: int = 0
    bytes_read: int = 0
    lines: int = 0
    records: int = 0
    unrecognized: int = 0
    emitted: int = 0
    time_to_first_content_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["StreamMetrics"]
