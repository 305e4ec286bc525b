"""
Run trace recording and flat JSON export.

A Tracer is append-only and owned by a single run. The exported format is a
JSON array of ``{"timestamp", "type", "data"}`` objects; the field names and the
``type`` values are stable so that saved traces stay readable across versions.
"""

import json
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger(__name__)


class TraceEventType(str, Enum):
    AGENT_START = "agent_start"
    AGENT_END = "agent_end"
    FUNCTION_CALL = "function_call"
    FUNCTION_RETURN = "function_return"
    HANDOFF = "handoff"
    GUARDRAIL_CHECK = "guardrail_check"
    MODEL_CALL = "model_call"


@dataclass
class TraceEvent:
    """One audit record. ``timestamp`` is epoch milliseconds."""
    type: TraceEventType
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: int = field(default_factory=lambda: int(time.time() * 1000))

    def to_dict(self) -> Dict[str, Any]:
        return {"timestamp": self.timestamp, "type": self.type.value, "data": self.data}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "TraceEvent":
        return cls(
            type=TraceEventType(raw["type"]),
            data=raw.get("data") or {},
            timestamp=int(raw["timestamp"]),
        )


def _snapshot(data: Dict[str, Any]) -> Dict[str, Any]:
    """Detached copy of ``data`` in the exact shape it will have after export."""
    return json.loads(json.dumps(data, ensure_ascii=False, default=str))


class Tracer:
    """Append-only event log; a disabled tracer records nothing."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.events: List[TraceEvent] = []

    def add_event(self, event_type: Union[TraceEventType, str], data: Optional[Dict[str, Any]] = None) -> None:
        if not self.enabled:
            return
        self.events.append(TraceEvent(type=TraceEventType(event_type), data=_snapshot(data or {})))

    def clear(self) -> None:
        self.events = []

    def get_events(self) -> List[TraceEvent]:
        return list(self.events)

    def export_to_json(self) -> str:
        return export_trace_json(self.events)


def export_trace_json(events: List[TraceEvent]) -> str:
    # default=str keeps arbitrary context values exportable
    return json.dumps([e.to_dict() for e in events], indent=2, ensure_ascii=False, default=str)


def parse_trace_json(text: str) -> List[TraceEvent]:
    raw = json.loads(text)
    if not isinstance(raw, list):
        raise ValueError("Trace JSON must be an array of events")
    return [TraceEvent.from_dict(item) for item in raw]


def save_trace_to_file(trace: List[TraceEvent], file_path: Union[str, Path]) -> Path:
    """Write ``trace`` as JSON, creating parent directories as needed."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(export_trace_json(trace), encoding="utf-8")
    logger.info(f"Trace with {len(trace)} events saved to {path}")
    return path


def load_trace_from_file(file_path: Union[str, Path]) -> List[TraceEvent]:
    return parse_trace_json(Path(file_path).read_text(encoding="utf-8"))
