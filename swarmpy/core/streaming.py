from __future__ import annotations

from typing import Any, Dict, List

from .models import ToolCallDelta


class ToolCallAccumulator:
    """Assemble streamed tool-call fragments into complete tool calls.

    Fragments are addressed by slot index. The first fragment of a slot may carry
    the id, type and name; later fragments append to the argument string.
    """

    def __init__(self) -> None:
        self._slots: Dict[int, Dict[str, Any]] = {}

    def add(self, delta: ToolCallDelta) -> Dict[str, Any]:
        """Merge one fragment and return a snapshot of its slot."""
        slot = self._slots.get(delta.index)
        if slot is None:
            slot = {"id": "", "type": "function", "function": {"name": "", "arguments": ""}}
            self._slots[delta.index] = slot

        if delta.id:
            slot["id"] = delta.id
        if delta.type:
            slot["type"] = delta.type
        if delta.name:
            slot["function"]["name"] = delta.name
        if delta.arguments:
            slot["function"]["arguments"] += delta.arguments

        return self.snapshot(delta.index)

    def snapshot(self, index: int) -> Dict[str, Any]:
        slot = self._slots[index]
        return {"id": slot["id"], "type": slot["type"], "function": dict(slot["function"])}

    def has_name(self, index: int) -> bool:
        return bool(self._slots.get(index, {}).get("function", {}).get("name"))

    def tool_calls(self) -> List[Dict[str, Any]]:
        return [self.snapshot(index) for index in sorted(self._slots)]

    def __len__(self) -> int:
        return len(self._slots)
