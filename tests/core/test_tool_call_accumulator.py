"""
Tests for streamed tool-call assembly
"""

from swarmpy import ToolCallDelta
from swarmpy.core.streaming import ToolCallAccumulator


class TestToolCallAccumulator:
    def test_fragments_are_appended_per_slot(self):
        acc = ToolCallAccumulator()
        acc.add(ToolCallDelta(index=0, id="a", type="function", name="f"))
        acc.add(ToolCallDelta(index=1, id="b", name="g"))
        acc.add(ToolCallDelta(index=0, arguments='{"x"'))
        acc.add(ToolCallDelta(index=1, arguments="{}"))
        acc.add(ToolCallDelta(index=0, arguments=": 1}"))

        assert acc.tool_calls() == [
            {"id": "a", "type": "function", "function": {"name": "f", "arguments": '{"x": 1}'}},
            {"id": "b", "type": "function", "function": {"name": "g", "arguments": "{}"}},
        ]
        assert len(acc) == 2

    def test_slots_are_ordered_by_index(self):
        acc = ToolCallAccumulator()
        acc.add(ToolCallDelta(index=2, id="late", name="z"))
        acc.add(ToolCallDelta(index=0, id="early", name="a"))

        assert [c["id"] for c in acc.tool_calls()] == ["early", "late"]

    def test_snapshot_is_detached(self):
        acc = ToolCallAccumulator()
        snapshot = acc.add(ToolCallDelta(index=0, id="a", name="f", arguments="{"))
        acc.add(ToolCallDelta(index=0, arguments="}"))

        assert snapshot["function"]["arguments"] == "{"
        assert acc.snapshot(0)["function"]["arguments"] == "{}"

    def test_has_name(self):
        acc = ToolCallAccumulator()
        acc.add(ToolCallDelta(index=0, arguments="{"))
        assert acc.has_name(0) is False
        assert acc.has_name(5) is False
        acc.add(ToolCallDelta(index=0, name="f"))
        assert acc.has_name(0) is True
