"""
Tests for message and result data types
"""

from swarmpy import Agent, Message, Result, Role, ToolCall


class TestMessage:
    def test_to_dict_omits_unset_fields(self):
        assert Message(role=Role.user, content="hi").to_dict() == {"role": "user", "content": "hi"}

    def test_tool_message(self):
        message = Message(role=Role.tool, content="42", name="answer", tool_call_id="c1")
        assert message.to_dict() == {"role": "tool", "content": "42", "name": "answer", "tool_call_id": "c1"}

    def test_role_compares_as_string(self):
        assert Role.assistant == "assistant"


class TestToolCall:
    def test_from_dict_defaults(self):
        call = ToolCall.from_dict({"id": "c1", "function": {"name": "f"}})

        assert call == ToolCall(id="c1", name="f", arguments="", type="function")
        assert call.to_dict() == {"id": "c1", "type": "function", "function": {"name": "f", "arguments": ""}}


class TestResult:
    def test_constructors(self):
        agent = Agent(name="A", model="m")

        assert Result.with_value("x").value == "x"
        assert Result.with_agent(agent).agent is agent
        assert Result.with_context({"a": 1}).context_variables == {"a": 1}

    def test_default_context_is_not_shared(self):
        first, second = Result(), Result()
        first.context_variables["a"] = 1
        assert second.context_variables == {}
