"""
Tests for the provider request shape
"""

from swarmpy.llm import CompletionRequest, get_openai_token_param


TOOLS = [{"type": "function", "function": {"name": "f", "description": "", "parameters": {"type": "object", "properties": {}, "required": []}}}]


class TestTokenParam:
    def test_gpt4_uses_max_tokens(self):
        assert get_openai_token_param("gpt-4o", 10) == {"max_tokens": 10}

    def test_newer_families_use_max_completion_tokens(self):
        assert get_openai_token_param("gpt-5-mini", 10) == {"max_completion_tokens": 10}
        assert get_openai_token_param("o1-preview", 10) == {"max_completion_tokens": 10}


class TestCompletionRequest:
    """Request to keyword-argument conversion"""

    def test_tool_keys_omitted_without_tools(self):
        params = CompletionRequest(
            model="gpt-4o",
            messages=[],
            tool_choice="auto",
            parallel_tool_calls=True,
        ).to_params()

        assert params == {"model": "gpt-4o", "messages": []}

    def test_tool_keys_sent_with_tools(self):
        params = CompletionRequest(
            model="gpt-4o",
            messages=[],
            tools=TOOLS,
            tool_choice="required",
            parallel_tool_calls=False,
            max_tokens=50,
            stream=True,
        ).to_params()

        assert params["tools"] == TOOLS
        assert params["tool_choice"] == "required"
        assert params["parallel_tool_calls"] is False
        assert params["max_tokens"] == 50
        assert params["stream"] is True
