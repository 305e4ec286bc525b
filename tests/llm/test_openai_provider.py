"""
Tests for the OpenAI adapter, using a fake async client
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from openai import OpenAIError

from swarmpy.core.models import CompletionChunk
from swarmpy.llm import CompletionRequest, OpenAIProvider, ProviderError, ProviderNotConfigured


class FakeStream:
    def __init__(self, chunks):
        self._chunks = list(chunks)

    def __aiter__(self):
        return self

    async def __anext__(self):
        if not self._chunks:
            raise StopAsyncIteration
        item = self._chunks.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def make_client(result):
    create = AsyncMock(side_effect=result) if isinstance(result, Exception) else AsyncMock(return_value=result)
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


def sdk_tool_call(call_id, name, arguments):
    return SimpleNamespace(id=call_id, type="function", function=SimpleNamespace(name=name, arguments=arguments))


def stream_chunk(content=None, tool_calls=None):
    delta = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(choices=[SimpleNamespace(delta=delta)])


def request(**kwargs):
    defaults = {"model": "gpt-4o", "messages": [{"role": "user", "content": "hi"}], "max_tokens": 100}
    defaults.update(kwargs)
    return CompletionRequest(**defaults)


class TestOpenAIProviderCompletion:
    """Non-streaming completions"""

    @pytest.mark.asyncio
    async def test_message_is_normalized(self):
        message = SimpleNamespace(content=None, tool_calls=[sdk_tool_call("c1", "lookup", '{"q": "x"}')])
        client = make_client(SimpleNamespace(choices=[SimpleNamespace(message=message)]))
        provider = OpenAIProvider(client=client)

        result = await provider.create_completion(request())

        assert result == {
            "role": "assistant",
            "content": None,
            "tool_calls": [{"id": "c1", "type": "function", "function": {"name": "lookup", "arguments": '{"q": "x"}'}}],
        }
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["max_tokens"] == 100
        assert "stream" not in kwargs
        assert "tools" not in kwargs

    @pytest.mark.asyncio
    async def test_plain_text_has_no_tool_calls_key(self):
        message = SimpleNamespace(content="hello", tool_calls=None)
        provider = OpenAIProvider(client=make_client(SimpleNamespace(choices=[SimpleNamespace(message=message)])))

        result = await provider.create_completion(request())

        assert result == {"role": "assistant", "content": "hello"}

    @pytest.mark.asyncio
    async def test_sdk_error_becomes_provider_error(self):
        provider = OpenAIProvider(client=make_client(OpenAIError("rate limited")))

        with pytest.raises(ProviderError, match="rate limited"):
            await provider.create_completion(request())

    @pytest.mark.asyncio
    async def test_empty_choices_is_an_error(self):
        provider = OpenAIProvider(client=make_client(SimpleNamespace(choices=[])))

        with pytest.raises(ProviderError):
            await provider.create_completion(request())

    def test_missing_api_key_is_not_configured(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        provider = OpenAIProvider()

        with pytest.raises(ProviderNotConfigured):
            provider.client


class TestOpenAIProviderStream:
    """Streaming completions"""

    @pytest.mark.asyncio
    async def test_chunks_are_translated(self):
        tool_delta = SimpleNamespace(index=0, id="c1", type="function", function=SimpleNamespace(name="lookup", arguments=""))
        arg_delta = SimpleNamespace(index=0, id=None, type=None, function=SimpleNamespace(name=None, arguments='{"q":1}'))
        client = make_client(FakeStream([
            stream_chunk(content="Hi"),
            SimpleNamespace(choices=[]),
            stream_chunk(tool_calls=[tool_delta]),
            stream_chunk(tool_calls=[arg_delta]),
            stream_chunk(),
        ]))
        provider = OpenAIProvider(client=client)

        chunks = [c async for c in provider.create_completion_stream(request(stream=True))]

        assert chunks[0] == CompletionChunk(content="Hi")
        assert len(chunks) == 3
        assert chunks[1].tool_calls[0].name == "lookup"
        assert chunks[2].tool_calls[0].arguments == '{"q":1}'
        assert client.chat.completions.create.call_args.kwargs["stream"] is True

    @pytest.mark.asyncio
    async def test_error_while_iterating_becomes_provider_error(self):
        provider = OpenAIProvider(client=make_client(FakeStream([stream_chunk(content="a"), OpenAIError("reset")])))

        received = []
        with pytest.raises(ProviderError, match="reset"):
            async for chunk in provider.create_completion_stream(request()):
                received.append(chunk)
        assert [c.content for c in received] == ["a"]
