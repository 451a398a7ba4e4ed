from typing import Any

import pytest
from fastmcp import Client, FastMCP
from mcp.types import CreateMessageRequestParams, SamplingMessage, TextContent

from github_readme_generator.sampling.utility import (
    context_sampler,
    dump_yaml,
    estimate_tokens,
    new_user_sampling_message,
)


def test_dump_yaml():
    assert dump_yaml({"name": "widget", "topics": "cli, api", "created": "2024-01-15", "emoji": "🚀"}) == (
        "name: widget\ntopics: cli, api\ncreated: '2024-01-15'\nemoji: 🚀\n"
    )


def test_estimate_tokens():
    assert estimate_tokens("") == 0
    assert estimate_tokens("a" * 41) == 10


def test_new_user_sampling_message():
    message = new_user_sampling_message(content=["first line", "second line"])

    assert message.role == "user"
    assert message.content == TextContent(type="text", text="first line\nsecond line")


@pytest.fixture
def sampling_server() -> FastMCP[Any]:
    fastmcp = FastMCP[Any](name="Test Server")

    @fastmcp.tool
    async def narrate(subject: str) -> str:
        if sampler := context_sampler():
            return await sampler("You are a narrator.", f"Narrate {subject}.")

        return f"A template about {subject}."

    return fastmcp


async def test_context_sampler_without_sampling_support(sampling_server: FastMCP[Any]):
    async with Client[Any](transport=sampling_server) as client:
        call_tool_result = await client.call_tool(name="narrate", arguments={"subject": "widget"})

    assert call_tool_result.data == "A template about widget."


async def test_context_sampler_with_client_sampling(sampling_server: FastMCP[Any]):
    seen: list[tuple[str | None, str]] = []

    def sampling_handler(messages: list[SamplingMessage], params: CreateMessageRequestParams, context: Any) -> str:
        content = messages[-1].content
        assert isinstance(content, TextContent)

        seen.append((params.systemPrompt, content.text))

        return "Once upon a time there was a widget."

    async with Client[Any](transport=sampling_server, sampling_handler=sampling_handler) as client:
        call_tool_result = await client.call_tool(name="narrate", arguments={"subject": "widget"})

    assert call_tool_result.data == "Once upon a time there was a widget."
    assert seen == [("You are a narrator.", "Narrate widget.")]
