from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING, Any, Literal

import yaml
from fastmcp.server.dependencies import get_context
from fastmcp.utilities.logging import get_logger
from mcp.types import AudioContent, ClientCapabilities, ImageContent, SamplingCapability, SamplingMessage, TextContent

if TYPE_CHECKING:
    from fastmcp.server import Context

logger = get_logger(__name__)

TextSampler = Callable[[str, str], Awaitable[str]]
"""Generates text from a system prompt and a user prompt."""


def dump_yaml(value: Any) -> str:  # pyright: ignore[reportAny]
    return yaml.safe_dump(value, indent=1, sort_keys=False, width=400, allow_unicode=True)


def estimate_tokens(text: str) -> int:
    """Estimate the number of tokens for a given text."""
    return len(text) // 4


def new_sampling_message(role: Literal["user", "assistant"], content: str | list[str]) -> SamplingMessage:
    if isinstance(content, list):
        content = "\n".join(content)

    return SamplingMessage(role=role, content=TextContent(type="text", text=content))


def new_user_sampling_message(content: str | list[str]) -> SamplingMessage:
    return new_sampling_message("user", content)


async def sample(
    system_prompt: str,
    messages: Sequence[SamplingMessage],
    *,
    max_tokens: int = 2000,
    temperature: float = 0.7,
) -> str:
    """Sample a text response through the current request's context."""

    context: Context = get_context()

    prompt_tokens = estimate_tokens(system_prompt) + sum(estimate_tokens(message.model_dump_json()) for message in messages)

    logger.info(f"Sampling with prompt that is {prompt_tokens} tokens.")

    sampling_response: TextContent | ImageContent | AudioContent = await context.sample(
        system_prompt=system_prompt,
        messages=[*messages],
        temperature=temperature,
        max_tokens=max_tokens,
    )

    if not isinstance(sampling_response, TextContent):
        msg = "The sampling call failed to generate a valid text response."
        raise TypeError(msg)

    logger.info(f"Sampling response was {estimate_tokens(sampling_response.text)} tokens.")

    return sampling_response.text


def sampling_is_supported() -> bool:
    """Check if the server or the connected client can sample."""

    context: Context = get_context()

    if context.fastmcp.sampling_handler is not None:
        return True

    if context.session.check_client_capability(capability=ClientCapabilities(sampling=SamplingCapability())):  # noqa: SIM103
        return True

    return False


async def context_sample(system_prompt: str, user_prompt: str) -> str:
    return await sample(system_prompt=system_prompt, messages=[new_user_sampling_message(content=user_prompt)])


def context_sampler() -> TextSampler | None:
    """A text sampler bound to the current request, or None if nothing can sample for it."""

    if not sampling_is_supported():
        logger.info("Sampling is not supported for this request, falling back to templates.")
        return None

    return context_sample
