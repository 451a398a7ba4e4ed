import os

from fastmcp.experimental.sampling.handlers.openai import OpenAISamplingHandler
from fastmcp.utilities.logging import get_logger

logger = get_logger(__name__)

DEFAULT_OPENAI_MODEL = "gpt-4o"


def get_sampling_handler() -> OpenAISamplingHandler | None:
    if os.getenv("OPENAI_API_KEY"):
        return OpenAISamplingHandler(default_model=os.getenv("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL)  # pyright: ignore[reportArgumentType]

    logger.warning(
        msg=(
            "No sampling handler found, insights and profile READMEs will use templates unless the client supports sampling. "
            "Set OPENAI_API_KEY to use a sampling handler. "
        )
    )

    return None
