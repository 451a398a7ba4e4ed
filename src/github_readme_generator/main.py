import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from logging import Logger
from typing import Literal

import click
from fastmcp import FastMCP
from fastmcp.server.middleware.logging import LoggingMiddleware
from fastmcp.utilities.logging import configure_logging, get_logger

from github_readme_generator.clients.github import GitHubReadmeClient
from github_readme_generator.learning.learner import DEFAULT_BOOTSTRAP_COUNT, PatternLearner
from github_readme_generator.learning.store import PatternStore
from github_readme_generator.sampling.handler import get_sampling_handler
from github_readme_generator.servers.insights import InsightsServer
from github_readme_generator.servers.readme import ReadmeServer

configure_logging()

logger: Logger = get_logger(name=__name__)

enable_insights: bool = not bool(os.getenv("DISABLE_INSIGHTS"))
bootstrap_patterns: bool = bool(os.getenv("BOOTSTRAP_PATTERNS"))
bootstrap_count: int = int(os.getenv("BOOTSTRAP_COUNT") or DEFAULT_BOOTSTRAP_COUNT)


def new_mcp_server(
    client: GitHubReadmeClient | None = None,
    *,
    enable_insights: bool = enable_insights,
    bootstrap_patterns: bool = bootstrap_patterns,
    bootstrap_count: int = bootstrap_count,
) -> FastMCP[None]:
    client = client or GitHubReadmeClient(logger=logger)
    learner: PatternLearner = PatternLearner(client=client, store=PatternStore(logger=logger), logger=logger)

    @asynccontextmanager
    async def lifespan(_: FastMCP[None]) -> AsyncIterator[None]:
        if bootstrap_patterns:
            _ = await learner.initialize(count=bootstrap_count)
        yield

    mcp: FastMCP[None] = FastMCP[None](
        name="GitHub README Generator",
        sampling_handler=get_sampling_handler() if enable_insights else None,
        lifespan=lifespan,
    )

    mcp.add_middleware(middleware=LoggingMiddleware(include_payloads=True, logger=logger))

    readme_server: ReadmeServer = ReadmeServer(client=client, learner=learner, logger=logger)
    _ = readme_server.register_tools(fastmcp=mcp)

    if enable_insights:
        insights_server: InsightsServer = InsightsServer(client=client, logger=logger)
        _ = insights_server.register_tools(fastmcp=mcp)

    return mcp


mcp: FastMCP[None] = new_mcp_server()


@click.command()
@click.option(
    "--mcp-transport",
    type=click.Choice(["stdio", "streamable-http"]),
    default="stdio",
    help="The transport to run the MCP server on",
)
@click.option(
    "--bootstrap-patterns/--no-bootstrap-patterns",
    "bootstrap",
    default=bootstrap_patterns,
    help="Learn README patterns from popular repositories of common languages at startup",
)
def run_mcp(mcp_transport: Literal["stdio", "streamable-http"], bootstrap: bool):  # noqa: FBT001
    server: FastMCP[None] = mcp if bootstrap == bootstrap_patterns else new_mcp_server(bootstrap_patterns=bootstrap)

    server.run(transport=mcp_transport)


if __name__ == "__main__":
    run_mcp()
