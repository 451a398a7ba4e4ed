from collections.abc import Callable
from logging import Logger
from typing import Any

from fastmcp.server import FastMCP
from fastmcp.tools import Tool
from fastmcp.utilities.logging import get_logger

from github_readme_generator.clients.github import GitHubReadmeClient
from github_readme_generator.insights.profile import generate_profile_insights
from github_readme_generator.insights.repository import generate_repository_insights
from github_readme_generator.sampling.utility import TextSampler, context_sampler
from github_readme_generator.servers.shared.annotations import LIMIT_REPOSITORIES, OWNER, REPO, USERNAME

DEFAULT_LIMIT_REPOSITORIES = 10


class InsightsServer:
    client: GitHubReadmeClient
    sampler_factory: Callable[[], TextSampler | None]
    logger: Logger

    def __init__(
        self,
        client: GitHubReadmeClient | None = None,
        sampler_factory: Callable[[], TextSampler | None] = context_sampler,
        logger: Logger | None = None,
    ):
        self.logger = logger or get_logger(name=__name__)
        self.client = client or GitHubReadmeClient(logger=self.logger)
        self.sampler_factory = sampler_factory

    def register_tools(self, fastmcp: FastMCP[Any]) -> FastMCP[Any]:
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.get_repository_insights))
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.get_profile_insights))

        return fastmcp

    async def get_repository_insights(self, owner: OWNER, repo: REPO) -> str:
        """Get a Markdown report on a repository's purpose, technical stack, community engagement and use cases."""

        repository = await self.client.get_repository(owner=owner, repo=repo, error_on_not_found=True)

        return await generate_repository_insights(repository=repository, sampler=self.sampler_factory())

    async def get_profile_insights(self, username: USERNAME, limit_repositories: LIMIT_REPOSITORIES = DEFAULT_LIMIT_REPOSITORIES) -> str:
        """Get a Markdown report on a developer's activity, languages, collaboration style and strongest projects."""

        profile = await self.client.get_user_profile(username=username, error_on_not_found=True)
        repositories = await self.client.list_user_repositories(username=username, per_page=limit_repositories)

        return generate_profile_insights(profile=profile, repositories=repositories)
