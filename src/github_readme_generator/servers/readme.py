from collections.abc import Callable
from logging import Logger
from typing import Any

from fastmcp.server import FastMCP
from fastmcp.tools import Tool
from fastmcp.utilities.logging import get_logger

from github_readme_generator.analysis.repository import RepositoryAnalysis, analyze_repository, default_structure
from github_readme_generator.clients.github import GitHubReadmeClient
from github_readme_generator.clients.models.github import GitHubTarget, Repository, parse_github_target
from github_readme_generator.generation.preview import render_readme_html
from github_readme_generator.generation.profile import generate_profile_readme
from github_readme_generator.learning.categorize import categorize
from github_readme_generator.learning.learner import PatternLearner
from github_readme_generator.sampling.utility import TextSampler, context_sampler
from github_readme_generator.servers.models.readme import GeneratedReadme, LearnedPopularReadmes, LearnedReadme
from github_readme_generator.servers.shared.annotations import (
    LANGUAGE,
    LIMIT_POPULAR_REPOSITORIES,
    LIMIT_REPOSITORIES,
    OWNER,
    REPO,
    TARGET,
    USERNAME,
)
from github_readme_generator.servers.shared.errors import InvalidTargetError

DEFAULT_LIMIT_REPOSITORIES = 10
DEFAULT_LIMIT_POPULAR_REPOSITORIES = 10

PACKAGE_JSON = "package.json"


class ReadmeServer:
    client: GitHubReadmeClient
    learner: PatternLearner
    sampler_factory: Callable[[], TextSampler | None]
    logger: Logger

    def __init__(
        self,
        client: GitHubReadmeClient | None = None,
        learner: PatternLearner | None = None,
        sampler_factory: Callable[[], TextSampler | None] = context_sampler,
        logger: Logger | None = None,
    ):
        self.logger = logger or get_logger(name=__name__)
        self.client = client or GitHubReadmeClient(logger=self.logger)
        self.learner = learner or PatternLearner(client=self.client, logger=self.logger)
        self.sampler_factory = sampler_factory

    def register_tools(self, fastmcp: FastMCP[Any]) -> FastMCP[Any]:
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.generate_readme))
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.generate_profile_readme))
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.generate_readme_for))
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.analyze_repository))
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.learn_readme))
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.learn_popular_readmes))
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.list_learned_categories))

        return fastmcp

    async def _analyze(self, repository: Repository) -> RepositoryAnalysis:
        owner, repo = repository.owner.login, repository.name

        _ = await self.learner.learn_from_repository(repository)

        contents: list[str] = await self.client.list_top_level_contents(owner=owner, repo=repo)

        if not contents:
            self.logger.info(f"No contents listed for {repository.full_name}, assuming a default {repository.language} layout")
            contents = default_structure(repository.language)

        package_json: dict[str, Any] | None = None

        if PACKAGE_JSON in contents:
            package_json = await self.client.get_package_json(owner=owner, repo=repo)

        return analyze_repository(repository=repository, contents=contents, package_json=package_json)

    async def analyze_repository(self, owner: OWNER, repo: REPO) -> RepositoryAnalysis:
        """Analyze a repository's top-level files to detect its language, project type, and install and run commands."""

        repository: Repository = await self.client.get_repository(owner=owner, repo=repo, error_on_not_found=True)

        return await self._analyze(repository)

    async def generate_readme(self, owner: OWNER, repo: REPO) -> GeneratedReadme:
        """Generate a README for a repository. The repository's own README is learned first, then the README follows the most
        common structure learned from READMEs of similar repositories, or a basic skeleton when nothing has been learned yet."""

        repository: Repository = await self.client.get_repository(owner=owner, repo=repo, error_on_not_found=True)

        analysis: RepositoryAnalysis = await self._analyze(repository)

        category: str = categorize(repository)

        markdown, pattern = self.learner.generate_readme(repository=repository, analysis=analysis)
        used_learned_pattern: bool = pattern is not None

        self.logger.info(f"Generated README for {repository.full_name} ({category}, learned pattern: {used_learned_pattern})")

        return GeneratedReadme(
            subject=repository.full_name,
            kind="repository",
            category=category,
            used_learned_pattern=used_learned_pattern,
            markdown=markdown,
            html=render_readme_html(markdown),
        )

    async def generate_profile_readme(
        self, username: USERNAME, limit_repositories: LIMIT_REPOSITORIES = DEFAULT_LIMIT_REPOSITORIES
    ) -> GeneratedReadme:
        """Generate a profile README for a GitHub user from their profile and most recently updated repositories."""

        profile = await self.client.get_user_profile(username=username, error_on_not_found=True)
        repositories: list[Repository] = await self.client.list_user_repositories(username=username, per_page=limit_repositories)

        markdown: str = await generate_profile_readme(profile=profile, repositories=repositories, sampler=self.sampler_factory())

        return GeneratedReadme(subject=profile.login, kind="profile", markdown=markdown, html=render_readme_html(markdown))

    async def generate_readme_for(self, target: TARGET) -> GeneratedReadme:
        """Generate a README for whatever the caller names: a repository README for a repository, a profile README for a user."""

        try:
            github_target: GitHubTarget = parse_github_target(target)
        except ValueError as e:
            raise InvalidTargetError(target=target) from e

        if github_target.repo is not None:
            return await self.generate_readme(owner=github_target.owner, repo=github_target.repo)

        return await self.generate_profile_readme(username=github_target.owner)

    async def learn_readme(self, owner: OWNER, repo: REPO) -> LearnedReadme:
        """Learn the section structure and style of a repository's README so that future READMEs for similar repositories
        follow it."""

        repository: Repository = await self.client.get_repository(owner=owner, repo=repo, error_on_not_found=True)

        category: str | None = await self.learner.learn_from_repository(repository)

        return LearnedReadme(full_name=repository.full_name, learned=category is not None, category=category)

    async def learn_popular_readmes(
        self, language: LANGUAGE, count: LIMIT_POPULAR_REPOSITORIES = DEFAULT_LIMIT_POPULAR_REPOSITORIES
    ) -> LearnedPopularReadmes:
        """Learn README patterns from the most starred repositories of a language."""

        learned: int = await self.learner.learn_from_popular_repositories(language=language, count=count)

        return LearnedPopularReadmes(language=language, learned=learned, categories=self.learner.store.categories())

    async def list_learned_categories(self) -> dict[str, int]:
        """List the repository categories README patterns have been learned for, with the number of patterns in each."""

        return self.learner.store.categories()
