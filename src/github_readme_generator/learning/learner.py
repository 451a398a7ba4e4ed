from collections.abc import Sequence
from logging import Logger
from typing import TYPE_CHECKING

from fastmcp.utilities.logging import get_logger

from github_readme_generator.analysis.repository import RepositoryAnalysis
from github_readme_generator.clients.errors.github import ClientError
from github_readme_generator.clients.models.github import Repository
from github_readme_generator.generation.synthesizer import synthesize
from github_readme_generator.learning.categorize import categorize
from github_readme_generator.learning.models import ReadmePattern
from github_readme_generator.learning.parser import analyze_readme_structure
from github_readme_generator.learning.store import PatternStore

if TYPE_CHECKING:
    from github_readme_generator.clients.github import GitHubReadmeClient

README_PATH = "README.md"

DEFAULT_BOOTSTRAP_LANGUAGES: list[str] = ["JavaScript", "Python", "Java", "Go", "Ruby", "Rust", "C#", "C++"]
DEFAULT_BOOTSTRAP_COUNT = 5


class PatternLearner:
    """Feeds READMEs of real repositories into a pattern store and generates READMEs from what it learned."""

    client: "GitHubReadmeClient"
    store: PatternStore
    logger: Logger

    def __init__(self, client: "GitHubReadmeClient", store: PatternStore | None = None, logger: Logger | None = None):
        self.client = client
        self.store = store or PatternStore()
        self.logger = logger or get_logger(name=__name__)

    def learn_from_readme(self, repository: Repository, readme_text: str) -> str | None:
        """Learn the structure of a README. Returns the category it was filed under, or None if it had no structure."""

        pattern = analyze_readme_structure(readme_text)

        if pattern is None:
            return None

        category = categorize(repository)

        self.store.learn(category=category, pattern=pattern)

        self.logger.info(f"Learned README pattern of {repository.full_name} ({len(pattern.sections)} sections) as {category}")

        return category

    async def learn_from_repository(self, repository: Repository) -> str | None:
        """Learn from the README of a repository. Failures are logged, never raised."""

        try:
            readme_text = await self.client.get_file_text(owner=repository.owner.login, repo=repository.name, path=README_PATH)
        except ClientError:
            self.logger.exception(f"Error fetching {README_PATH} of {repository.full_name}")
            return None

        if readme_text is None:
            self.logger.info(f"{repository.full_name} has no {README_PATH} to learn from")
            return None

        return self.learn_from_readme(repository=repository, readme_text=readme_text)

    async def learn_from_popular_repositories(self, language: str, count: int = 10) -> int:
        """Learn from the READMEs of the most starred repositories in a language. Returns how many were learned."""

        try:
            repositories = await self.client.search_popular_repositories(language=language, count=count)
        except ClientError:
            self.logger.exception(f"Error searching for popular {language} repositories")
            return 0

        learned = 0

        for repository in repositories:
            if await self.learn_from_repository(repository) is not None:
                learned += 1

        self.logger.info(f"Learned from {learned} of {len(repositories)} popular {language} repositories")

        return learned

    async def initialize(self, languages: Sequence[str] = DEFAULT_BOOTSTRAP_LANGUAGES, count: int = DEFAULT_BOOTSTRAP_COUNT) -> int:
        """Seed the store from popular repositories of each language."""

        learned = 0

        for language in languages:
            learned += await self.learn_from_popular_repositories(language=language, count=count)

        self.logger.info(f"Learning system initialized with {learned} READMEs, categories: {self.store.categories()}")

        return learned

    def generate_readme(self, repository: Repository, analysis: RepositoryAnalysis | None = None) -> tuple[str, ReadmePattern | None]:
        """Generate a README from the best learned pattern for the repository's category, or the basic skeleton.

        Returns the README and the pattern it followed, or None when it used the skeleton.
        """

        pattern = self.store.best_pattern_for(categorize(repository))

        return synthesize(repository=repository, analysis=analysis, pattern=pattern), pattern
