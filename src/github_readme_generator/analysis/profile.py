from collections import Counter
from collections.abc import Sequence

from pydantic import BaseModel, Field

from github_readme_generator.clients.models.github import Repository, UserProfile

TOP_TOPICS_LIMIT = 10
FEATURED_REPOSITORIES_LIMIT = 5
RECENT_ACTIVITY_LIMIT = 5


class UserAnalysis(BaseModel):
    """A summary of a GitHub user and their repositories."""

    username: str = Field(description="The login of the user.")
    name: str | None = Field(default=None, description="The display name of the user.")
    bio: str | None = Field(default=None, description="The bio of the user.")
    location: str | None = Field(default=None, description="The location of the user.")
    company: str | None = Field(default=None, description="The company of the user.")
    blog: str | None = Field(default=None, description="The website of the user.")
    twitter: str | None = Field(default=None, description="The Twitter username of the user.")
    email: str | None = Field(default=None, description="The public email address of the user.")
    followers: int = Field(default=0, description="The number of followers.")
    following: int = Field(default=0, description="The number of users followed.")
    total_stars: int = Field(default=0, description="The stars earned across the analyzed repositories.")
    total_forks: int = Field(default=0, description="The forks across the analyzed repositories.")
    total_repos: int = Field(default=0, description="The number of public repositories of the user.")
    top_languages: dict[str, int] = Field(
        default_factory=dict, description="Repository counts per language, ordered from most to least used."
    )
    top_topics: list[str] = Field(default_factory=list, description="The most common repository topics.")
    featured_repositories: list[Repository] = Field(default_factory=list, description="The most starred repositories.")
    recent_activity: list[Repository] = Field(default_factory=list, description="The most recently updated repositories.")

    @property
    def display_name(self) -> str:
        return self.name or self.username


def updated_timestamp(repository: Repository) -> float:
    return repository.updated_at.timestamp() if repository.updated_at else 0.0


def most_recently_updated(repositories: Sequence[Repository]) -> list[Repository]:
    return sorted(repositories, key=updated_timestamp, reverse=True)


def analyze_user_repositories(profile: UserProfile, repositories: Sequence[Repository]) -> UserAnalysis:
    languages: Counter[str] = Counter(repository.language for repository in repositories if repository.language)
    topics: Counter[str] = Counter(topic for repository in repositories for topic in repository.topics)

    return UserAnalysis(
        username=profile.login,
        name=profile.name,
        bio=profile.bio,
        location=profile.location,
        company=profile.company,
        blog=profile.blog,
        twitter=profile.twitter_username,
        email=profile.email,
        followers=profile.followers,
        following=profile.following,
        total_stars=sum(repository.stars for repository in repositories),
        total_forks=sum(repository.forks for repository in repositories),
        total_repos=profile.public_repos,
        top_languages=dict(languages.most_common()),
        top_topics=[topic for topic, _ in topics.most_common(TOP_TOPICS_LIMIT)],
        featured_repositories=sorted(repositories, key=lambda repository: repository.stars, reverse=True)[:FEATURED_REPOSITORIES_LIMIT],
        recent_activity=most_recently_updated(repositories)[:RECENT_ACTIVITY_LIMIT],
    )
