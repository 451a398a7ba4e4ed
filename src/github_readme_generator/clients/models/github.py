import re
from datetime import datetime
from typing import Any, Self, TypeVar

from githubkit.utils import UNSET
from githubkit.versions.v2022_11_28.models import ContentDirectoryItems as GitHubKitContentDirectoryItems
from githubkit.versions.v2022_11_28.models import FullRepository as GitHubKitFullRepository
from githubkit.versions.v2022_11_28.models import MinimalRepository as GitHubKitMinimalRepository
from githubkit.versions.v2022_11_28.models import PrivateUser as GitHubKitPrivateUser
from githubkit.versions.v2022_11_28.models import PublicUser as GitHubKitPublicUser
from githubkit.versions.v2022_11_28.models import RepoSearchResultItem as GitHubKitRepoSearchResultItem
from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

GitHubKitRepository = GitHubKitFullRepository | GitHubKitMinimalRepository | GitHubKitRepoSearchResultItem

GITHUB_URL_PATTERN = re.compile(r"^(?:https?://)?(?:www\.)?github\.com/([\w.-]+)(?:/([\w.-]+?))?(?:\.git)?(?:/.*)?/?$")
OWNER_REPO_PATTERN = re.compile(r"^([\w.-]+)/([\w.-]+)$")
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,38})$")


def present(value: T | Any, default: T) -> T:
    """Return the value unless githubkit marked it as missing or null."""

    if value is UNSET or value is None:
        return default

    return value


class RepositoryOwner(BaseModel):
    """The owner of a repository."""

    login: str = Field(description="The login of the owner.")
    html_url: str = Field(description="The URL of the owner's GitHub profile.")


class RepositoryLicense(BaseModel):
    """A repository license."""

    name: str = Field(description="The name of the license.")
    url: str | None = Field(default=None, description="The URL of the license.")


class Repository(BaseModel):
    """A repository."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(description="The name of the repository.")
    full_name: str = Field(description="The full name of the repository, in the form `owner/name`.")
    owner: RepositoryOwner = Field(description="The owner of the repository.")
    description: str | None = Field(default=None, description="The description of the repository.")
    html_url: str = Field(description="The URL of the repository on GitHub.")
    homepage_url: str | None = Field(default=None, description="The homepage URL of the repository.")
    language: str | None = Field(default=None, description="The primary language of the repository.")
    topics: list[str] = Field(default_factory=list, description="The topics of the repository.")
    license: RepositoryLicense | None = Field(default=None, description="The license information of the repository.")
    stars: int = Field(default=0, description="The number of stars the repository has.")
    forks: int = Field(default=0, description="The number of forks the repository has.")
    open_issues: int = Field(default=0, description="The number of open issues the repository has.")
    default_branch: str = Field(default="main", description="The default branch of the repository.")
    fork: bool = Field(default=False, description="Whether the repository is a fork.")
    archived: bool = Field(default=False, description="Whether the repository is archived.")
    created_at: datetime | None = Field(default=None, description="The date and time the repository was created.")
    updated_at: datetime | None = Field(default=None, description="The date and time the repository was updated.")
    pushed_at: datetime | None = Field(default=None, description="The date and time the repository was pushed to.")

    @classmethod
    def from_githubkit_repository(cls, repository: GitHubKitRepository) -> Self:
        """Build a repository from any of the repository shapes githubkit returns (full, minimal or search result)."""

        owner = repository.owner
        owner_login: str = owner.login if owner else repository.full_name.split("/")[0]
        owner_html_url: str = owner.html_url if owner else f"https://github.com/{owner_login}"

        githubkit_license = present(repository.license_, None)
        repository_license = RepositoryLicense(name=githubkit_license.name, url=githubkit_license.url) if githubkit_license else None

        return cls(
            name=repository.name,
            full_name=repository.full_name,
            owner=RepositoryOwner(login=owner_login, html_url=owner_html_url),
            description=repository.description,
            html_url=repository.html_url,
            homepage_url=present(repository.homepage, None) or None,
            language=present(repository.language, None),
            topics=present(repository.topics, []),
            license=repository_license,
            stars=present(repository.stargazers_count, 0),
            forks=present(repository.forks_count, 0),
            open_issues=present(repository.open_issues_count, 0),
            default_branch=present(repository.default_branch, "main"),
            fork=repository.fork,
            archived=present(repository.archived, False),
            created_at=present(repository.created_at, None),
            updated_at=present(repository.updated_at, None),
            pushed_at=present(repository.pushed_at, None),
        )


class UserProfile(BaseModel):
    """A GitHub user profile."""

    model_config = ConfigDict(frozen=True)

    login: str = Field(description="The login of the user.")
    name: str | None = Field(default=None, description="The display name of the user.")
    bio: str | None = Field(default=None, description="The bio of the user.")
    location: str | None = Field(default=None, description="The location of the user.")
    company: str | None = Field(default=None, description="The company of the user.")
    blog: str | None = Field(default=None, description="The website of the user.")
    twitter_username: str | None = Field(default=None, description="The Twitter username of the user.")
    email: str | None = Field(default=None, description="The public email address of the user.")
    html_url: str = Field(description="The URL of the user's GitHub profile.")
    avatar_url: str | None = Field(default=None, description="The URL of the user's avatar.")
    followers: int = Field(default=0, description="The number of followers the user has.")
    following: int = Field(default=0, description="The number of users the user follows.")
    public_repos: int = Field(default=0, description="The number of public repositories the user has.")
    created_at: datetime | None = Field(default=None, description="The date and time the account was created.")

    @classmethod
    def from_githubkit_user(cls, user: GitHubKitPublicUser | GitHubKitPrivateUser) -> Self:
        return cls(
            login=user.login,
            name=user.name,
            bio=user.bio,
            location=user.location,
            company=user.company,
            blog=user.blog or None,
            twitter_username=present(user.twitter_username, None),
            email=user.email,
            html_url=user.html_url,
            avatar_url=user.avatar_url,
            followers=user.followers,
            following=user.following,
            public_repos=user.public_repos,
            created_at=user.created_at,
        )


class RepositoryContentEntry(BaseModel):
    """An entry in a repository directory listing."""

    name: str = Field(description="The name of the entry.")
    path: str = Field(description="The path of the entry.")
    type: str = Field(description="The type of the entry: `file`, `dir`, `symlink` or `submodule`.")

    @classmethod
    def from_content_directory_item(cls, content_directory_item: GitHubKitContentDirectoryItems) -> Self:
        return cls(name=content_directory_item.name, path=content_directory_item.path, type=content_directory_item.type)

    @property
    def display_name(self) -> str:
        return f"{self.name}/" if self.type == "dir" else self.name


class GitHubTarget(BaseModel):
    """A user or repository a caller asked about."""

    owner: str = Field(description="The user or organization.")
    repo: str | None = Field(default=None, description="The repository name, when the target is a repository.")

    @property
    def is_repository(self) -> bool:
        return self.repo is not None

    @classmethod
    def from_text(cls, text: str) -> Self:
        """Parse `owner/repo`, a github.com URL, or a bare username."""

        candidate = text.strip()

        if match := GITHUB_URL_PATTERN.match(candidate):
            return cls(owner=match.group(1), repo=match.group(2) or None)

        if match := OWNER_REPO_PATTERN.match(candidate):
            repo = match.group(2).removesuffix(".git")
            return cls(owner=match.group(1), repo=repo)

        if USERNAME_PATTERN.match(candidate):
            return cls(owner=candidate)

        msg = f"Could not parse a GitHub user or repository from {text!r}."
        raise ValueError(msg)


def parse_github_target(text: str) -> GitHubTarget:
    return GitHubTarget.from_text(text)
