import base64
from collections.abc import Sequence
from datetime import UTC, datetime
from types import SimpleNamespace
from typing import Any, overload

import httpx
import pytest
from fastmcp import FastMCP
from fastmcp.client.client import CallToolResult
from fastmcp.server.middleware.logging import LoggingMiddleware
from githubkit.exception import RequestFailed
from githubkit.response import Response
from githubkit.versions.v2022_11_28.models import ContentFile
from pydantic import BaseModel

from github_readme_generator.clients.github import GitHubReadmeClient
from github_readme_generator.clients.models.github import Repository, RepositoryLicense, RepositoryOwner, UserProfile

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


def make_repository(
    name: str = "widget",
    owner: str = "octocat",
    *,
    description: str | None = "A small widget library.",
    language: str | None = "JavaScript",
    topics: list[str] | None = None,
    license_name: str | None = None,
    stars: int = 0,
    forks: int = 0,
    open_issues: int = 0,
    homepage_url: str | None = None,
    created_at: datetime | None = datetime(2024, 1, 15, tzinfo=UTC),
    updated_at: datetime | None = datetime(2025, 5, 30, tzinfo=UTC),
) -> Repository:
    return Repository(
        name=name,
        full_name=f"{owner}/{name}",
        owner=RepositoryOwner(login=owner, html_url=f"https://github.com/{owner}"),
        description=description,
        html_url=f"https://github.com/{owner}/{name}",
        homepage_url=homepage_url,
        language=language,
        topics=topics or [],
        license=RepositoryLicense(name=license_name) if license_name else None,
        stars=stars,
        forks=forks,
        open_issues=open_issues,
        created_at=created_at,
        updated_at=updated_at,
    )


def make_profile(login: str = "octocat", **overrides: Any) -> UserProfile:
    fields: dict[str, Any] = {
        "login": login,
        "name": "The Octocat",
        "bio": "Building things with code.",
        "location": "San Francisco",
        "company": "@github",
        "html_url": f"https://github.com/{login}",
        "followers": 120,
        "following": 5,
        "public_repos": 8,
    }
    fields.update(overrides)
    return UserProfile(**fields)


@pytest.fixture
def repository() -> Repository:
    return make_repository()


@pytest.fixture
def profile() -> UserProfile:
    return make_profile()


# Fake githubkit


def githubkit_repository(name: str, owner: str = "octocat", **overrides: Any) -> SimpleNamespace:
    """A stand-in for the repository models githubkit returns."""

    fields: dict[str, Any] = {
        "name": name,
        "full_name": f"{owner}/{name}",
        "owner": SimpleNamespace(login=owner, html_url=f"https://github.com/{owner}"),
        "description": f"The {name} project.",
        "html_url": f"https://github.com/{owner}/{name}",
        "homepage": None,
        "language": "Python",
        "topics": [],
        "license_": None,
        "stargazers_count": 10,
        "forks_count": 2,
        "open_issues_count": 1,
        "default_branch": "main",
        "fork": False,
        "archived": False,
        "created_at": datetime(2024, 1, 15, tzinfo=UTC),
        "updated_at": datetime(2025, 5, 30, tzinfo=UTC),
        "pushed_at": datetime(2025, 5, 30, tzinfo=UTC),
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


def githubkit_user(login: str) -> SimpleNamespace:
    return SimpleNamespace(
        login=login,
        name="The Octocat",
        bio="Building things with code.",
        location="San Francisco",
        company="@github",
        blog="",
        twitter_username=None,
        email=None,
        html_url=f"https://github.com/{login}",
        avatar_url=f"https://avatars.githubusercontent.com/{login}",
        followers=120,
        following=5,
        public_repos=8,
        created_at=datetime(2011, 1, 25, tzinfo=UTC),
    )


def githubkit_content_file(path: str, text: str) -> ContentFile:
    return ContentFile.model_validate(
        {
            "type": "file",
            "encoding": "base64",
            "size": len(text),
            "name": path.rsplit("/", 1)[-1],
            "path": path,
            "content": base64.b64encode(text.encode("utf-8")).decode("ascii"),
            "sha": "0" * 40,
            "url": f"https://api.github.com/repos/octocat/widget/contents/{path}",
            "git_url": None,
            "html_url": None,
            "download_url": None,
            "_links": {"git": None, "html": None, "self": f"https://api.github.com/repos/octocat/widget/contents/{path}"},
        }
    )


def request_failed(status_code: int, path: str, headers: dict[str, str] | None = None) -> RequestFailed:
    raw_response = httpx.Response(status_code, headers=headers, request=httpx.Request("GET", f"https://api.github.com{path}"))
    return RequestFailed(Response(raw_response, Any))


def parsed(data: Any) -> SimpleNamespace:
    return SimpleNamespace(parsed_data=data)


class FakeGitHubKit:
    """Serves canned data through the subset of the githubkit REST API the client uses."""

    def __init__(
        self,
        repositories: Sequence[SimpleNamespace] = (),
        users: Sequence[SimpleNamespace] = (),
        files: dict[str, str] | None = None,
        contents: dict[str, list[str]] | None = None,
        failures: dict[str, BaseException] | None = None,
    ):
        self.repositories = {repository.full_name: repository for repository in repositories}
        self.users = {user.login: user for user in users}
        self.files = files or {}
        self.contents = contents or {}
        self.failures = failures or {}
        self.calls: list[str] = []

        self.rest = SimpleNamespace(
            repos=SimpleNamespace(
                async_get=self.async_get,
                async_get_content=self.async_get_content,
                async_list_for_user=self.async_list_for_user,
            ),
            users=SimpleNamespace(async_get_by_username=self.async_get_by_username),
            search=SimpleNamespace(async_repos=self.async_repos),
        )

    def _record(self, path: str) -> None:
        self.calls.append(path)

        if failure := self.failures.get(path):
            raise failure

    async def async_get(self, owner: str, repo: str) -> SimpleNamespace:
        path = f"/repos/{owner}/{repo}"
        self._record(path)

        if repository := self.repositories.get(f"{owner}/{repo}"):
            return parsed(repository)

        raise request_failed(404, path)

    async def async_get_content(self, owner: str, repo: str, path: str) -> SimpleNamespace:
        request_path = f"/repos/{owner}/{repo}/contents/{path}"
        self._record(request_path)

        if path == "":
            if (entries := self.contents.get(f"{owner}/{repo}")) is None:
                raise request_failed(404, request_path)

            return parsed(
                [
                    SimpleNamespace(name=entry.rstrip("/"), path=entry.rstrip("/"), type="dir" if entry.endswith("/") else "file")
                    for entry in entries
                ]
            )

        if (text := self.files.get(f"{owner}/{repo}/{path}")) is None:
            raise request_failed(404, request_path)

        return parsed(githubkit_content_file(path=path, text=text))

    async def async_list_for_user(self, username: str, sort: str, per_page: int) -> SimpleNamespace:
        path = f"/users/{username}/repos"
        self._record(path)

        if username not in self.users:
            raise request_failed(404, path)

        owned = [repository for repository in self.repositories.values() if repository.owner.login == username]

        return parsed(sorted(owned, key=lambda repository: repository.updated_at, reverse=True)[:per_page])

    async def async_get_by_username(self, username: str) -> SimpleNamespace:
        path = f"/users/{username}"
        self._record(path)

        if user := self.users.get(username):
            return parsed(user)

        raise request_failed(404, path)

    async def async_repos(self, q: str, sort: str, order: str, per_page: int) -> SimpleNamespace:
        self._record(f"/search/repositories?q={q}")

        language = q.removeprefix("language:").strip('"')

        matches = [repository for repository in self.repositories.values() if repository.language == language]
        matches.sort(key=lambda repository: repository.stargazers_count, reverse=True)

        return parsed(SimpleNamespace(items=matches[:per_page]))


def new_github_client(fake_githubkit: FakeGitHubKit) -> GitHubReadmeClient:
    return GitHubReadmeClient(githubkit_client=fake_githubkit)  # pyright: ignore[reportArgumentType]


@pytest.fixture
def fastmcp() -> FastMCP[Any]:
    return FastMCP(name="GitHub README Generator", middleware=[LoggingMiddleware(include_payloads=True)])


def handle_exclude_keys(dictionary: dict[str, Any], exclude_keys: list[str] | None = None) -> dict[str, Any]:
    if exclude_keys is None:
        return dictionary
    return {key: value for key, value in dictionary.items() if key not in exclude_keys}


@overload
def dump_for_snapshot(
    basemodel: None,
    /,
    exclude_keys: list[str] | None = None,
    exclude_none: bool = True,
    **dump_kwargs: Any,
) -> None: ...


@overload
def dump_for_snapshot(
    basemodel: BaseModel,
    /,
    exclude_keys: list[str] | None = None,
    exclude_none: bool = True,
    **dump_kwargs: Any,
) -> dict[str, Any]: ...


def dump_for_snapshot(
    basemodel: None | BaseModel,
    /,
    exclude_keys: list[str] | None = None,
    exclude_none: bool = True,
    **dump_kwargs: Any,
) -> dict[str, Any] | None:
    if basemodel is None:
        return None

    return handle_exclude_keys(basemodel.model_dump(exclude_none=exclude_none, **dump_kwargs), exclude_keys)


def dump_list_for_snapshot(
    basemodel: None | Sequence[BaseModel],
    /,
    exclude_keys: list[str] | None = None,
    exclude_none: bool = True,
    **dump_kwargs: Any,
) -> list[dict[str, Any]] | None:
    if basemodel is None:
        return []

    return [dump_for_snapshot(item, exclude_keys, exclude_none, **dump_kwargs) for item in basemodel]


def dump_call_tool_result_for_snapshot(
    call_tool_result: CallToolResult,
    /,
) -> dict[str, Any]:
    return {
        "content": [item.model_dump() for item in call_tool_result.content],
        "structured_content": call_tool_result.structured_content,
    }
