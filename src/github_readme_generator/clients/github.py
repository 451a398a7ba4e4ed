import base64
import binascii
import json
import os
from collections.abc import Awaitable, Callable, Sequence
from logging import Logger, getLogger
from typing import Any, Literal, TypeVar, overload

from async_lru import alru_cache
from githubkit import GitHub as GitHubKit
from githubkit.auth import TokenAuthStrategy, UnauthAuthStrategy
from githubkit.exception import GitHubException as GitHubKitGitHubException
from githubkit.exception import RateLimitExceeded as GitHubKitRateLimitExceeded
from githubkit.exception import RequestFailed as GitHubKitRequestFailed
from githubkit.response import Response as GitHubKitResponse
from githubkit.retry import RetryChainDecision, RetryRateLimit, RetryServerError
from githubkit.versions.v2022_11_28.models import ContentFile as GitHubKitContentFile
from pydantic import BaseModel

from github_readme_generator.clients.errors.github import (
    RateLimitedError,
    RequestError,
    ResourceNotFoundError,
    ResourceTypeMismatchError,
)
from github_readme_generator.clients.models.github import Repository, RepositoryContentEntry, UserProfile

NOT_FOUND_ERROR = 404
FORBIDDEN_ERROR = 403
TOO_MANY_REQUESTS_ERROR = 429

REPOSITORY_CACHE_TTL = 5 * 60
FILE_CACHE_TTL = 10 * 60

GITHUBKIT_RESPONSE_TYPE = BaseModel | Sequence[BaseModel]

T = TypeVar("T", bound=GITHUBKIT_RESPONSE_TYPE)


def extract_response(response: GitHubKitResponse[T], /) -> T:
    """Extract the response from a response."""

    return response.parsed_data


def decode_content(content: str) -> str:
    return base64.b64decode(content).decode("utf-8")


def get_github_token() -> str | None:
    for env_var in ("GITHUB_TOKEN", "GITHUB_PERSONAL_ACCESS_TOKEN"):
        if token := os.environ.get(env_var):
            return token
    return None


def get_githubkit_client() -> GitHubKit[Any]:
    # Retry server errors up to 3 times
    retry_server_error = RetryServerError()

    # Retry rate limit errors up to 3 times
    retry_rate_limit = RetryRateLimit(max_retry=3)

    retry_chain = RetryChainDecision(
        retry_server_error,
        retry_rate_limit,
    )

    if token := get_github_token():
        return GitHubKit[TokenAuthStrategy](auth=TokenAuthStrategy(token=token), auto_retry=retry_chain)

    # Public data is readable without a token, at a lower rate limit.
    return GitHubKit[UnauthAuthStrategy](auth=UnauthAuthStrategy(), auto_retry=retry_chain)


def is_rate_limited(request_failed: GitHubKitRequestFailed) -> bool:
    if isinstance(request_failed, GitHubKitRateLimitExceeded):
        return True

    if request_failed.response.status_code not in (FORBIDDEN_ERROR, TOO_MANY_REQUESTS_ERROR):
        return False

    return request_failed.response.headers.get("X-RateLimit-Remaining") == "0"


class GitHubReadmeClient:
    githubkit_client: GitHubKit[Any]
    logger: Logger

    log_requests: bool
    log_responses: bool
    log_on_error: bool

    def __init__(
        self,
        githubkit_client: GitHubKit[Any] | None = None,
        logger: Logger | None = None,
        log_requests: bool = True,
        log_responses: bool = False,
        log_on_error: bool = True,
    ):
        self.githubkit_client = githubkit_client or get_githubkit_client()
        self.logger = logger or getLogger(__name__)
        self.log_requests = log_requests
        self.log_responses = log_responses
        self.log_on_error = log_on_error

    def _get_loggers(
        self, log_request: bool | None = None, log_response: bool | None = None, log_on_error: bool | None = None
    ) -> tuple[Callable[[str], Any], Callable[[str], Any], Callable[[BaseException | str], Any]]:
        request_logger = self.logger.info if log_request or self.log_requests else self.logger.debug
        response_logger = self.logger.info if log_response or self.log_responses else self.logger.debug
        error_logger = self.logger.exception if log_on_error or self.log_on_error else self.logger.debug
        return request_logger, response_logger, error_logger

    @overload
    async def _perform_rest_request(
        self,
        action: str,
        log_request: bool | None = None,
        log_response: bool | None = None,
        log_on_error: bool | None = None,
        error_on_not_found: Literal[False] = False,
        *,
        method: Callable[..., Awaitable[GitHubKitResponse[T]]],
        **request_args: Any,
    ) -> T | None: ...

    @overload
    async def _perform_rest_request(
        self,
        action: str,
        log_request: bool | None = None,
        log_response: bool | None = None,
        log_on_error: bool | None = None,
        error_on_not_found: Literal[True] = True,
        *,
        method: Callable[..., Awaitable[GitHubKitResponse[T]]],
        **request_args: Any,
    ) -> T: ...

    async def _perform_rest_request(
        self,
        action: str,
        log_request: bool | None = None,
        log_response: bool | None = None,
        log_on_error: bool | None = None,
        error_on_not_found: bool | None = None,
        *,
        method: Callable[..., Awaitable[GitHubKitResponse[T]]],
        **request_args: Any,
    ) -> T | None:
        """Perform a request and extract the response.

        Args:
            action: The action being performed.
            log_request: Whether to log the request.
            log_response: Whether to log the response.
            log_on_error: Whether to log on error.
            error_on_not_found: Whether to raise an error if the resource is not found.

        Raises:
            ResourceNotFoundError: If the resource is not found and error_on_not_found is True.
            RateLimitedError: If GitHub refused the request because the rate limit is exhausted.
            RequestError: If the request fails.
        """

        request_logger, response_logger, error_logger = self._get_loggers(
            log_request=log_request, log_response=log_response, log_on_error=log_on_error
        )

        request_logger(f"Performing {action} using {method.__name__} with kwargs {request_args}")

        try:
            response: GitHubKitResponse[T] = await method(**request_args)
        except GitHubKitRequestFailed as e:
            if e.response.status_code == NOT_FOUND_ERROR:
                if error_on_not_found:
                    raise ResourceNotFoundError(action=action, resource=e.request.url.path) from e

                return None

            if is_rate_limited(e):
                error_logger(f"Rate limited performing {action} using {method.__name__} with kwargs {request_args}")

                retry_after = e.retry_after if isinstance(e, GitHubKitRateLimitExceeded) else None

                raise RateLimitedError(action=action, retry_after=retry_after) from e

            error_logger(f"RequestFailed error performing {action} using {method.__name__} with kwargs {request_args}: {e}")

            raise RequestError(action=action, message=str(e)) from e
        except GitHubKitGitHubException as e:
            error_logger(f"Error performing {action} using {method.__name__} with kwargs {request_args}: {e}")

            raise RequestError(action=action, message=str(e)) from e

        extracted_response = extract_response(response)

        response_logger(f"Extracted response for {action} using {method.__name__} with kwargs {request_args}: {extracted_response}")

        return extracted_response

    @overload
    async def get_repository(self, owner: str, repo: str, error_on_not_found: Literal[True] = True) -> Repository: ...

    @overload
    async def get_repository(self, owner: str, repo: str, error_on_not_found: Literal[False] = False) -> Repository | None: ...

    @alru_cache(maxsize=100, ttl=REPOSITORY_CACHE_TTL)
    async def get_repository(
        self,
        owner: str,
        repo: str,
        error_on_not_found: bool = False,
    ) -> Repository | None:
        """Get a repository."""

        if githubkit_repository := await self._perform_rest_request(
            action="Get repository",
            log_request=True,
            error_on_not_found=error_on_not_found,
            method=self.githubkit_client.rest.repos.async_get,
            owner=owner,
            repo=repo,
        ):
            return Repository.from_githubkit_repository(repository=githubkit_repository)

        return None

    @overload
    async def get_user_profile(self, username: str, error_on_not_found: Literal[True] = True) -> UserProfile: ...

    @overload
    async def get_user_profile(self, username: str, error_on_not_found: Literal[False] = False) -> UserProfile | None: ...

    @alru_cache(maxsize=100, ttl=FILE_CACHE_TTL)
    async def get_user_profile(self, username: str, error_on_not_found: bool = False) -> UserProfile | None:
        """Get the public profile of a user."""

        if githubkit_user := await self._perform_rest_request(
            action="Get user profile",
            log_request=True,
            error_on_not_found=error_on_not_found,
            method=self.githubkit_client.rest.users.async_get_by_username,
            username=username,
        ):
            return UserProfile.from_githubkit_user(user=githubkit_user)

        return None

    @alru_cache(maxsize=100, ttl=REPOSITORY_CACHE_TTL)
    async def list_user_repositories(self, username: str, per_page: int = 10) -> list[Repository]:
        """List the public repositories of a user, most recently updated first."""

        githubkit_repositories = await self._perform_rest_request(
            action="List user repositories",
            log_request=True,
            error_on_not_found=True,
            method=self.githubkit_client.rest.repos.async_list_for_user,
            username=username,
            sort="updated",
            per_page=per_page,
        )

        return [Repository.from_githubkit_repository(repository=githubkit_repository) for githubkit_repository in githubkit_repositories]

    @alru_cache(maxsize=100, ttl=REPOSITORY_CACHE_TTL)
    async def list_top_level_contents(self, owner: str, repo: str) -> list[str]:
        """List the entries at the root of a repository. Directories are suffixed with `/`."""

        contents = await self._perform_rest_request(
            action="List repository contents",
            log_request=True,
            error_on_not_found=False,
            method=self.githubkit_client.rest.repos.async_get_content,
            owner=owner,
            repo=repo,
            path="",
        )

        if not isinstance(contents, list):
            return []

        return [RepositoryContentEntry.from_content_directory_item(content_directory_item=item).display_name for item in contents]

    @overload
    async def get_file_text(self, owner: str, repo: str, path: str, error_on_not_found: Literal[True] = True) -> str: ...

    @overload
    async def get_file_text(self, owner: str, repo: str, path: str, error_on_not_found: Literal[False] = False) -> str | None: ...

    @alru_cache(maxsize=100, ttl=FILE_CACHE_TTL)
    async def get_file_text(self, owner: str, repo: str, path: str, error_on_not_found: bool = False) -> str | None:
        """Get the decoded text of a file on the default branch of a repository.

        Args:
            owner: The owner of the repository.
            repo: The name of the repository.
            path: The path of the file.
            error_on_not_found: Whether to raise an error if the file is not found.
        """

        file = await self._perform_rest_request(
            action="Get file",
            log_request=True,
            error_on_not_found=error_on_not_found,
            method=self.githubkit_client.rest.repos.async_get_content,
            owner=owner,
            repo=repo,
            path=path,
        )

        if file is None:
            return None

        if not isinstance(file, GitHubKitContentFile):
            raise ResourceTypeMismatchError(action="Get file", resource=path, expected_type=GitHubKitContentFile, actual_type=type(file))

        try:
            return decode_content(file.content)
        except (binascii.Error, UnicodeDecodeError) as e:
            raise RequestError(action="Get file", message=f"{path} is not a text file") from e

    async def file_exists(self, owner: str, repo: str, path: str) -> bool:
        """Check whether a file exists on the default branch of a repository."""

        return await self.get_file_text(owner=owner, repo=repo, path=path) is not None

    async def get_package_json(self, owner: str, repo: str) -> dict[str, Any] | None:
        """Get the parsed `package.json` of a repository, if it has a valid one."""

        text = await self.get_file_text(owner=owner, repo=repo, path="package.json")

        if text is None:
            return None

        try:
            package_json = json.loads(text)
        except json.JSONDecodeError:
            self.logger.warning(f"Ignoring invalid package.json in {owner}/{repo}")
            return None

        return package_json if isinstance(package_json, dict) else None

    async def search_popular_repositories(self, language: str, count: int = 10) -> list[Repository]:
        """Search for the most starred repositories written in a language."""

        response = await self._perform_rest_request(
            action="Search popular repositories",
            log_request=True,
            error_on_not_found=True,
            method=self.githubkit_client.rest.search.async_repos,
            q=f'language:"{language}"',
            sort="stars",
            order="desc",
            per_page=count,
        )

        return [Repository.from_githubkit_repository(repository=item) for item in response.items[:count]]
