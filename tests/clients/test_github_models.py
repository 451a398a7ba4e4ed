import pytest

from github_readme_generator.clients.models.github import GitHubTarget, Repository, parse_github_target
from tests.conftest import githubkit_repository


@pytest.mark.parametrize(
    ("text", "owner", "repo"),
    [
        ("octocat/widget", "octocat", "widget"),
        ("octocat/widget.git", "octocat", "widget"),
        ("https://github.com/octocat/widget", "octocat", "widget"),
        ("https://github.com/octocat/widget.git", "octocat", "widget"),
        ("github.com/octocat/widget/tree/main/src", "octocat", "widget"),
        ("https://www.github.com/octocat", "octocat", None),
        ("octocat", "octocat", None),
        ("  octocat/widget  ", "octocat", "widget"),
    ],
)
def test_parse_github_target(text: str, owner: str, repo: str | None):
    target = parse_github_target(text)

    assert target == GitHubTarget(owner=owner, repo=repo)
    assert target.is_repository == (repo is not None)


@pytest.mark.parametrize("text", ["", "not a repository", "-octocat", "https://gitlab.com/octocat/widget", "a/b/c"])
def test_parse_github_target_invalid(text: str):
    with pytest.raises(ValueError, match="Could not parse a GitHub user or repository"):
        parse_github_target(text)


def test_repository_without_owner():
    githubkit_widget = githubkit_repository(name="widget", owner="octocat")
    githubkit_widget.owner = None

    repository = Repository.from_githubkit_repository(githubkit_widget)  # pyright: ignore[reportArgumentType]

    assert repository.owner.login == "octocat"
    assert repository.owner.html_url == "https://github.com/octocat"


def test_repository_with_blank_homepage():
    repository = Repository.from_githubkit_repository(githubkit_repository(name="widget", homepage=""))  # pyright: ignore[reportArgumentType]

    assert repository.homepage_url is None
