from types import SimpleNamespace

import pytest

from github_readme_generator.clients.github import GitHubReadmeClient
from tests.conftest import FakeGitHubKit, githubkit_repository, githubkit_user, new_github_client

POPULAR_README = """# flask-like

A micro framework.

## Installation

pip install flask-like

## Quickstart

Write an app.

## Contributing

Pull requests welcome.
"""


@pytest.fixture
def fake_githubkit() -> FakeGitHubKit:
    return FakeGitHubKit(
        repositories=[
            githubkit_repository(name="widget", license_=SimpleNamespace(name="MIT License", url=None)),
            githubkit_repository(name="flask-like", owner="pallets", stargazers_count=5000, topics=["web"]),
        ],
        users=[githubkit_user(login="octocat")],
        files={"pallets/flask-like/README.md": POPULAR_README},
        contents={"octocat/widget": ["README.md", "requirements.txt", "widget/", "tests/"]},
    )


@pytest.fixture
def github_readme_client(fake_githubkit: FakeGitHubKit) -> GitHubReadmeClient:
    return new_github_client(fake_githubkit)
