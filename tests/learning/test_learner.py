from github_readme_generator.analysis.repository import RepositoryAnalysis
from github_readme_generator.clients.github import GitHubReadmeClient
from github_readme_generator.clients.models.github import Repository
from github_readme_generator.learning.learner import PatternLearner
from github_readme_generator.learning.store import PatternStore
from tests.conftest import FakeGitHubKit, githubkit_repository, make_repository, new_github_client, request_failed

LEARNED_README = """# fastapi-thing

A fast thing.

## Installation

pip install fastapi-thing

## Usage

Run it.

## License

MIT
"""


def new_learner(fake_githubkit: FakeGitHubKit) -> PatternLearner:
    client: GitHubReadmeClient = new_github_client(fake_githubkit)
    return PatternLearner(client=client, store=PatternStore())


def test_learn_from_readme():
    learner = new_learner(FakeGitHubKit())
    repository = make_repository(name="fastapi-thing", language="Python")

    assert learner.learn_from_readme(repository, LEARNED_README) == "python"
    assert learner.store.categories() == {"python": 1}


def test_learn_from_blank_readme():
    learner = new_learner(FakeGitHubKit())

    assert learner.learn_from_readme(make_repository(), "  \n") is None
    assert learner.store.categories() == {}


async def test_learn_from_repository():
    fake_githubkit = FakeGitHubKit(files={"octocat/widget/README.md": LEARNED_README})
    learner = new_learner(fake_githubkit)

    assert await learner.learn_from_repository(make_repository(language="JavaScript")) == "javascript"
    assert fake_githubkit.calls == ["/repos/octocat/widget/contents/README.md"]


async def test_learn_from_repository_without_readme():
    learner = new_learner(FakeGitHubKit())

    assert await learner.learn_from_repository(make_repository()) is None
    assert learner.store.categories() == {}


async def test_learn_from_repository_swallows_request_errors():
    fake_githubkit = FakeGitHubKit(failures={"/repos/octocat/widget/contents/README.md": request_failed(500, "/repos/octocat/widget")})
    learner = new_learner(fake_githubkit)

    assert await learner.learn_from_repository(make_repository()) is None


async def test_learn_from_popular_repositories():
    fake_githubkit = FakeGitHubKit(
        repositories=[
            githubkit_repository("requests", owner="psf", stargazers_count=50000),
            githubkit_repository("flask", owner="pallets", stargazers_count=60000),
            githubkit_repository("no-readme", owner="someone", stargazers_count=5),
            githubkit_repository("express", owner="expressjs", language="JavaScript", stargazers_count=60000),
        ],
        files={
            "psf/requests/README.md": LEARNED_README,
            "pallets/flask/README.md": LEARNED_README,
        },
    )
    learner = new_learner(fake_githubkit)

    assert await learner.learn_from_popular_repositories(language="Python", count=10) == 2

    best = learner.store.best_pattern_for("python")
    assert best is not None
    assert best.frequency == 2
    assert best.section_titles == ["fastapi-thing", "Installation", "Usage", "License"]


async def test_initialize():
    fake_githubkit = FakeGitHubKit(
        repositories=[
            githubkit_repository("requests", owner="psf"),
            githubkit_repository("gin", owner="gin-gonic", language="Go"),
        ],
        files={"psf/requests/README.md": LEARNED_README, "gin-gonic/gin/README.md": LEARNED_README},
    )
    learner = new_learner(fake_githubkit)

    assert await learner.initialize(languages=["Python", "Go", "Rust"], count=5) == 2
    assert learner.store.categories() == {"python": 1, "go": 1}


def test_generate_readme_without_learned_patterns():
    learner = new_learner(FakeGitHubKit())
    repository: Repository = make_repository()

    readme, pattern = learner.generate_readme(repository, RepositoryAnalysis(name="widget"))

    assert pattern is None
    assert readme.startswith("# widget\n")
    assert "## Features" in readme


def test_generate_readme_follows_learned_pattern():
    learner = new_learner(FakeGitHubKit())
    learner.learn_from_readme(make_repository(name="other", language="Python"), LEARNED_README)

    readme, pattern = learner.generate_readme(make_repository(name="tool", language="Python", topics=["api"]))

    assert pattern is not None
    assert pattern.frequency == 1

    assert readme.startswith("# fastapi-thing\n\n")
    assert "pip install -r requirements.txt" in readme
    assert "## Features" not in readme
