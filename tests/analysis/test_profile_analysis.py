from datetime import UTC, datetime

from github_readme_generator.analysis.profile import analyze_user_repositories
from tests.conftest import make_profile, make_repository


def test_analyze_user_repositories():
    repositories = [
        make_repository(name="a", language="Python", stars=5, forks=1, topics=["cli", "api"], updated_at=datetime(2025, 1, 1, tzinfo=UTC)),
        make_repository(name="b", language="Go", stars=50, forks=4, topics=["api"], updated_at=datetime(2025, 3, 1, tzinfo=UTC)),
        make_repository(name="c", language="Python", stars=1, updated_at=None),
        make_repository(name="d", language=None, stars=9, forks=2, updated_at=datetime(2025, 2, 1, tzinfo=UTC)),
    ]

    analysis = analyze_user_repositories(profile=make_profile(twitter_username="octo"), repositories=repositories)

    assert analysis.username == "octocat"
    assert analysis.display_name == "The Octocat"
    assert analysis.twitter == "octo"
    assert analysis.total_stars == 65
    assert analysis.total_forks == 7
    assert analysis.total_repos == 8
    assert analysis.top_languages == {"Python": 2, "Go": 1}
    assert list(analysis.top_languages) == ["Python", "Go"]
    assert analysis.top_topics == ["api", "cli"]
    assert [repository.name for repository in analysis.featured_repositories] == ["b", "d", "a", "c"]
    assert [repository.name for repository in analysis.recent_activity] == ["b", "d", "a", "c"]


def test_analyze_user_repositories_limits():
    repositories = [make_repository(name=f"repo-{index}", stars=index, topics=[f"topic-{index}"]) for index in range(12)]

    analysis = analyze_user_repositories(profile=make_profile(name=None), repositories=repositories)

    assert analysis.display_name == "octocat"
    assert len(analysis.featured_repositories) == 5
    assert analysis.featured_repositories[0].name == "repo-11"
    assert len(analysis.recent_activity) == 5
    assert len(analysis.top_topics) == 10
