from collections.abc import Sequence
from datetime import UTC, datetime

from github_readme_generator.analysis.profile import UserAnalysis, analyze_user_repositories, most_recently_updated
from github_readme_generator.clients.models.github import Repository, UserProfile

SPECIAL_TOPIC_NAMES: dict[str, str] = {
    "api": "API",
    "ui": "UI",
    "ux": "UX",
    "css": "CSS",
    "html": "HTML",
    "js": "JavaScript",
    "ts": "TypeScript",
}

PORTFOLIO_PROJECTS_LIMIT = 3
TECHNICAL_FOCUS_LIMIT = 8
PRIMARY_LANGUAGES_LIMIT = 5


def format_topic(topic: str) -> str:
    """Turn a topic slug like `machine-learning` into `Machine Learning`."""

    if not topic:
        return ""

    if special_name := SPECIAL_TOPIC_NAMES.get(topic.lower()):
        return special_name

    return " ".join(word[:1].upper() + word[1:] for word in topic.split("-"))


def contribution_frequency(repositories: Sequence[Repository], now: datetime) -> str:
    recent = most_recently_updated(repositories)

    if not recent or recent[0].updated_at is None:
        return "infrequent"

    updated_at = recent[0].updated_at

    if updated_at.tzinfo is None:
        updated_at = updated_at.replace(tzinfo=UTC)

    days_since_last_contribution = (now - updated_at).days

    if days_since_last_contribution < 7:  # noqa: PLR2004
        return "very active"
    if days_since_last_contribution < 30:  # noqa: PLR2004
        return "active"
    if days_since_last_contribution < 90:  # noqa: PLR2004
        return "moderately active"

    return "infrequent"


def language_diversity(language_count: int) -> str:
    if language_count > 5:  # noqa: PLR2004
        return "highly diverse"
    if language_count > 3:  # noqa: PLR2004
        return "diverse"
    if language_count > 1:
        return "somewhat specialized"

    return "specialized"


def collaboration_level(repositories: Sequence[Repository]) -> str:
    if not repositories:
        return "individual contributor"

    mean_forks = sum(repository.forks for repository in repositories) / len(repositories)

    if mean_forks > 10:  # noqa: PLR2004
        return "high collaboration"
    if mean_forks > 3:  # noqa: PLR2004
        return "moderate collaboration"

    return "individual contributor"


def project_impact(repository: Repository) -> str:
    if repository.stars > 50:  # noqa: PLR2004
        return "high-impact"
    if repository.stars > 10:  # noqa: PLR2004
        return "notable"

    return "promising"


def portfolio_summary(analysis: UserAnalysis) -> str:
    if not analysis.featured_repositories:
        return "No notable projects found."

    projects = sorted(analysis.featured_repositories, key=lambda repository: repository.stars + repository.forks, reverse=True)

    return "\n\n".join(
        f"### [{repository.name}]({repository.html_url})\n"
        f"A {project_impact(repository)} {repository.language or 'multi-language'} project with {repository.stars} stars "
        f"and {repository.forks} forks.\n"
        f"{f'> {repository.description}' if repository.description else 'No description provided.'}"
        for repository in projects[:PORTFOLIO_PROJECTS_LIMIT]
    )


def career_recommendations(analysis: UserAnalysis) -> str:
    languages = set(analysis.top_languages)
    topics = analysis.top_topics

    def any_topic_contains(*needles: str) -> bool:
        return any(needle in topic for topic in topics for needle in needles)

    recommendations: list[str] = []

    if languages & {"JavaScript", "TypeScript"}:
        recommendations.append("- **Frontend Engineering**: Developing responsive web applications")

    if "Python" in languages:
        if any_topic_contains("ml", "ai", "data"):
            recommendations.append("- **Data Science/Machine Learning**: Building and deploying ML models")
        else:
            recommendations.append("- **Python Development**: Building backends, automation, or data processing systems")

    if languages & {"Java", "C#"}:
        recommendations.append("- **Enterprise Software Development**: Building robust business applications")

    if languages & {"Go", "Rust"}:
        recommendations.append("- **Systems Programming**: Developing high-performance infrastructure software")

    if languages & {"Swift", "Kotlin"}:
        recommendations.append("- **Mobile Application Development**: Creating native mobile experiences")

    if any_topic_contains("api", "server", "backend"):
        recommendations.append("- **Backend Engineering**: Designing and implementing APIs and services")

    if any_topic_contains("devops", "docker", "kubernetes"):
        recommendations.append("- **DevOps/Infrastructure**: Managing cloud infrastructure and CI/CD pipelines")

    if not recommendations:
        recommendations.append("- **Software Engineering**: General software development across various domains")

    return "\n".join(recommendations)


def generate_profile_insights(profile: UserProfile, repositories: Sequence[Repository], now: datetime | None = None) -> str:
    """A Markdown report on a developer's activity, languages, collaboration and strongest projects."""

    now = now or datetime.now(tz=UTC)

    analysis = analyze_user_repositories(profile=profile, repositories=repositories)

    frequency = contribution_frequency(repositories, now=now)
    diversity = language_diversity(len(analysis.top_languages))
    collaboration = collaboration_level(repositories)
    average_stars = analysis.total_stars / len(repositories) if repositories else 0.0

    primary_languages = "\n".join(
        f"- **{language}**: {count} repositories" for language, count in list(analysis.top_languages.items())[:PRIMARY_LANGUAGES_LIMIT]
    )
    technical_focus = (
        "\n".join(f"- {format_topic(topic)}" for topic in analysis.top_topics[:TECHNICAL_FOCUS_LIMIT])
        or "No specific technical focus identified from repository topics."
    )
    expertise = ", ".join(list(analysis.top_languages)[:3]) or "no particular language"

    return f"""# Developer Profile Analysis: {profile.login}

## Career Insights

**{profile.login}** is a {frequency} developer with a {diversity} technical portfolio, showing {collaboration} patterns. \
With {analysis.total_repos} public repositories and {analysis.total_stars} total stars, this developer has demonstrated expertise \
primarily in {expertise}.

## Technical Profile

### Primary Languages
{primary_languages or "No languages identified."}

### Technical Focus
{technical_focus}

## Project Portfolio

{portfolio_summary(analysis)}

## Contribution Analysis

- **Contribution Frequency**: {frequency}
- **Language Diversity**: {diversity} ({len(analysis.top_languages)} languages)
- **Collaboration Style**: {collaboration}
- **Repository Impact**: Average of {average_stars:.1f} stars per repository
- **Community Engagement**: {analysis.followers} followers and following {analysis.following} users

## Professional Recommendations

Based on this developer's profile, they would be well-suited for:

{career_recommendations(analysis)}

---

*This analysis was generated based on public GitHub data.*
"""
