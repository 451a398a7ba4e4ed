from logging import Logger

from fastmcp.utilities.logging import get_logger

from github_readme_generator.clients.models.github import Repository
from github_readme_generator.generation.profile import format_date
from github_readme_generator.sampling.utility import TextSampler, dump_yaml

logger: Logger = get_logger(name=__name__)

REPOSITORY_INSIGHTS_SYSTEM_PROMPT = """
You are GitInsight, an AI assistant specialized in analyzing GitHub repositories and providing valuable insights.

Your task is to analyze the repository metadata and generate a comprehensive markdown report with insights about:
1. The project's purpose and main features
2. Technical stack and architecture
3. Potential use cases
4. Development activity and community engagement
5. Recommendations for users or contributors

Format your response as a well-structured markdown document with:
- Clear headings and subheadings
- Bullet points for key insights
- Code examples where relevant
- Proper markdown formatting throughout
""".strip()


def repository_metadata(repository: Repository) -> dict[str, str | int]:
    return {
        "name": repository.name,
        "owner": repository.owner.login,
        "description": repository.description or "No description provided",
        "primary_language": repository.language or "Not specified",
        "stars": repository.stars,
        "forks": repository.forks,
        "topics": ", ".join(repository.topics) or "None",
        "created": format_date(repository.created_at),
        "last_updated": format_date(repository.updated_at),
        "open_issues": repository.open_issues,
        "license": repository.license.name if repository.license else "Not specified",
        "url": repository.html_url,
    }


def build_repository_insights_prompt(repository: Repository) -> str:
    return f"""Repository Information:
```yaml
{dump_yaml(repository_metadata(repository))}```

Generate a comprehensive markdown report with insights about this repository. Focus on providing valuable information that would
help someone understand the project, its purpose, technical aspects, and potential uses."""


def generate_template_repository_insights(repository: Repository) -> str:
    """A report built from repository metadata alone."""

    language = repository.language or "multi-language"

    blocks: list[str] = [
        f"# Repository Insights: {repository.name}",
        "## Overview",
        f"**{repository.name}** is a {language} repository created by [{repository.owner.login}]({repository.owner.html_url}) "
        f"on {format_date(repository.created_at)}. {repository.description or 'No description provided.'}",
        "## Key Statistics",
        "\n".join(
            [
                f"- **Stars**: {repository.stars}",
                f"- **Forks**: {repository.forks}",
                f"- **Open Issues**: {repository.open_issues}",
                f"- **License**: {repository.license.name if repository.license else 'Not specified'}",
                f"- **Last Updated**: {format_date(repository.updated_at)}",
            ]
        ),
    ]

    if repository.topics:
        blocks.append("## Topics/Tags")
        blocks.append("\n".join(f"- {topic}" for topic in repository.topics))

    blocks.append("## Technical Analysis")
    blocks.append(
        f"The primary language used in this repository is **{repository.language}**."
        if repository.language
        else "No primary language has been identified for this repository."
    )

    blocks.append("## Community Engagement")
    blocks.append(f"This repository has attracted **{repository.stars}** stars and has been forked **{repository.forks}** times.")
    blocks.append(
        f"There are currently **{repository.open_issues}** open issues."
        if repository.open_issues > 0
        else "There are currently no open issues."
    )

    resources = [f"- [Repository Homepage]({repository.html_url})"]

    if repository.homepage_url:
        resources.append(f"- [Project Website]({repository.homepage_url})")

    blocks.append("## Additional Resources")
    blocks.append("\n".join(resources))

    blocks.append("---")
    blocks.append(
        "*This analysis was generated based on repository metadata. "
        "For a more comprehensive understanding, consider exploring the repository directly.*"
    )

    return "\n\n".join(blocks) + "\n"


async def generate_repository_insights(repository: Repository, sampler: TextSampler | None = None) -> str:
    """Narrate insights about a repository with the sampler, falling back to the metadata template."""

    if sampler is None:
        return generate_template_repository_insights(repository)

    try:
        generated = await sampler(REPOSITORY_INSIGHTS_SYSTEM_PROMPT, build_repository_insights_prompt(repository))
    except Exception:
        logger.exception(f"Error generating insights for {repository.full_name}, using the template instead")
        return generate_template_repository_insights(repository)

    if not generated.strip():
        return generate_template_repository_insights(repository)

    return generated
