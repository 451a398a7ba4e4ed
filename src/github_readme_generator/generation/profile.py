from collections.abc import Sequence
from datetime import datetime
from logging import Logger
from urllib.parse import quote

from fastmcp.utilities.logging import get_logger

from github_readme_generator.analysis.profile import UserAnalysis, analyze_user_repositories
from github_readme_generator.clients.models.github import Repository, UserProfile
from github_readme_generator.sampling.utility import TextSampler

logger: Logger = get_logger(name=__name__)

DEFAULT_BADGE_COLOR = "555555"

LANGUAGE_COLORS: dict[str, str] = {
    "JavaScript": "F7DF1E",
    "TypeScript": "3178C6",
    "Python": "3776AB",
    "Java": "007396",
    "C#": "239120",
    "C++": "00599C",
    "PHP": "777BB4",
    "Ruby": "CC342D",
    "Go": "00ADD8",
    "Rust": "000000",
    "Swift": "FA7343",
    "Kotlin": "0095D5",
    "Dart": "0175C2",
    "HTML": "E34F26",
    "CSS": "1572B6",
    "Shell": "4EAA25",
}

BADGE_LANGUAGES_LIMIT = 5

PROFILE_README_SYSTEM_PROMPT = """
You are a professional GitHub profile README generator specializing in creating engaging, visually appealing developer profiles.

Your expertise includes:
- Creating modern, professional GitHub profile READMEs that follow current best practices
- Highlighting a developer's skills, projects, and contributions effectively
- Incorporating appropriate badges, stats visualizations, and formatting
- Maintaining a professional but personable tone that represents the developer well
- Organizing information in a logical, scannable structure

Your task is to craft a README.md file that will serve as the developer's GitHub profile landing page.
Focus on creating content that:
1. Makes a strong first impression with a clear, engaging introduction
2. Highlights technical skills and specializations prominently
3. Showcases notable projects with concise descriptions
4. Includes appropriate contact information and social links
5. Uses markdown formatting effectively for visual appeal

The README should be comprehensive yet concise, with proper section organization and visual hierarchy.
Respond with the Markdown of the README only.
""".strip()


def color_for_language(language: str) -> str:
    return LANGUAGE_COLORS.get(language, DEFAULT_BADGE_COLOR)


def format_date(value: datetime | None) -> str:
    return f"{value:%Y-%m-%d}" if value else "an unknown date"


def render_language_badges(languages: Sequence[str]) -> str:
    return " ".join(
        f"![{language}](https://img.shields.io/badge/-{quote(language, safe='')}-{color_for_language(language)}"
        f"?style=flat-square&logo={quote(language.lower(), safe='')})"
        for language in languages[:BADGE_LANGUAGES_LIMIT]
    )


def render_social_links(analysis: UserAnalysis) -> list[str]:
    social_links: list[str] = []

    if analysis.blog:
        social_links.append(
            f'[<img src="https://img.shields.io/badge/-Website-0A0A0A?style=flat-square&logo=googlechrome&logoColor=white" />]({analysis.blog})'
        )

    if analysis.twitter:
        social_links.append(
            '[<img src="https://img.shields.io/badge/-Twitter-1DA1F2?style=flat-square&logo=twitter&logoColor=white" />]'
            f"(https://twitter.com/{analysis.twitter})"
        )

    if analysis.email:
        social_links.append(
            f'[<img src="https://img.shields.io/badge/-Email-D14836?style=flat-square&logo=gmail&logoColor=white" />](mailto:{analysis.email})'
        )

    return social_links


def render_featured_repository(repository: Repository) -> str:
    lines: list[str] = [f"### [{repository.name}]({repository.html_url})"]

    if repository.description:
        lines.append(f"> {repository.description}")

    language = f"**Language**: {repository.language} " if repository.language else ""

    lines.append(f"{language}⭐ {repository.stars} stars")

    return "\n".join(lines)


def render_recent_activity(repositories: Sequence[Repository]) -> str:
    return "\n".join(
        f"- Updated [{repository.name}]({repository.html_url}) on {format_date(repository.updated_at)}" for repository in repositories
    )


def generate_template_profile_readme(analysis: UserAnalysis) -> str:
    """Render a profile README from the analysis alone, without any text generation."""

    blocks: list[str] = [f"# Hi there 👋, I'm {analysis.display_name}"]

    if analysis.bio:
        blocks.append(analysis.bio)

    about: list[str] = []

    if analysis.location:
        about.append(f"📍 **Location**: {analysis.location}  ")
    if analysis.company:
        about.append(f"🏢 **Organization**: {analysis.company}  ")

    blocks.append("## About Me")

    if about:
        blocks.append("\n".join(about))

    if social_links := render_social_links(analysis):
        blocks.append("### Connect with me:\n" + " ".join(social_links))

    blocks.append("## 🔧 Technologies & Skills")

    if language_badges := render_language_badges(list(analysis.top_languages)):
        blocks.append(language_badges)

    if analysis.top_topics:
        blocks.append("### Areas of Interest\n" + "\n".join(f"- {topic}" for topic in analysis.top_topics))

    blocks.append("## 📊 GitHub Stats")
    blocks.append(
        f"- **Repositories**: {analysis.total_repos}\n- **Stars Earned**: {analysis.total_stars}\n- **Followers**: {analysis.followers}"
    )

    if analysis.featured_repositories:
        blocks.append("## 🏆 Featured Projects")
        blocks.extend(render_featured_repository(repository) for repository in analysis.featured_repositories)

    if analysis.recent_activity:
        blocks.append("## 📝 Recent Activity")
        blocks.append(render_recent_activity(analysis.recent_activity))

    blocks.append("---")
    blocks.append(
        f'<p align="center">\n  <img src="https://komarev.com/ghpvc/?username={analysis.username}" alt="Profile views" />\n</p>'
    )
    blocks.append("*This profile README was generated with GitHub README Generator*")

    return "\n\n".join(blocks) + "\n"


def build_profile_readme_prompt(analysis: UserAnalysis) -> str:
    notable_repositories = "\n".join(
        f"- {repository.name}: {repository.description or 'No description'} "
        f"(Stars: {repository.stars}, Language: {repository.language or 'Not specified'})"
        for repository in analysis.featured_repositories
    )
    recent_activity = "\n".join(
        f'- Updated "{repository.name}" on {format_date(repository.updated_at)}' for repository in analysis.recent_activity
    )

    return f"""Create a professional GitHub profile README for a developer with the following information:

# Developer Profile
- Username: {analysis.username}
- Full Name: {analysis.display_name}
- Bio: {analysis.bio or "No bio provided"}
- Location: {analysis.location or "Not specified"}
- Company/Organization: {analysis.company or "Not specified"}
- Personal Website: {analysis.blog or "Not specified"}
- Twitter: {f"@{analysis.twitter}" if analysis.twitter else "Not specified"}
- Email: {analysis.email or "Not specified"}

# GitHub Statistics
- Followers: {analysis.followers}
- Following: {analysis.following}
- Total Stars Earned: {analysis.total_stars}
- Total Forks: {analysis.total_forks}
- Public Repositories: {analysis.total_repos}

# Technical Profile
- Primary Languages: {", ".join(list(analysis.top_languages)[:BADGE_LANGUAGES_LIMIT])}
- Areas of Interest/Expertise: {", ".join(analysis.top_topics)}

# Notable Repositories
{notable_repositories}

# Recent Activity
{recent_activity}

Create a comprehensive, well-structured GitHub profile README that effectively showcases this developer's work and expertise.
Include appropriate sections, badges, and formatting to create a visually appealing profile page."""


async def generate_profile_readme(profile: UserProfile, repositories: Sequence[Repository], sampler: TextSampler | None = None) -> str:
    """Generate a profile README, written by the sampler when one is given and by the template otherwise.

    Sampling failures are logged and answered with the template.
    """

    analysis = analyze_user_repositories(profile=profile, repositories=repositories)

    if sampler is None:
        return generate_template_profile_readme(analysis)

    try:
        generated = await sampler(PROFILE_README_SYSTEM_PROMPT, build_profile_readme_prompt(analysis))
    except Exception:
        logger.exception(f"Error generating the profile README of {profile.login}, using the template instead")
        return generate_template_profile_readme(analysis)

    if not generated.strip():
        logger.warning(f"Sampling returned an empty profile README for {profile.login}, using the template instead")
        return generate_template_profile_readme(analysis)

    return generated
