import re
from collections.abc import Callable
from logging import Logger
from urllib.parse import quote

from fastmcp.utilities.logging import get_logger

from github_readme_generator.analysis.repository import RepositoryAnalysis
from github_readme_generator.clients.models.github import Repository
from github_readme_generator.generation.commands import install_command_for, usage_command_for
from github_readme_generator.learning.models import ReadmePattern

logger: Logger = get_logger(name=__name__)

FALLBACK_DESCRIPTION = "A software project."
GENERIC_SECTION_TEXT = "This section needs to be filled with relevant information."
GENERIC_LICENSE_TEXT = "This project is licensed under the terms of the license included in the repository."

SectionRenderer = Callable[[Repository, RepositoryAnalysis], str]
SectionRule = tuple[Callable[[str], bool], SectionRenderer]


def title_contains(*needles: str) -> Callable[[str], bool]:
    def predicate(title: str) -> bool:
        return any(needle in title for needle in needles)

    return predicate


def is_introduction(title: str) -> bool:
    return not title or "introduction" in title


def synthesis_language(repository: Repository, analysis: RepositoryAnalysis) -> str | None:
    return repository.language or analysis.language


def render_introduction(repository: Repository, analysis: RepositoryAnalysis) -> str:
    return repository.description or FALLBACK_DESCRIPTION


def render_installation(repository: Repository, analysis: RepositoryAnalysis) -> str:
    install_command = install_command_for(synthesis_language(repository, analysis))

    return f"""```bash
# Clone the repository
git clone https://github.com/{repository.full_name}.git
cd {repository.name}

# Install dependencies
{install_command}
```"""


def render_usage(repository: Repository, analysis: RepositoryAnalysis) -> str:
    usage_command = usage_command_for(synthesis_language(repository, analysis))

    return f"""```bash
{usage_command}
```

For more detailed usage instructions, please refer to the documentation."""


def render_features(repository: Repository, analysis: RepositoryAnalysis) -> str:
    return "- Feature 1\n- Feature 2\n- Feature 3"


def render_api(repository: Repository, analysis: RepositoryAnalysis) -> str:
    return f"""This section would contain API documentation.

```javascript
// Example API usage
const api = require('{repository.name}');
const result = api.doSomething();
```"""


def render_contributing(repository: Repository, analysis: RepositoryAnalysis) -> str:
    return """Contributions are welcome! Please feel free to submit a Pull Request.

1. Fork the repository
2. Create your feature branch (`git checkout -b feature/amazing-feature`)
3. Commit your changes (`git commit -m 'Add some amazing feature'`)
4. Push to the branch (`git push origin feature/amazing-feature`)
5. Open a Pull Request"""


def render_license(repository: Repository, analysis: RepositoryAnalysis) -> str:
    if repository.license:
        return f"This project is licensed under the {repository.license.name}."

    return GENERIC_LICENSE_TEXT


def render_authors(repository: Repository, analysis: RepositoryAnalysis) -> str:
    login = repository.owner.login

    return f"""- **{login}** - *Initial work* - [{login}](https://github.com/{login})

See also the list of [contributors](https://github.com/{repository.full_name}/contributors) who participated in this project."""


def render_generic(repository: Repository, analysis: RepositoryAnalysis) -> str:
    return GENERIC_SECTION_TEXT


SECTION_RULES: list[SectionRule] = [
    (is_introduction, render_introduction),
    (title_contains("install", "getting started", "setup"), render_installation),
    (title_contains("usage", "example"), render_usage),
    (title_contains("feature"), render_features),
    (title_contains("api", "documentation"), render_api),
    (title_contains("contribute", "contributing"), render_contributing),
    (title_contains("license"), render_license),
    (title_contains("author", "credit", "acknowledgement"), render_authors),
]


def render_section_content(title: str, repository: Repository, analysis: RepositoryAnalysis) -> str:
    """Render the body of a section by the first rule whose keywords appear in its (lowercased) title."""

    lowered_title = title.lower()

    for predicate, renderer in SECTION_RULES:
        if predicate(lowered_title):
            return renderer(repository, analysis)

    return render_generic(repository, analysis)


def render_badges(repository: Repository) -> str:
    badges: list[str] = []

    if repository.license:
        badges.append(f"![License](https://img.shields.io/badge/license-{quote(repository.license.name, safe='')}-blue.svg)")

    if repository.language:
        badges.append(f"![Language](https://img.shields.io/badge/language-{quote(repository.language, safe='')}-orange.svg)")

    badges.append(f"![Stars](https://img.shields.io/github/stars/{repository.full_name}?style=social)")

    return " ".join(badges)


def insert_badges(readme: str, badges: str) -> str:
    """Place badges right after the first line of the document, whatever kind of heading it is."""

    first_line, _, rest = readme.partition("\n\n")

    return f"{first_line}\n\n{badges}\n\n{rest}"


def render_heading(title: str, level: int) -> str:
    if level == 0:
        return title

    return f"{'#' * level} {title}"


def render_basic_readme(repository: Repository, analysis: RepositoryAnalysis) -> str:
    """The fixed skeleton used when no learned pattern is available."""

    language = synthesis_language(repository, analysis)
    license_line = repository.license.name if repository.license else GENERIC_LICENSE_TEXT

    return f"""# {repository.name}

{repository.description or FALLBACK_DESCRIPTION}

## Installation

```bash
# Clone the repository
git clone https://github.com/{repository.full_name}.git
cd {repository.name}

# Install dependencies
{install_command_for(language)}
```

## Usage

```bash
{usage_command_for(language)}
```

## Features

- Feature 1
- Feature 2
- Feature 3

## License

{license_line}
"""


def render_from_pattern(repository: Repository, analysis: RepositoryAnalysis, pattern: ReadmePattern) -> str:
    readme = "".join(
        f"{render_heading(section.title, section.level)}\n\n{render_section_content(section.title, repository, analysis)}\n\n"
        for section in pattern.sections
    )

    if pattern.style.uses_shields:
        readme = insert_badges(readme, render_badges(repository))

    return readme


def render_error_readme(repository: Repository) -> str:
    return f"""# {repository.name}

{repository.description or "No description available."}

## Error

There was an error generating the complete README. Please check the repository details and try again.
"""


def synthesize(repository: Repository, analysis: RepositoryAnalysis | None, pattern: ReadmePattern | None) -> str:
    """Generate a README for a repository, following a learned pattern when one is given.

    Never raises: an unexpected failure yields a short document with the repository name, description and an
    error notice.
    """

    try:
        analysis = analysis or RepositoryAnalysis(name=repository.name, description=repository.description or "")

        if pattern is None:
            return render_basic_readme(repository, analysis)

        return render_from_pattern(repository, analysis, pattern)
    except Exception:
        logger.exception(f"Error generating README for {repository.full_name}")

        return render_error_readme(repository)
