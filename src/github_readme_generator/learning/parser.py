import re

from github_readme_generator.learning.models import ReadmePattern, SectionPattern
from github_readme_generator.learning.style import detect_style

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$")
NON_WORD_PATTERN = re.compile(r"[^\w\s]")

INTRODUCTION_TITLE = "Introduction"

STOPWORDS: frozenset[str] = frozenset(
    {"the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "with", "by", "about", "as", "of"}
)

MIN_KEYWORD_LENGTH = 3


def extract_keywords(text: str) -> list[str]:
    """Lowercase words of a heading, without punctuation, stopwords or words shorter than three characters."""

    clean_text = NON_WORD_PATTERN.sub("", text.lower())

    return [word for word in clean_text.split() if len(word) >= MIN_KEYWORD_LENGTH and word not in STOPWORDS]


def parse_sections(markdown: str) -> list[SectionPattern]:
    """Split a Markdown document into heading-delimited sections.

    Content before the first heading becomes an implicit level 0 `Introduction` section. Blank lines are kept
    inside sections, but blank lines before any content do not open one.
    """

    sections: list[SectionPattern] = []
    current_section: SectionPattern | None = None

    for line in markdown.splitlines():
        if heading_match := HEADING_PATTERN.match(line):
            if current_section is not None:
                sections.append(current_section)

            title = heading_match.group(2).strip()

            current_section = SectionPattern(
                title=title,
                level=len(heading_match.group(1)),
                position=len(sections),
                keywords=extract_keywords(title),
            )
        elif current_section is not None:
            current_section.content.append(line)
        elif line.strip():
            current_section = SectionPattern(title=INTRODUCTION_TITLE, level=0, position=0, content=[line])

    if current_section is not None:
        sections.append(current_section)

    return sections


def analyze_readme_structure(markdown: str) -> ReadmePattern | None:
    """Parse a README into a pattern of sections and style. Returns None when there is nothing to learn."""

    if not markdown.strip():
        return None

    sections = parse_sections(markdown)

    return ReadmePattern(sections=sections, style=detect_style(markdown, sections))
