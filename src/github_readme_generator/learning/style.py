import re
from collections.abc import Sequence

from github_readme_generator.learning.models import SectionPattern, StylePattern

EMOJI_SHORTCODE_PATTERN = re.compile(r":[a-z_]+:", re.IGNORECASE)
EMOJI_CHARACTER_PATTERN = re.compile("[\U0001f300-\U0001f6ff]")
IMAGE_PATTERN = re.compile(r"!\[[^\]]*\]\(([^)\s]*)[^)]*\)")

SHIELDS_HOST = "shields.io"


def uses_emoji(markdown: str) -> bool:
    return bool(EMOJI_SHORTCODE_PATTERN.search(markdown) or EMOJI_CHARACTER_PATTERN.search(markdown))


def uses_shields(markdown: str) -> bool:
    return SHIELDS_HOST in markdown or ("![" in markdown and "badge" in markdown)


def uses_images(markdown: str) -> bool:
    """Whether the document references images that are not shields.io badges."""

    if "![" not in markdown:
        return False

    image_urls = IMAGE_PATTERN.findall(markdown)

    if not image_urls:
        return SHIELDS_HOST not in markdown

    return any(SHIELDS_HOST not in url for url in image_urls)


def detect_style(markdown: str, sections: Sequence[SectionPattern]) -> StylePattern:
    """Fingerprint the style of a Markdown document with plain substring and regex tests."""

    average_section_length = sum(len(section.content) for section in sections) / len(sections) if sections else 0

    return StylePattern(
        uses_emoji=uses_emoji(markdown),
        uses_shields=uses_shields(markdown),
        uses_code_blocks="```" in markdown,
        uses_tables="|" in markdown and "---" in markdown,
        uses_images=uses_images(markdown),
        average_section_length=average_section_length,
        header_style="underline" if "===" in markdown or "---" in markdown else "hash",
    )
