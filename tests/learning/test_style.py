import pytest

from github_readme_generator.learning.parser import parse_sections
from github_readme_generator.learning.style import detect_style, uses_emoji, uses_images, uses_shields


@pytest.mark.parametrize(
    ("markdown", "expected"),
    [
        ("Ship it :rocket:", True),
        ("Hello 👋", True),
        ("Plain text: no emoji", False),
        ("", False),
    ],
)
def test_uses_emoji(markdown: str, expected: bool):
    assert uses_emoji(markdown) is expected


@pytest.mark.parametrize(
    ("markdown", "expected"),
    [
        ("![npm](https://img.shields.io/npm/v/widget.svg)", True),
        ("![coverage](https://example.com/coverage-badge.svg)", True),
        ("![screenshot](docs/screenshot.png)", False),
        ("Mentions a badge but has no image", False),
    ],
)
def test_uses_shields(markdown: str, expected: bool):
    assert uses_shields(markdown) is expected


@pytest.mark.parametrize(
    ("markdown", "expected"),
    [
        ("![screenshot](docs/screenshot.png)", True),
        ("![npm](https://img.shields.io/npm/v/widget.svg)", False),
        ("![npm](https://img.shields.io/npm/v/widget.svg) ![demo](demo.gif)", True),
        ("No images here", False),
    ],
)
def test_uses_images(markdown: str, expected: bool):
    assert uses_images(markdown) is expected


def test_detect_style():
    markdown = "Title\n=====\n\n| a | b |\n|---|---|\n| 1 | 2 |\n\n```js\nwidget()\n```\n"

    style = detect_style(markdown, parse_sections(markdown))

    assert style.uses_tables
    assert style.uses_code_blocks
    assert style.header_style == "underline"
    assert not style.uses_emoji
    assert style.average_section_length == len(markdown.splitlines())


def test_detect_style_of_plain_document():
    markdown = "# Title\n\nText.\n\n## Usage\n\nMore text."

    style = detect_style(markdown, parse_sections(markdown))

    assert style.header_style == "hash"
    assert not style.uses_tables
    assert style.average_section_length == 2.5
