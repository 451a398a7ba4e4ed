import markdown

PREVIEW_EXTENSIONS: list[str] = ["fenced_code", "tables", "toc"]


def render_readme_html(markdown_text: str) -> str:
    """Render README Markdown to an HTML fragment for previewing."""

    return markdown.markdown(markdown_text, extensions=PREVIEW_EXTENSIONS)
