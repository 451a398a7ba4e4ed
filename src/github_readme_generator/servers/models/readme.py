from typing import Literal

from pydantic import BaseModel, Field


class GeneratedReadme(BaseModel):
    """A generated README and its HTML preview."""

    subject: str = Field(description="The repository (`owner/repo`) or user the README was generated for.")
    kind: Literal["repository", "profile"] = Field(description="Whether this is a repository README or a profile README.")
    category: str | None = Field(default=None, description="The category the repository was filed under for pattern matching.")
    used_learned_pattern: bool = Field(
        default=False, description="Whether the README follows a learned pattern rather than the basic skeleton."
    )
    markdown: str = Field(description="The README as Markdown.")
    html: str = Field(description="The README rendered to HTML.")


class LearnedReadme(BaseModel):
    """The outcome of learning from a repository's README."""

    full_name: str = Field(description="The repository that was learned from.")
    learned: bool = Field(description="Whether a pattern was learned. False when there is no README or it has no structure.")
    category: str | None = Field(default=None, description="The category the pattern was filed under.")


class LearnedPopularReadmes(BaseModel):
    """The outcome of learning from the most starred repositories of a language."""

    language: str = Field(description="The language that was searched.")
    learned: int = Field(description="The number of repositories a pattern was learned from.")
    categories: dict[str, int] = Field(description="The number of stored patterns per category after learning.")
