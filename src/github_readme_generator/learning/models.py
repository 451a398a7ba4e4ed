from typing import Literal

from pydantic import BaseModel, Field


class SectionPattern(BaseModel):
    """One heading-delimited region of a Markdown document."""

    title: str = Field(description="The heading text. `Introduction` for content that precedes the first heading.")
    level: int = Field(ge=0, le=6, description="The heading depth. 0 means the implicit introduction block.")
    content: list[str] = Field(default_factory=list, description="The raw lines belonging to the section.")
    frequency: int = Field(default=1, ge=1, description="The number of documents that contributed to this section.")
    position: float = Field(default=0, description="The (running average) ordinal position of the section in its documents.")
    keywords: list[str] = Field(default_factory=list, description="Lowercase content words from the title.")


class StylePattern(BaseModel):
    """A document-wide stylistic fingerprint."""

    uses_emoji: bool = Field(default=False, description="Whether the document uses emoji.")
    uses_shields: bool = Field(default=False, description="Whether the document uses shields.io style badges.")
    uses_code_blocks: bool = Field(default=False, description="Whether the document uses fenced code blocks.")
    uses_tables: bool = Field(default=False, description="Whether the document uses tables.")
    uses_images: bool = Field(default=False, description="Whether the document uses images other than badges.")
    average_section_length: float = Field(default=0, description="The mean number of lines per section.")
    header_style: Literal["underline", "hash"] = Field(default="hash", description="The heading style of the document.")


class ReadmePattern(BaseModel):
    """A learned (section structure, style) fingerprint."""

    sections: list[SectionPattern] = Field(default_factory=list, description="The sections, in document order.")
    style: StylePattern = Field(default_factory=StylePattern, description="The style of the document the pattern was created from.")
    frequency: int = Field(default=1, ge=1, description="The number of documents folded into this pattern.")

    @property
    def section_titles(self) -> list[str]:
        return [section.title for section in self.sections]
