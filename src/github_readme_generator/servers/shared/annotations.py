from typing import Annotated

from pydantic import Field

OWNER = Annotated[str, Field(description="The owner of the repository.")]
REPO = Annotated[str, Field(description="The name of the repository.")]
USERNAME = Annotated[str, Field(description="The GitHub username.")]
LANGUAGE = Annotated[str, Field(description="The programming language, as GitHub names it. For example, `Python` or `C#`.")]
TARGET = Annotated[
    str,
    Field(description="A GitHub username, an `owner/repo` pair, or a github.com URL of a user or repository."),
]

LIMIT_REPOSITORIES = Annotated[int, Field(description="The maximum number of the user's most recently updated repositories to consider.")]
LIMIT_POPULAR_REPOSITORIES = Annotated[int, Field(description="The number of most starred repositories to learn from.")]
