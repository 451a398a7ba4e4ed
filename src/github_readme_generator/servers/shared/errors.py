ExtraInfoType = dict[str, str | None]


class ServerError(Exception):
    """A request error from the GitHub README server."""

    def __init__(self, message: str, extra_info: ExtraInfoType | None = None):
        msg = message
        if extra_info:
            msg += " (" + ", ".join([f"{key}: {value}" for key, value in extra_info.items() if value is not None]) + ")"
        super().__init__(msg)


class InvalidTargetError(ServerError):
    """The caller named something that is neither a GitHub user nor a repository."""

    def __init__(self, target: str):
        super().__init__(message="Expected a GitHub username, an `owner/repo` pair, or a github.com URL.", extra_info={"target": target})
