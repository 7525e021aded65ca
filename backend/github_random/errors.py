"""Errors raised while loading languages, searching and picking repositories."""


class GitHubRandomError(RuntimeError):
    """Base class for every failure this package raises."""


class CatalogLoadFailed(GitHubRandomError):
    """The language resource could not be read or parsed.

    Only the catalog loader sees this one; it logs it and keeps the
    previous catalog.
    """


class SearchFailed(GitHubRandomError):
    """The repository search did not produce usable results."""

    def __init__(self, message: str = "fetch error", *, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class MalformedResponse(SearchFailed):
    """The search response did not carry a well-formed ``items`` list."""

    def __init__(self, message: str = "malformed search response"):
        super().__init__(message)


class EmptySelection(GitHubRandomError):
    """A random pick was requested over zero repositories."""

    def __init__(self, message: str = "no repositories to choose from"):
        super().__init__(message)
