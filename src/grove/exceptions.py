"""Centralized exceptions for the grove application."""


class GroveError(Exception):
    """Base exception for all grove errors."""


class SourceFileInaccessibleError(GroveError):
    """Raised when a source file's filesystem metadata cannot be read.

    This is fatal for the document's date resolution pass. Whether it aborts
    the build or only drops the document is decided by the build policy.
    """

    def __init__(self, file_path: str, reason: Exception) -> None:
        self.file_path = file_path
        self.reason = reason
        super().__init__(f"Cannot stat source file '{file_path}': {reason}")


class RepositoryNotFoundError(GroveError):
    """Raised when no git repository encloses a path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No git repository found for '{path}'")


class GitHistoryUnavailableError(GroveError):
    """Raised when git has no commit history for a file."""

    def __init__(self, file_path: str, detail: str = "") -> None:
        self.file_path = file_path
        self.detail = detail
        message = f"No git history available for '{file_path}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ContentLoadError(GroveError):
    """Raised when a source document cannot be read from disk."""

    def __init__(self, file_path: str, reason: Exception) -> None:
        self.file_path = file_path
        super().__init__(f"Failed to load '{file_path}': {reason}")
