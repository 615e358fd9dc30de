#------------------------------------------------------------
#                          errors.py
#      Error types surfaced by the fetch and export steps.

from typing import Optional


class GitfolioError(Exception):
    pass


class InvalidUsername(GitfolioError):
    def __init__(self, username: str):
        super().__init__(f"Invalid username format: {username!r}")
        self.username = username


class NotFound(GitfolioError):
    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class RateLimitExceeded(GitfolioError):
    """Raised on a local quota pre-check or a remote 403.

    ``retry_after_minutes`` is only known for the local pre-check.
    """

    def __init__(self, retry_after_minutes: Optional[int] = None):
        if retry_after_minutes is None:
            message = "Rate limit exceeded. Try again later."
        else:
            message = f"Rate limit exceeded. Try again in {retry_after_minutes} minutes."
        super().__init__(message)
        self.retry_after_minutes = retry_after_minutes


class RemoteError(GitfolioError):
    def __init__(self, status: Optional[int] = None, detail: str = ""):
        if status is None:
            message = f"GitHub API request failed: {detail}" if detail else "GitHub API request failed"
        else:
            message = f"GitHub API error: {status}"
        super().__init__(message)
        self.status = status


class NoPublicRepos(GitfolioError):
    def __init__(self, username: str):
        super().__init__("No public repositories found")
        self.username = username


class NoData(GitfolioError):
    def __init__(self):
        super().__init__("No data to export")
