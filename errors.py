"""
Error taxonomy for the README generator.

Every error raised on purpose carries the HTTP status the endpoint answers
with; the Flask error handler in app.py turns it into {"error": message}.
"""

from __future__ import annotations

from typing import Optional


class ReadmeGeneratorError(RuntimeError):
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(ReadmeGeneratorError):
    status_code = 500


class ValidationError(ReadmeGeneratorError):
    status_code = 400


class ProfileNotFoundError(ReadmeGeneratorError):
    status_code = 404


class UpstreamError(ReadmeGeneratorError):
    status_code = 500


class GitHubAPIError(UpstreamError):
    """Raised for any failed GitHub REST call.

    `upstream_status` is the status GitHub answered with, or None when the
    request never got a response (DNS, connection reset, ...).
    """

    def __init__(self, message: str, upstream_status: Optional[int] = None) -> None:
        super().__init__(message, 404 if upstream_status == 404 else None)
        self.upstream_status = upstream_status

    @property
    def not_found(self) -> bool:
        return self.upstream_status == 404


class CompletionError(UpstreamError):
    pass


class GenerationEmptyError(ReadmeGeneratorError):
    status_code = 500
