"""Custom exception hierarchy for CodeScout.

Every error that can cross the request boundary carries the HTTP status
code it maps to, so the server can turn it into a response without a
lookup table.
"""


class CodeScoutError(Exception):
    """Base exception for all CodeScout errors.

    All custom exceptions should inherit from this class to allow
    callers to catch all CodeScout-specific errors with a single
    except clause when appropriate.
    """

    status_code: int = 500


# =============================================================================
# Validation Errors
# =============================================================================

class ValidationError(CodeScoutError):
    """Base exception for input validation errors."""

    status_code = 400


class InvalidInputError(ValidationError):
    """Missing content or a malformed request body."""
    pass


class UnsupportedLanguageError(ValidationError):
    """Snippet language is outside the supported set."""

    def __init__(self, message: str, language: str | None = None):
        super().__init__(message)
        self.language = language


class InvalidSourceError(ValidationError):
    """URL is not recognized as a GitHub repository reference."""
    pass


# =============================================================================
# Result Errors
# =============================================================================

class EmptyResultError(CodeScoutError):
    """Repository holds no files in a supported language."""

    status_code = 404


# =============================================================================
# Client Errors (subprocess/network collaborators)
# =============================================================================

class ClientError(CodeScoutError):
    """Base exception for external collaborator errors."""
    pass


class RepositoryFetchError(ClientError):
    """Cloning or reading the repository failed."""
    pass


class LintError(ClientError):
    """The lint engine failed or produced unreadable output."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str | None = None):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class AdvisorError(ClientError):
    """The review model call failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        # Upstream HTTP status, not the one we answer with.
        self.upstream_status = status_code
