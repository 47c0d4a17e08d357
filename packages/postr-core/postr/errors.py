"""
Error hierarchy for Postr.

Each error carries the HTTP status it maps to so the API layer can
translate it into a response envelope without a lookup table.
"""

from typing import Any, Dict, List, Optional


class PostrError(Exception):
    """Base class for all Postr errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r})"


class ValidationError(PostrError):
    """
    Input failed validation.

    Attributes:
        errors: Mapping of field name to the list of messages for that field
    """

    status_code = 400

    def __init__(self, errors: Dict[str, List[str]], message: str = "Validation failed"):
        self.errors = errors
        super().__init__(message, details={"validation": errors})


class NotFoundError(PostrError):
    """The targeted row does not exist."""

    status_code = 404

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"{resource} not found")


class DatabaseError(PostrError):
    """Connection or query failure in the database layer."""

    status_code = 500


class AdapterNotInitializedError(DatabaseError):
    """Raised when the adapter is used before initialize() succeeded."""

    def __init__(self, backend: str):
        self.backend = backend
        super().__init__(
            f"Database adapter ({backend}) not initialized. Call initialize() first."
        )


class ConfigError(PostrError):
    """
    Invalid configuration.

    Startup halts on this error; `errors` lists every violated constraint.
    """

    def __init__(self, errors: List[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = errors
        super().__init__("Invalid configuration: " + "; ".join(errors))
