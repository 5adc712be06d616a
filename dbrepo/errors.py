"""Error types for dbrepo.

Only these errors cross the boundary of the repository model assembly.
Per-column naming/type rule failures are absorbed and never raised.
"""

from typing import Optional, Dict, Any


class RepositoryError(Exception):
    """Base exception for repository model errors."""

    def __init__(self, message: str, code: str = "REPOSITORY_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for reporting."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class MetadataConnectionError(RepositoryError):
    """Cannot acquire or release the metadata source connection."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONNECTION_ERROR", details=details)


class IntrospectionError(RepositoryError):
    """Error while reading metadata (e.g. table enumeration failed)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="INTROSPECTION_ERROR", details=details)


class ConfigurationError(RepositoryError):
    """Invalid or incomplete configuration."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)
