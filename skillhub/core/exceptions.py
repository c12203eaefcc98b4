# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Custom Exception Hierarchy for SkillHub

Provides standardized exceptions for consistent error handling across the
loader, matcher, CLI and HTTP layer.

Usage:
    from skillhub.core.exceptions import ConfigurationError, SkipWithWarning

    if not root.is_dir():
        raise ConfigurationError(f"Skill root {root} does not exist")

    raise SkipWithWarning(skill_dir, "no SKILL.md found")

Architecture:
- Base SkillHubException for all custom exceptions
- ConfigurationError is fatal (the whole load is aborted)
- SkipWithWarning is non-fatal (one skill directory is excluded and reported)
- All exceptions include status_code and detail attributes
- Error handlers convert exceptions to standardized JSON responses
"""

from typing import Optional, Dict, Any


# =============================================================================
# Base Exception
# =============================================================================

class SkillHubException(Exception):
    """
    Base exception for all SkillHub custom exceptions.

    All custom exceptions should inherit from this class to ensure
    consistent error handling across the application.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        detail: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.detail = detail or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
            "detail": self.detail
        }


# =============================================================================
# Loading Exceptions
# =============================================================================

class ConfigurationError(SkillHubException):
    """Fatal - the skill root is missing, not a directory, or unreadable."""

    def __init__(self, message: str, detail: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=500, detail=detail)


class SkipWithWarning(SkillHubException):
    """
    Non-fatal - a single skill directory could not be loaded.

    The loader catches these, logs them and reports them alongside the
    successfully loaded skills instead of aborting the scan.
    """

    def __init__(self, skill_dir: Any, reason: str):
        self.skill_dir = str(skill_dir)
        self.reason = reason
        super().__init__(
            f"Skipping {self.skill_dir}: {reason}",
            status_code=422,
            detail={"skill_dir": self.skill_dir, "reason": reason}
        )


# =============================================================================
# Request / Lookup Exceptions
# =============================================================================

class InvalidQueryError(SkillHubException):
    """400 Bad Request - matcher input is not text."""

    def __init__(self, message: str = "Query must be a string", detail: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=400, detail=detail)


class ResourceNotFoundError(SkillHubException):
    """404 Not Found - Resource does not exist."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Any,
        detail: Optional[Dict[str, Any]] = None
    ):
        message = f"{resource_type} with id {resource_id} not found"
        detail = detail or {}
        detail.setdefault("resource_type", resource_type)
        detail.setdefault("resource_id", resource_id)
        super().__init__(message, status_code=404, detail=detail)


class DuplicateSkillError(SkillHubException):
    """409 Conflict - two records share the same skill id."""

    def __init__(self, skill_id: str, detail: Optional[Dict[str, Any]] = None):
        detail = detail or {}
        detail["skill_id"] = skill_id
        super().__init__(f"Duplicate skill id '{skill_id}'", status_code=409, detail=detail)
