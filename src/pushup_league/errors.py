"""Business-rule errors for pushup-league.

Core helpers raise these; the store boundary turns them into
{"success": False, "error": code, "message": ...} results.
"""

from __future__ import annotations


class PushupLeagueError(Exception):
    """Base class for expected, non-fatal rule violations."""

    code = "error"

    def __init__(self, message: str, warnings: list[str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.warnings = warnings or []

    def to_result(self) -> dict:
        result: dict = {"success": False, "error": self.code, "message": self.message}
        if self.warnings:
            result["warnings"] = list(self.warnings)
        return result


class ValidationError(PushupLeagueError):
    code = "validation"


class NotFoundError(PushupLeagueError):
    code = "not_found"


class AlreadyClaimedError(PushupLeagueError):
    code = "already_claimed"


class NotCompletedError(PushupLeagueError):
    code = "not_completed"
