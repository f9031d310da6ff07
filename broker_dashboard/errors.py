"""Custom exceptions for the broker dashboard."""

from __future__ import annotations


class BrokerDashboardError(Exception):
    """Base error for dashboard failures."""


class ApiError(BrokerDashboardError):
    """Raised when a query endpoint answers with a non-success status."""

    def __init__(self, path: str, status: int, body: object) -> None:
        super().__init__(f"API error {status} for {path}")
        self.path = path
        self.status = status
        self.body = body


class LoginError(BrokerDashboardError):
    """Raised when a sign-in attempt is rejected."""
