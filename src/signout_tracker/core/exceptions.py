from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when a system password or PIN does not match."""


class AuthRejected(DomainError):
    """Raised client-side when the auth API explicitly rejects credentials."""

    def __init__(self, message: str | None = None, status_code: int | None = None):
        super().__init__(message or "")
        self.message = message
        self.status_code = status_code


class TransportError(DomainError):
    """Raised client-side when the auth API cannot be reached or answers garbage."""


class ConfigurationError(DomainError):
    """Raised when the login view is missing a control it needs."""
