"""Persisted API settings."""

from .store import API_ENDPOINT_KEY, API_KEY_KEY, CredentialStore

__all__ = ["API_ENDPOINT_KEY", "API_KEY_KEY", "CredentialStore"]
