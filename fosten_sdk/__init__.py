"""Fosten SDK - thin clients for third-party services."""
