"""Workspace opportunity export, search and hint service."""

__version__ = "0.1.0"
