"""Giveaway bot toolkit: HTTP client, status tracking, config paths, backups and terminal helpers."""

__version__ = "0.1.0"