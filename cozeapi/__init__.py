"""Synchronous client for the Coze open API: files, users, templates and workflow runs."""

__version__ = "0.1.0"