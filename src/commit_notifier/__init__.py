"""Commit push notifications for CI workflows."""

__version__ = "0.1.0"
