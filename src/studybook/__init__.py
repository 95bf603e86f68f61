"""Studybook: focus timer and session-based project tracking."""

__version__ = "0.1.0"
