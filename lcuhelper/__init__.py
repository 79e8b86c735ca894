"""Helpers for the League of Legends client: API client, event stream, premade analysis, scoring and overlay geometry."""

__version__ = "0.1.0"