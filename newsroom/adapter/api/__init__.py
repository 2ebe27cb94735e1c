"""Newsroom API client."""

from .client import NewsroomClient, error_for_response

__all__ = ["NewsroomClient", "error_for_response"]
