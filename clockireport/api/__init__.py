"""Clockify API access."""

from .client import ClockifyClient

__all__ = ['ClockifyClient']
