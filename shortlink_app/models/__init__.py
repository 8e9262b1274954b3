"""
Database models for the shortlink service.

A single table holds every mapping: key = short code, value = target URL.
"""

from .url import UrlRecord

__all__ = ["UrlRecord"]
