"""Utility helpers for reusable functionality."""

from .datetime import ensure_utc, ensure_utc_naive, now_utc, now_utc_naive
from .text import sanitize_html

__all__ = [
    "ensure_utc",
    "ensure_utc_naive",
    "now_utc",
    "now_utc_naive",
    "sanitize_html",
]
