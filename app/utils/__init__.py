"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    format_clock_minute,
    get_app_timezone,
    now_in_app_naive_datetime,
    now_in_app_timezone,
    truncate_to_minute,
    whole_days_between,
)

__all__ = [
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "format_clock_minute",
    "get_app_timezone",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
    "truncate_to_minute",
    "whole_days_between",
]
