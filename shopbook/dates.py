"""Date utilities for shopbook.

Pure functions for date normalization and formatting.
"""

from datetime import datetime

import pandas as pd


def date_stamp(now: datetime) -> str:
    """Format a datetime as a transaction date (YYYY-MM-DD)."""
    return now.strftime("%Y-%m-%d")


def time_stamp(now: datetime) -> str:
    """Format a datetime as a transaction time (HH:MM, 24-hour)."""
    return now.strftime("%H:%M")


def normalize_date(raw_date: str) -> str:
    """Normalize a user-entered date to YYYY-MM-DD.

    Args:
        raw_date: Date in YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY or ISO timestamp form.

    Returns:
        Date string in YYYY-MM-DD format.

    Raises:
        ValueError: If the date cannot be parsed.
    """
    try:
        if len(raw_date) >= 10 and raw_date[4] == "-":
            parsed = pd.to_datetime(raw_date)
        else:
            parsed = pd.to_datetime(raw_date, dayfirst=True)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{raw_date}': {e}") from e

    if pd.isna(parsed):
        raise ValueError(f"Could not parse date '{raw_date}'")
    return parsed.strftime("%Y-%m-%d")


def normalize_time(raw_time: str) -> str:
    """Normalize a user-entered time to HH:MM (24-hour).

    Args:
        raw_time: Time such as "09:15", "9:15" or "21:05".

    Returns:
        Time string in HH:MM format.

    Raises:
        ValueError: If the time cannot be parsed.
    """
    try:
        parsed = datetime.strptime(raw_time.strip(), "%H:%M")
    except ValueError as e:
        raise ValueError(f"Could not parse time '{raw_time}': {e}") from e
    return parsed.strftime("%H:%M")


def format_date_display(date: str) -> str:
    """Format a stored date for display.

    Args:
        date: Date in YYYY-MM-DD format (an ISO timestamp is also accepted).

    Returns:
        Human-readable date (e.g., "Jan 05, 2025").
    """
    dt = datetime.strptime(date[:10], "%Y-%m-%d")
    return dt.strftime("%b %d, %Y")
