# -*- coding: utf-8 -*-
"""
Utility helper functions.
"""

from datetime import datetime, date
from decimal import Decimal
from typing import Optional, Union


def format_date(
    value: Optional[Union[datetime, date, str]],
    format_str: str = "%b %d, %Y"
) -> str:
    """
    Format a date value for display.

    Args:
        value: Date, datetime, or ISO string
        format_str: Output format string

    Returns:
        Formatted date string or empty string
    """
    if not value:
        return ""

    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value

    if isinstance(value, (datetime, date)):
        return value.strftime(format_str)

    return str(value)


def format_number(value: Optional[Union[int, float, Decimal]], decimals: int = 0) -> str:
    """
    Format a number with thousands separator.

    Args:
        value: Number to format
        decimals: Decimal places

    Returns:
        Formatted number string
    """
    if value is None:
        return ""

    try:
        if decimals == 0:
            return f"{int(value):,}"
        else:
            return f"{Decimal(value):,.{decimals}f}"
    except (ValueError, TypeError, ArithmeticError):
        return str(value)
