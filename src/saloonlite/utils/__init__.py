"""Utility functions for saloonlite."""

from saloonlite.utils.date_parser import parse_date, parse_datetime, date_key, get_date_range
from saloonlite.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_datetime", "date_key", "get_date_range", "parse_amount"]
