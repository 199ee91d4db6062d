"""Utility functions for fincontrol."""

from fincontrol.utils.date_parser import parse_date, parse_iso_date, today_in_timezone
from fincontrol.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_iso_date", "today_in_timezone", "parse_amount"]
