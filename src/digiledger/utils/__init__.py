"""Utility functions for digiledger."""

from digiledger.utils.date_parser import parse_date, parse_date_range
from digiledger.utils.amount_parser import parse_amount, parse_optional_amount

__all__ = ["parse_date", "parse_date_range", "parse_amount", "parse_optional_amount"]
