"""Utility functions for brokermap."""

from brokermap.utils.date_parser import parse_date
from brokermap.utils.number_parser import parse_number, parse_number_or, parse_optional_number
from brokermap.utils.csv_reader import read_csv

__all__ = ["parse_date", "parse_number", "parse_number_or", "parse_optional_number", "read_csv"]
