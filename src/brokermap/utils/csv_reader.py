"""CSV file reading."""

import csv
from pathlib import Path

from brokermap.domain.entities import CsvDataset
from brokermap.domain.errors import ParseError


def read_csv(csv_file_path: str) -> CsvDataset:
    """Read a CSV file into a dataset.

    The first non-blank row is the header row. Blank rows are dropped; rows
    with fewer cells than the header are kept as they are.

    Args:
        csv_file_path: Path to CSV file

    Returns:
        CsvDataset with the header row at ``rows[0]``

    Raises:
        FileNotFoundError: If CSV file doesn't exist
        ParseError: If the file is not readable as CSV or has no header row
    """
    csv_path = Path(csv_file_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

    try:
        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            # Try to detect delimiter
            sample = f.read(1024)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t|").delimiter
            except csv.Error:
                delimiter = ","

            reader = csv.reader(f, delimiter=delimiter)
            rows = [
                [cell.strip() for cell in row]
                for row in reader
                if any(cell.strip() for cell in row)
            ]
    except UnicodeDecodeError as e:
        raise ParseError(f"CSV file is not valid UTF-8: {e}")
    except csv.Error as e:
        raise ParseError(f"Malformed CSV file: {e}")

    if not rows:
        raise ParseError("CSV file has no columns")

    return CsvDataset.from_rows(rows)
