#!/usr/bin/env python3

"""
Read one column of a CSV file and report how many values it holds.

# Count the float values in the "Close" column
python scripts/read_column.py example.csv --column Close

# Mean June temperature from a weather file (date in column 0 as M/DD/YYYY,
# integer temperature in column 1)
python scripts/read_column.py weather.csv --june-mean
"""

import argparse
import logging
import sys

import csvdoc

logger = logging.getLogger(__name__)

DAYS_IN_JUNE = 30


def june_mean(doc: csvdoc.Document) -> float:
    """Average of the integer temperatures recorded in June over 30 days."""
    total = 0
    for row in range(doc.row_count):
        if not doc.get_string_cell(0, row).startswith('6/'):
            continue
        try:
            total += doc.get_typed_cell(1, row, int)
        except csvdoc.ConversionError as e:
            logger.debug("Skipping row %d: %s", row, e)
    return total / DAYS_IN_JUNE


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Read a column from a CSV file')
    parser.add_argument('path', help='CSV file to read')
    parser.add_argument('--column', default='Close', help='Header name or zero-based index')
    parser.add_argument('--delimiter', default=',', help='Field delimiter')
    parser.add_argument('--june-mean', action='store_true',
                        help='Print the mean June temperature instead of a count')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    column = int(args.column) if args.column.isdigit() else args.column

    try:
        doc = csvdoc.open_csv(args.path, delimiter=args.delimiter)
        if args.june_mean:
            print(f"{june_mean(doc):.3f}")
        else:
            values = doc.get_column(column, float)
            print(f"Read {len(values)} values.")
    except csvdoc.CsvError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
