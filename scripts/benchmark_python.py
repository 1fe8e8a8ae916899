#!/usr/bin/env python3

"""
Benchmark: load a CSV and read one float column with csvdoc, stdlib csv and pandas

# Install dependencies
pip install -e '.[bench]'

# Run benchmark with 100k rows × 10 columns
python scripts/benchmark_python.py --rows 100000 --cols 10

# Use an existing CSV file and column
python scripts/benchmark_python.py --file /path/to/prices.csv --column Close
"""

import os
import time
import tempfile
import argparse
import logging


def generate_csv(filepath: str, rows: int, cols: int) -> int:
    """Generate a numeric test CSV file and return its size in bytes."""
    print(f"Generating CSV: {rows:,} rows × {cols} columns...")
    start = time.perf_counter()

    with open(filepath, 'w') as f:
        f.write(','.join(['Date'] + [f'col{i}' for i in range(1, cols)]) + '\n')

        for row_num in range(rows):
            values = [f'{row_num * 0.25 + i:.2f}' for i in range(1, cols)]
            f.write(','.join([f'day{row_num}'] + values) + '\n')

    elapsed = time.perf_counter() - start
    size = os.path.getsize(filepath)
    print(f"  Done in {elapsed:.2f}s, file size: {size / (1024**2):.1f} MB")
    return size


def benchmark_csvdoc(filepath: str, column: str) -> tuple:
    """Benchmark csvdoc.open_csv followed by a float column read."""
    import csvdoc

    print("Benchmarking csvdoc...")

    start = time.perf_counter()
    row_count = csvdoc.count_rows(filepath)
    count_time = time.perf_counter() - start

    start = time.perf_counter()
    doc = csvdoc.open_csv(filepath)
    load_time = time.perf_counter() - start

    start = time.perf_counter()
    values = doc.get_column_array(column)
    column_time = time.perf_counter() - start

    return {
        'count_time': count_time,
        'count_rows': row_count,
        'load_time': load_time,
        'column_time': column_time,
        'rows': len(values),
    }, None


def benchmark_pandas(filepath: str, column: str) -> tuple:
    """Benchmark pandas CSV reader."""
    try:
        import pandas as pd
    except ImportError:
        return None, "pandas not installed"

    print("Benchmarking pandas...")

    start = time.perf_counter()
    df = pd.read_csv(filepath, dtype=str)
    load_time = time.perf_counter() - start

    start = time.perf_counter()
    values = df[column].astype(float).to_numpy()
    column_time = time.perf_counter() - start

    return {
        'count_time': None,
        'count_rows': None,
        'load_time': load_time,
        'column_time': column_time,
        'rows': len(values),
    }, None


def benchmark_stdlib(filepath: str, column: str) -> tuple:
    """Benchmark Python stdlib csv reader."""
    import csv

    print("Benchmarking stdlib csv...")

    start = time.perf_counter()
    with open(filepath, 'r', newline='') as f:
        rows = list(csv.reader(f))
    load_time = time.perf_counter() - start

    start = time.perf_counter()
    idx = rows[0].index(column)
    values = [float(r[idx]) for r in rows[1:]]
    column_time = time.perf_counter() - start

    return {
        'count_time': None,
        'count_rows': None,
        'load_time': load_time,
        'column_time': column_time,
        'rows': len(values),
    }, None


def format_throughput(file_size: int, seconds: float) -> str:
    """Calculate and format throughput in MB/s."""
    if seconds > 0:
        return f"{(file_size / (1024**2)) / seconds:.1f} MB/s"
    return "N/A"


def main():
    parser = argparse.ArgumentParser(description='Benchmark CSV document loading')
    parser.add_argument('--rows', type=int, default=100_000, help='Number of rows')
    parser.add_argument('--cols', type=int, default=10, help='Number of columns')
    parser.add_argument('--file', type=str, help='Use existing CSV file instead of generating')
    parser.add_argument('--column', type=str, default='col1', help='Header name of the float column to read')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if args.file:
        filepath = args.file
        file_size = os.path.getsize(filepath)
        print(f"Using existing file: {filepath} ({file_size / (1024**2):.1f} MB)")
    else:
        fd, filepath = tempfile.mkstemp(suffix='.csv')
        os.close(fd)
        file_size = generate_csv(filepath, args.rows, args.cols)

    print(f"\n{'='*60}")
    print(f"BENCHMARK: column {args.column!r}")
    print(f"File size: {file_size / (1024**2):.1f} MB")
    print(f"{'='*60}\n")

    results = {}
    try:
        for name, bench in (('csvdoc', benchmark_csvdoc),
                            ('pandas', benchmark_pandas),
                            ('stdlib', benchmark_stdlib)):
            results[name], err = bench(filepath, args.column)
            if err:
                print(f"  Skipped: {err}")
    finally:
        if not args.file:
            os.unlink(filepath)
            print("\nCleaned up temporary file")

    print(f"\n{'='*60}")
    print("RESULTS")
    print(f"{'='*60}")
    print(f"{'Library':<10} {'Load':>10} {'Column':>10} {'Throughput':>14} {'Rows':>10}")
    print(f"{'-'*60}")

    for name, result in sorted(results.items(), key=lambda x: x[1]['load_time'] if x[1] else float('inf')):
        if result:
            throughput = format_throughput(file_size, result['load_time'])
            print(f"{name:<10} {result['load_time']:>9.3f}s {result['column_time']:>9.3f}s "
                  f"{throughput:>14} {result['rows']:>10,}")

    if results.get('csvdoc'):
        print(f"\ncsvdoc count_rows: {results['csvdoc']['count_time']:.3f}s "
              f"({results['csvdoc']['count_rows']:,} records)")


if __name__ == '__main__':
    main()
