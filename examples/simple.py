"""
Simple example showing how to inspect a Vertica native binary file

Usage: python examples/simple.py EXPORT.bin TYPES.txt
"""

import os
import sys

# Add package to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))
from verticareader import WriterOptions, open_native, process_file, read_native

if len(sys.argv) != 3:
    sys.exit(__doc__.strip().splitlines()[-1])

native_file, types_file = sys.argv[1:]

# Header only
with open_native(native_file) as native:
    print(native.definitions)

# First rows as a DataFrame
df = read_native(native_file, types_file, limit=10)
print("\nFirst rows:")
print(df)

print("\nMissing values per column:")
for column in df.columns:
    print(f"- {column}: {df[column].isna().sum()}")

# Convert the whole file to JSON Lines next to the input
count = process_file(native_file, types_file, WriterOptions(output_format="jsonl"))
print(f"\nWrote {count} rows")
