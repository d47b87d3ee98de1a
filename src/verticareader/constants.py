"""
Constants for reading Vertica native binary files
"""

from datetime import date, datetime

# "NATIVE\n\xff\r\n\0"
MAGIC_NATIVE = b"NATIVE\n\xff\r\n\x00"

# Declared column width marking a variable-width column
VARIABLE_WIDTH = 0xFFFFFFFF

# Vertica counts dates and timestamps from 2000-01-01
VERTICA_EPOCH_DATE = date(2000, 1, 1)
VERTICA_EPOCH = datetime(2000, 1, 1)

MICROSECONDS_PER_SECOND = 1_000_000
SECONDS_PER_DAY = 86400

# TIMETZ packs microseconds in the high 40 bits and the zone in the low 24
TIMETZ_ZONE_BITS = 24
TIMETZ_ZONE_MASK = 0xFFFFFF

INVALID_STRING = "INVALID"
