"""
Exceptions raised while reading Vertica native binary files
"""


class FormatError(ValueError):
    """The binary data does not match the native file layout"""


class SchemaError(ValueError):
    """The column types file cannot be used for the requested output"""
