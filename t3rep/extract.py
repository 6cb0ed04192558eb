"""
Row extraction and CSV line formatting.

Output dialect: fields separated by ';', every field wrapped in double quotes,
embedded double quotes escaped as \\", CRLF line terminator, no header row.
Nothing else is escaped, so semicolons, backslashes and line breaks inside a
field are written as is.
"""

from datetime import date, datetime, time

from t3rep.errors import ReportFileError, ScanError


TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'


def format_csv(fields):
    """Format one row of string fields as a CSV line, including the CRLF terminator."""
    quoted = ['"' + f.replace('"', '\\"') + '"' for f in fields]
    return ';'.join(quoted) + '\r\n'


def scan_value(value, column):
    """
    Convert a native column value to its text representation.

    Args:
        value: Value returned by the database driver
        column: Zero-based column index, used in error messages

    Returns:
        str: Text representation of the value

    Raises:
        ScanError: If the value is NULL
    """
    if value is None:
        raise ScanError(f'column {column}: converting NULL to string is unsupported')
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode('utf-8')
        except UnicodeDecodeError as e:
            raise ScanError(f'column {column}: {e}') from e
    if isinstance(value, bool):
        return '1' if value else '0'
    # datetime is a date subclass, check it first
    if isinstance(value, datetime):
        return value.strftime(TIMESTAMP_FORMAT)
    if isinstance(value, date):
        return value.strftime('%Y-%m-%d')
    if isinstance(value, time):
        return value.strftime('%H:%M:%S')
    return str(value)


def scan_row(row, nfields):
    """Scan a result row into exactly nfields strings."""
    if len(row) != nfields:
        raise ScanError(f'expected {nfields} columns, got {len(row)}')
    return [scan_value(value, i) for i, value in enumerate(row)]


def extract(sink, rows, nfields):
    """
    Stream result rows to a sink as CSV lines.

    Args:
        sink: Writable text stream
        rows: Iterable of result rows (e.g. an executed DB-API cursor)
        nfields: Exact number of columns expected in every row

    Returns:
        int: Number of rows written

    Raises:
        ScanError: If a row cannot be scanned
        ReportFileError: If writing to the sink fails
    """
    count = 0
    for row in rows:
        try:
            fields = scan_row(row, nfields)
        except ScanError as e:
            raise ScanError(f'cannot scan query: {e}') from e
        line = format_csv(fields)
        try:
            sink.write(line)
        except (OSError, ValueError) as e:
            raise ReportFileError(f'cannot write line: {e}') from e
        count += 1
    return count
