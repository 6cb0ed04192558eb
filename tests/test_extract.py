"""
Unit tests for CSV formatting and row extraction.
"""
import csv
import io
import unittest
from datetime import date, datetime, time
from decimal import Decimal

from t3rep.errors import ReportFileError, ScanError
from t3rep.extract import extract, format_csv, scan_row, scan_value


class TestFormatCsv(unittest.TestCase):

    def test_plain_fields(self):
        self.assertEqual(format_csv(['a', 'b', 'c']), '"a";"b";"c"\r\n')

    def test_single_field(self):
        self.assertEqual(format_csv(['x']), '"x"\r\n')

    def test_empty_field(self):
        self.assertEqual(format_csv(['', 'b']), '"";"b"\r\n')

    def test_no_fields(self):
        self.assertEqual(format_csv([]), '\r\n')

    def test_embedded_quote(self):
        self.assertEqual(format_csv(['a"b']), '"a\\"b"\r\n')

    def test_special_characters_pass_through(self):
        line = format_csv(['a;b', 'c\\d', 'e\r\nf'])
        self.assertEqual(line, '"a;b";"c\\d";"e\r\nf"\r\n')

    def test_round_trip_plain_fields(self):
        fields = ['2024-02-01 00:00:00', 'plant 1', '42', 'x.y-z']
        line = format_csv(fields)
        parsed = next(csv.reader(io.StringIO(line), delimiter=';', quotechar='"',
                                 escapechar='\\', doublequote=False))
        self.assertEqual(parsed, fields)


class TestScan(unittest.TestCase):

    def test_native_types(self):
        self.assertEqual(scan_value('text', 0), 'text')
        self.assertEqual(scan_value(b'bytes', 0), 'bytes')
        self.assertEqual(scan_value(42, 0), '42')
        self.assertEqual(scan_value(Decimal('1.50'), 0), '1.50')
        self.assertEqual(scan_value(True, 0), '1')
        self.assertEqual(scan_value(False, 0), '0')
        self.assertEqual(scan_value(datetime(2024, 2, 3, 4, 5, 6, 789), 0), '2024-02-03 04:05:06')
        self.assertEqual(scan_value(date(2024, 2, 3), 0), '2024-02-03')
        self.assertEqual(scan_value(time(4, 5, 6), 0), '04:05:06')

    def test_null_is_scan_error(self):
        with self.assertRaises(ScanError) as ctx:
            scan_value(None, 3)
        self.assertIn('column 3', str(ctx.exception))

    def test_undecodable_bytes(self):
        with self.assertRaises(ScanError):
            scan_value(b'\xff\xfe', 0)

    def test_row_width_mismatch(self):
        with self.assertRaises(ScanError):
            scan_row(('a', 'b'), 3)
        with self.assertRaises(ScanError):
            scan_row(('a', 'b', 'c', 'd'), 3)

    def test_row(self):
        self.assertEqual(scan_row(('a', 1, b'c'), 3), ['a', '1', 'c'])


class FailingSink:
    def __init__(self, fail_after):
        self.lines = []
        self.fail_after = fail_after

    def write(self, text):
        if len(self.lines) >= self.fail_after:
            raise OSError(28, 'No space left on device')
        self.lines.append(text)
        return len(text)


class TestExtract(unittest.TestCase):

    def test_streams_rows(self):
        sink = io.StringIO()
        count = extract(sink, [('a', 1), ('b"', 2)], 2)

        self.assertEqual(count, 2)
        self.assertEqual(sink.getvalue(), '"a";"1"\r\n"b\\"";"2"\r\n')

    def test_no_rows(self):
        sink = io.StringIO()
        self.assertEqual(extract(sink, [], 5), 0)
        self.assertEqual(sink.getvalue(), '')

    def test_scan_failure_keeps_written_rows(self):
        sink = io.StringIO()
        with self.assertRaises(ScanError) as ctx:
            extract(sink, [('a', 'b'), ('c', 'd'), ('e',)], 2)

        self.assertTrue(str(ctx.exception).startswith('cannot scan query'))
        self.assertEqual(sink.getvalue(), '"a";"b"\r\n"c";"d"\r\n')

    def test_write_failure(self):
        sink = FailingSink(fail_after=1)
        with self.assertRaises(ReportFileError) as ctx:
            extract(sink, [('a',), ('b',), ('c',)], 1)

        self.assertIn('cannot write line', str(ctx.exception))
        self.assertEqual(sink.lines, ['"a"\r\n'])


if __name__ == '__main__':
    unittest.main()
