"""
Report generation.

A Reporter runs the report query for one window and streams the rows into the
report file. generate() wraps this in the file handling policy: existing files
are skipped, and a file whose generation failed is removed so that a report
file on disk is complete unless a "remove it manually" error was logged.
"""

import enum
import os

from t3rep.errors import QueryError, T3RepError
from t3rep.extract import extract


class ReportStatus(enum.Enum):
    SKIPPED = 'skipped'
    CREATE_FAILED = 'create_failed'
    GENERATE_FAILED = 'generate_failed'
    CLOSE_FAILED = 'close_failed'
    SUCCESS = 'success'

    @property
    def failed(self):
        return self in (ReportStatus.CREATE_FAILED, ReportStatus.GENERATE_FAILED, ReportStatus.CLOSE_FAILED)


class Reporter:
    """Executes the report query on one connection."""

    def __init__(self, conn, query, nfields):
        self.conn = conn
        self.query = query
        self.nfields = nfields

    def write(self, sink, report):
        """
        Query the report window and write the rows to sink.

        Args:
            sink: Writable text stream
            report: Report describing the window

        Returns:
            int: Number of rows written

        Raises:
            QueryError: If the query fails
            ScanError: If a row does not match the expected column count
            ReportFileError: If writing to the sink fails
        """
        try:
            cursor = self.conn.cursor()
        except Exception as e:
            raise QueryError(f'cannot query: {e}') from e
        try:
            try:
                cursor.execute(self.query, report.params())
            except Exception as e:
                raise QueryError(f'cannot query: {e}') from e
            try:
                return extract(sink, cursor, self.nfields)
            except T3RepError:
                raise
            except Exception as e:
                # Driver errors while fetching rows
                raise QueryError(f'cannot read query results: {e}') from e
        finally:
            try:
                cursor.close()
            except Exception:
                pass  # the result or the query error takes precedence

    def generate(self, logs, report):
        """
        Generate one report file.

        Args:
            logs: Logs sink pair
            report: Report to generate

        Returns:
            ReportStatus: Terminal state of the generation
        """
        logs.info.info(f'{report}: generating report')
        if report.exists():
            logs.info.info(f'{report}: exists')
            return ReportStatus.SKIPPED

        try:
            f = open(report.filename, 'w', newline='', encoding='utf-8')
        except OSError as e:
            logs.err.error(f'{report}: cannot create file: {e}')
            return ReportStatus.CREATE_FAILED

        try:
            rows = self.write(f, report)
        except Exception as e:
            logs.err.error(f'{report}: cannot generate report: {e}')
            try:
                f.close()
            except OSError:
                pass  # the generation error is the one reported
            _remove_partial(logs, report)
            return ReportStatus.GENERATE_FAILED

        try:
            f.close()
        except OSError as e:
            logs.err.error(f'{report}: cannot close file: {e}')
            _remove_partial(logs, report)
            return ReportStatus.CLOSE_FAILED

        logs.info.info(f'{report}: wrote {rows} rows')
        return ReportStatus.SUCCESS


def _remove_partial(logs, report):
    try:
        os.remove(report.filename)
    except OSError as e:
        logs.err.error(f'{report}: cannot remove partial report file, remove it manually: {e}')
