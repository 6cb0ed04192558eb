"""Per-system task: one connection, one report per trailing month."""

from t3rep.connection import create_connection
from t3rep.errors import DatabaseConnectionError
from t3rep.report import month_windows
from t3rep.reporter import Reporter


class Task:
    """Generates all monthly reports of one system."""

    def __init__(self, now, name, dsn, cf):
        self.now = now
        self.name = name
        self.dsn = dsn
        self.directory = cf.directory
        self.query = cf.query
        self.months = cf.months
        self.fields = cf.fields

    def reports(self):
        return month_windows(self.name, self.directory, self.now, self.months)

    def exec(self, logs, connect=create_connection):
        """
        Open the system's connection and generate its reports in order.

        Args:
            logs: Logs sink pair
            connect: Connection factory taking a connection string

        Returns:
            list: (Report, ReportStatus) pairs, most recent month first

        Raises:
            DatabaseConnectionError: If the connection cannot be opened
        """
        try:
            conn = connect(self.dsn)
        except DatabaseConnectionError as e:
            raise DatabaseConnectionError(f'cannot connect to database: {e}') from e

        try:
            reporter = Reporter(conn, self.query, self.fields)
            return [(rep, reporter.generate(logs, rep)) for rep in self.reports()]
        finally:
            conn.close()
