"""Fake DB-API objects and log sinks shared by the tests."""

import logging
import threading
import time

from t3rep.errors import DatabaseConnectionError
from t3rep.logs import Logs


def make_logs(name='t3rep.test'):
    err = logging.getLogger(f'{name}.error')
    info = logging.getLogger(f'{name}.info')
    err.setLevel(logging.DEBUG)
    info.setLevel(logging.DEBUG)
    return Logs(err=err, info=info)


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self.closed = False
        self._rows = iter(())

    def execute(self, query, params):
        self.conn.executed.append((query, params))
        if self.conn.delay:
            time.sleep(self.conn.delay)
        if self.conn.query_error is not None:
            raise self.conn.query_error
        self._rows = iter(self.conn.rows)

    def __iter__(self):
        for row in self._rows:
            if isinstance(row, Exception):
                raise row
            yield row

    def close(self):
        self.closed = True
        if self.conn.cursor_close_error is not None:
            raise self.conn.cursor_close_error


class FakeConnection:
    """Connection returning the same rows for every query.

    A row that is an exception instance is raised while fetching.
    """

    def __init__(self, rows=(), query_error=None, delay=0, cursor_error=None, cursor_close_error=None):
        self.rows = list(rows)
        self.query_error = query_error
        self.cursor_error = cursor_error
        self.cursor_close_error = cursor_close_error
        self.delay = delay
        self.executed = []
        self.cursors = []
        self.closed = False

    def cursor(self):
        if self.cursor_error is not None:
            raise self.cursor_error
        cursor = FakeCursor(self)
        self.cursors.append(cursor)
        return cursor

    def close(self):
        self.closed = True


class ConcurrencyProbe:
    """Connection factory counting how many connections are open at once."""

    def __init__(self, rows=(), delay=0.05, fail=()):
        self.rows = rows
        self.delay = delay
        self.fail = set(fail)
        self.lock = threading.Lock()
        self.active = 0
        self.max_active = 0
        self.attempted = []

    def __call__(self, dsn):
        with self.lock:
            self.attempted.append(dsn)
            if dsn in self.fail:
                raise DatabaseConnectionError('login failed')
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        probe = self

        class ProbeConnection(FakeConnection):
            def close(self):
                super().close()
                with probe.lock:
                    probe.active -= 1

        return ProbeConnection(rows=self.rows, delay=self.delay)
