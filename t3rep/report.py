"""
Monthly report windows.

A report covers one calendar month of local wall-clock time, from the first day
at 00:00:00 to the last day at 23:59:59, and is written to
<directory>/<name>-<YYYY>-<MM>.csv.
"""

import calendar
import os
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List


QUERY_TIME_FORMAT = '%Y-%m-%d %H:%M:%S'


def add_months(dt, months):
    """
    Add a number of calendar months to a datetime.

    The year rolls over in both directions and the day of month is clamped to
    the length of the target month (Jan 31 + 1 month -> Feb 28/29). Time of day
    and tzinfo are kept.

    Args:
        dt: Datetime to shift
        months: Number of months to add, may be negative

    Returns:
        datetime: Shifted datetime
    """
    index = dt.year * 12 + (dt.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def month_start(dt):
    """Return midnight on the first day of dt's month, keeping dt's tzinfo."""
    return dt.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


@dataclass(frozen=True)
class Report:
    name: str
    start: datetime
    end: datetime
    filename: str

    def __str__(self):
        return self.filename

    def exists(self):
        """True if the report file can be stat'ed. Any stat error counts as missing."""
        return os.path.exists(self.filename)

    def params(self):
        """Query parameters for the window: (start, end) as 'YYYY-MM-DD HH:MM:SS'."""
        return (self.start.strftime(QUERY_TIME_FORMAT), self.end.strftime(QUERY_TIME_FORMAT))


def make_report(name, directory, start):
    """Build the report for the month starting at start."""
    end = add_months(start, 1) - timedelta(seconds=1)
    filename = os.path.join(directory, f'{name}-{start.year}-{start.month:02d}.csv')
    return Report(name=name, start=start, end=end, filename=filename)


def month_windows(name, directory, now, months) -> List[Report]:
    """
    Reports for the trailing calendar months before now's month.

    The current (possibly partial) month is never included. Reports are
    ordered most recent first. A non-positive months count yields no reports.
    """
    last = month_start(now)
    reports = []
    for _ in range(max(0, months)):
        last = add_months(last, -1)
        reports.append(make_report(name, directory, last))
    return reports
