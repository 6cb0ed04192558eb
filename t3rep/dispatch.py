"""
Concurrent report generation across systems.

Every system gets its own Task. Tasks run on a thread pool whose size is the
parallelism limit, so at most that many systems query their databases at the
same time. A failing system never stops the others.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass

from t3rep.connection import create_connection
from t3rep.reporter import ReportStatus
from t3rep.task import Task


@dataclass
class RunSummary:
    systems: int = 0
    systems_failed: int = 0
    reports_generated: int = 0
    reports_skipped: int = 0
    reports_failed: int = 0

    def add(self, statuses):
        for _, status in statuses:
            if status is ReportStatus.SUCCESS:
                self.reports_generated += 1
            elif status is ReportStatus.SKIPPED:
                self.reports_skipped += 1
            elif status.failed:
                self.reports_failed += 1

    def report(self):
        """Generate summary line"""
        return (f'Summary: {self.systems} systems ({self.systems_failed} failed), '
                f'{self.reports_generated} reports generated, '
                f'{self.reports_skipped} skipped, {self.reports_failed} failed')


def run(cf, logs, now, parallel=1, connect=create_connection):
    """
    Generate the reports of every configured system.

    Args:
        cf: Config
        logs: Logs sink pair
        now: Reference instant; windows end before its month
        parallel: Maximum number of systems processed at once, floored at 1
        connect: Connection factory taking a connection string

    Returns:
        RunSummary: Counts of systems and reports by outcome
    """
    parallel = max(1, parallel)
    summary = RunSummary(systems=len(cf.systems))
    if not cf.systems:
        return summary

    with ThreadPoolExecutor(max_workers=parallel, thread_name_prefix='t3rep') as executor:
        futures = {
            executor.submit(Task(now, name, dsn, cf).exec, logs, connect): name
            for name, dsn in cf.systems.items()
        }
        for future in as_completed(futures):
            name = futures[future]
            try:
                summary.add(future.result())
            except Exception as e:
                summary.systems_failed += 1
                logs.err.error(f'fatal: creating report: {name}: {e}')

    return summary
