"""
t3rep - Monthly CSV report extractor

Runs a parameterized query against every configured database system, once per
trailing calendar month, and writes each result set to
<directory>/<system>-<YYYY>-<MM>.csv. Existing files are never regenerated.
"""

__version__ = '1.0.0'
