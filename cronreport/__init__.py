"""Compile Report definitions into Kubernetes CronJobs and submit them.

Quick example::

    >>> from cronreport.report import EXAMPLE_REPORT
    >>> from cronreport.workload import compile_report
    >>> compile_report(EXAMPLE_REPORT).identity
    'example'

"""

from __future__ import annotations

__version__ = "0.1.0"
