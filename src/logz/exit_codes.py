"""Exit codes for the ``logz`` command line.

Code  Meaning
----  -------
  0   Success — page or text written
  1   Violation — input document failed validation
  2   Error — missing/unreadable file, usage error
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    VIOLATION = 1
    ERROR = 2
