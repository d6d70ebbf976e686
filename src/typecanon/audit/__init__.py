"""Audit logging subsystem for typecanon.

Main Components
---------------
- AuditLogger: JSONL event logger
- LogEvent: one structured event
"""

from typecanon.audit.helpers import generate_run_id
from typecanon.audit.logger import AuditLogger
from typecanon.audit.models import LogEvent

__all__ = [
    "AuditLogger",
    "LogEvent",
    "generate_run_id",
]
