"""Background job status enumeration."""

from enum import Enum


class JobStatus(str, Enum):
    """Lifecycle states recorded in the job log."""

    STARTED = "started"
    COMPLETED = "completed"
    FAILED = "failed"
