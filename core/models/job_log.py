"""Job log model for background job execution tracking."""

from typing import Any, ClassVar

from django.db import models
from django.utils import timezone

from core.enums import JobStatus


class JobLog(models.Model):
    """Execution record for one run of a scheduled job.

    Attributes:
        job_name: Name of the job (daily_digest, immediate_alerts, tide-import).
        status: started, completed or failed.
        started_at: When the run started.
        completed_at: When the run finished (either way).
        duration_ms: Wall-clock duration in milliseconds.
        details: Job-specific counters.
        error_message: Failure description for failed runs.
    """

    id = models.AutoField(primary_key=True)
    job_name = models.CharField(max_length=64)
    status = models.CharField(
        max_length=16,
        choices=[(job_status.value, job_status.value) for job_status in JobStatus],
        default=JobStatus.STARTED.value,
    )
    started_at = models.DateTimeField(default=timezone.now)
    completed_at = models.DateTimeField(null=True, blank=True)
    duration_ms = models.IntegerField(null=True, blank=True, db_column="duration")
    details = models.JSONField(null=True, blank=True)
    error_message = models.TextField(null=True, blank=True)

    class Meta:
        """Django model metadata."""

        db_table = "job_logs"
        managed = False
        ordering: ClassVar[list[str]] = ["-started_at"]

    def __str__(self) -> str:
        """Return string representation of the job log."""
        return f"{self.job_name} - {self.status}"

    def __repr__(self) -> str:
        """Return detailed representation of the job log."""
        return (
            f"<JobLog(id={self.id}, job_name={self.job_name}, status={self.status})>"
        )

    @classmethod
    def start(cls, job_name: str, details: dict[str, Any] | None = None) -> "JobLog":
        """Create a log row for a job run that is starting now."""
        return cls.objects.create(
            job_name=job_name,
            status=JobStatus.STARTED.value,
            details=details,
        )

    def _finish(self) -> None:
        self.completed_at = timezone.now()
        self.duration_ms = int(
            (self.completed_at - self.started_at).total_seconds() * 1000
        )

    def mark_completed(self, details: dict[str, Any] | None = None) -> None:
        """Mark the run as completed with its counters.

        Args:
            details: Job-specific counters to store.
        """
        self._finish()
        self.status = JobStatus.COMPLETED.value
        self.details = details
        self.save(update_fields=["status", "completed_at", "duration_ms", "details"])

    def mark_failed(self, error_msg: str, details: dict[str, Any] | None = None) -> None:
        """Mark the run as failed with an error message.

        Args:
            error_msg: Description of the failure.
            details: Optional extra diagnostic data.
        """
        self._finish()
        self.status = JobStatus.FAILED.value
        self.error_message = error_msg
        if details is not None:
            self.details = details
        self.save(
            update_fields=[
                "status",
                "completed_at",
                "duration_ms",
                "details",
                "error_message",
            ]
        )
