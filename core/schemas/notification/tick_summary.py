"""Scheduler tick summary schema."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class TickSummary(BaseSchemaModel):
    """Counters produced by one pass of a delivery job."""

    job_name: str
    users_considered: int = Field(0, description="Eligible delivery contexts")
    users_notified: int = 0
    notifications_sent: int = Field(0, description="Payloads handed to the channel")
    devices_reached: int = 0
    users_skipped: int = 0
    users_failed: int = 0
    timed_out: bool = False

    def as_details(self) -> dict:
        """Return the counters for the job log."""
        return self.model_dump(exclude={"job_name"})
