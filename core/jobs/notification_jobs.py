"""Background jobs for the notification delivery passes.

Each job runs one pass of the delivery gate and records the outcome in
the job log. They are called inline by the scheduler on every tick and can
also be enqueued on the RQ queue for a manual run.
"""

from collections.abc import Callable

import structlog

from core.constants.notifications import (
    DAILY_DIGEST_JOB_NAME,
    IMMEDIATE_ALERTS_JOB_NAME,
)
from core.exceptions import PushNotConfiguredError
from core.models import JobLog
from core.schemas.notification import TickSummary
from core.services.delivery_gate import DeliveryGate

logger = structlog.get_logger(__name__)


def _run_logged(
    job_name: str, run: Callable[[float | None], TickSummary], deadline: float | None
) -> TickSummary | None:
    job_log = JobLog.start(job_name)

    try:
        summary = run(deadline)
    except PushNotConfiguredError as e:
        job_log.mark_failed(str(e))
        logger.error("notification_job_not_configured", job_name=job_name)
        return None
    except Exception as e:
        job_log.mark_failed(str(e), {"error_type": type(e).__name__})
        logger.error(
            "notification_job_failed",
            job_name=job_name,
            error=str(e),
            exc_info=True,
        )
        return None

    job_log.mark_completed(summary.as_details())
    return summary


def send_daily_digest_job(
    gate: DeliveryGate | None = None, deadline: float | None = None
) -> TickSummary | None:
    """Run the daily digest pass.

    Args:
        gate: Delivery gate to use; a default one is built when omitted
        deadline: ``time.monotonic()`` value bounding the pass

    Returns:
        Counters of the pass, or None if it failed
    """
    gate = gate or DeliveryGate()
    return _run_logged(DAILY_DIGEST_JOB_NAME, gate.run_daily_digest, deadline)


def send_immediate_alerts_job(
    gate: DeliveryGate | None = None, deadline: float | None = None
) -> TickSummary | None:
    """Run the immediate tide alert pass.

    Args:
        gate: Delivery gate to use; a default one is built when omitted
        deadline: ``time.monotonic()`` value bounding the pass

    Returns:
        Counters of the pass, or None if it failed
    """
    gate = gate or DeliveryGate()
    return _run_logged(IMMEDIATE_ALERTS_JOB_NAME, gate.run_immediate_alerts, deadline)
