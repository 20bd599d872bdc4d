"""Background triggers that drive the scheduled notification batches."""

from __future__ import annotations

import logging
from collections.abc import Callable

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.infrastructure.database import SessionLocal
from app.utils import get_app_timezone, now_in_app_timezone, truncate_to_minute

logger = logging.getLogger(__name__)

DAILY_REMINDER_JOB_ID = "daily_reminder_tick"
MOTIVATION_JOB_ID = "motivation_tick"

_scheduler: BackgroundScheduler | None = None


def _run_with_session(name: str, tick: Callable[..., object]) -> None:
    session: Session = SessionLocal()
    try:
        # The 30 s misfire grace keeps every start inside its scheduled minute.
        tick(session, truncate_to_minute(now_in_app_timezone()))
    except Exception:
        # Nothing propagates out of a job; the next trigger runs regardless.
        logger.exception("%s failed", name)
    finally:
        session.close()


def run_daily_reminder_job() -> None:
    from app.application.use_cases.notifications import run_daily_reminder_tick

    _run_with_session("Daily reminder tick", run_daily_reminder_tick)


def run_motivation_job() -> None:
    from app.application.use_cases.notifications import run_motivation_tick

    _run_with_session("Motivation tick", run_motivation_tick)


def build_scheduler(settings: Settings | None = None) -> BackgroundScheduler:
    """Return a scheduler with the minute and daily triggers registered.

    Missed runs are coalesced and skipped rather than replayed.
    """

    settings = settings or get_settings()
    timezone = get_app_timezone()
    scheduler = BackgroundScheduler(
        timezone=timezone,
        job_defaults={"coalesce": True, "max_instances": 1, "misfire_grace_time": 30},
    )
    scheduler.add_job(
        run_daily_reminder_job,
        trigger=CronTrigger(minute="*", timezone=timezone),
        id=DAILY_REMINDER_JOB_ID,
        name="Daily reminder",
        replace_existing=True,
    )
    scheduler.add_job(
        run_motivation_job,
        trigger=CronTrigger(
            hour=settings.motivation_hour,
            minute=settings.motivation_minute,
            timezone=timezone,
        ),
        id=MOTIVATION_JOB_ID,
        name="Motivation messages",
        replace_existing=True,
    )
    return scheduler


def start_scheduler() -> BackgroundScheduler:
    """Start the shared scheduler once; later calls return the running instance."""

    global _scheduler
    if _scheduler is not None and _scheduler.running:
        return _scheduler

    settings = get_settings()
    _scheduler = build_scheduler(settings)
    _scheduler.start()
    logger.info(
        "Notification scheduler started: reminders every minute, motivation daily at %02d:%02d",
        settings.motivation_hour,
        settings.motivation_minute,
    )
    return _scheduler


def shutdown_scheduler() -> None:
    global _scheduler
    if _scheduler is None:
        return
    if _scheduler.running:
        _scheduler.shutdown(wait=False)
        logger.info("Notification scheduler stopped")
    _scheduler = None


__all__ = [
    "DAILY_REMINDER_JOB_ID",
    "MOTIVATION_JOB_ID",
    "build_scheduler",
    "run_daily_reminder_job",
    "run_motivation_job",
    "shutdown_scheduler",
    "start_scheduler",
]
