"""Run one notification batch by hand, outside the API process."""

from __future__ import annotations

import argparse
import logging

from app.application.use_cases.notifications import (
    run_daily_reminder_tick,
    run_motivation_tick,
)
from app.config import get_settings
from app.infrastructure.database import SessionLocal, initialize_database

_TICKS = {
    "daily-reminder": run_daily_reminder_tick,
    "motivation": run_motivation_tick,
}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a scheduled notification batch once.")
    parser.add_argument("tick", choices=sorted(_TICKS), help="Batch to run")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=get_settings().log_level.upper())
    initialize_database()

    session = SessionLocal()
    try:
        result = _TICKS[args.tick](session)
    finally:
        session.close()

    if result.aborted_reason:
        raise SystemExit(f"Batch aborted: {result.aborted_reason}")
    print(
        f"{result.notification_type}: {result.evaluated} evaluated, {result.due} due, "
        f"{result.sent} sent, {result.failed} failed"
    )


if __name__ == "__main__":
    main()
