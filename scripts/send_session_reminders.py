"""Remind participants about sessions starting soon.

Meant to be run periodically, e.g. from cron every 15 minutes. Sessions are
stamped once reminded so overlapping runs do not notify twice.
"""

from __future__ import annotations

import argparse
import logging

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.notifications import send_session_reminders
from app.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--window-hours",
        type=int,
        default=None,
        help="Look-ahead in hours (default: SESSION_REMINDER_WINDOW_HOURS)",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    initialize_database()

    session = SessionLocal()
    try:
        result = send_session_reminders(session, window_hours=args.window_hours)
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Reminder sweep failed: {exc}") from exc
    finally:
        session.close()

    print(f"Reminded {result.sessions} sessions, {result.notifications} notifications created")


if __name__ == "__main__":
    main()
