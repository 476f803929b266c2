"""Scheduler entry point: run one reminder pass and exit (e.g. from cron)"""

import asyncio
import sys

from rent_reminder.config import settings
from rent_reminder.infrastructure.clients.notifier import build_notifier
from rent_reminder.infrastructure.database.session import SessionLocal
from rent_reminder.infrastructure.database.store import (
    SqlAlchemyCommunicationLog,
    SqlAlchemyTenantStore,
)
from rent_reminder.infrastructure.observability.logging import setup_logging
from rent_reminder.services.workflow import WorkflowRunner


async def run_once() -> int:
    db = SessionLocal()
    try:
        notifier = build_notifier(SqlAlchemyCommunicationLog(db))
        summary = await WorkflowRunner(SqlAlchemyTenantStore(db), notifier).run_daily_check()
    finally:
        db.close()
    # Per-tenant errors are reported in logs; only an aborted pass fails the job
    return 1 if summary.aborted_reason else 0


def main() -> None:
    setup_logging(settings.log_level)
    sys.exit(asyncio.run(run_once()))


if __name__ == "__main__":
    main()
