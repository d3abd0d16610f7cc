"""
Sync the Argentine holiday calendar into feriados_ar.

Same job as GET /api/sync-feriados, for hosts that schedule with cron.

Usage:
    python scripts/sync_holidays.py            # current year
    python scripts/sync_holidays.py --year 2025
"""

import argparse
import sys
from pathlib import Path

# Add backend to path so we can import modules
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from dotenv import load_dotenv
import structlog

load_dotenv(backend_dir / ".env")

from exceptions import AppError
from services.holiday_sync_service import get_holiday_sync_service

logger = structlog.get_logger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Sync holidays into feriados_ar")
    parser.add_argument("--year", type=int, default=None, help="Year to sync (default: current)")
    args = parser.parse_args(argv)

    try:
        result = get_holiday_sync_service().sync(args.year)
    except AppError as e:
        logger.error("holiday_sync_script_failed", code=e.code, error=e.message)
        print(f"✗ {e.message}")
        return 1

    print(f"✓ {result.message}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
