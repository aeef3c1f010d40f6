#!/usr/bin/env python3
"""
CLI tool for removing staged uploads left in UPLOAD_TEMP_DIR.

Staged uploads are deleted when their send finishes; this sweep only
reclaims directories left behind by a crashed process.

Usage:
    python scripts/cleanup_uploads.py
    python scripts/cleanup_uploads.py --hours 6
    python scripts/cleanup_uploads.py --dir /var/tmp/uploads
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from recruitment.infrastructure.file_storage import FileStorageService
from recruitment.shared.settings import AppSettings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Remove staged upload directories older than a threshold",
    )
    parser.add_argument(
        "--hours",
        type=int,
        default=None,
        help="Age threshold in hours (default: UPLOAD_RETENTION_HOURS)",
    )
    parser.add_argument(
        "--dir",
        type=Path,
        default=None,
        help="Upload directory (default: UPLOAD_TEMP_DIR)",
    )
    return parser.parse_args()


def main():
    args = parse_args()

    try:
        settings = AppSettings.from_env()
    except ValueError as e:
        logger.error(f"Invalid settings: {e}")
        sys.exit(2)

    hours = args.hours if args.hours is not None else settings.upload_retention_hours
    base_dir = args.dir or Path(settings.upload_temp_dir)

    if hours <= 0:
        logger.error(f"--hours must be positive, got {hours}")
        sys.exit(2)

    storage = FileStorageService(base_dir=base_dir)
    removed = storage.cleanup_old_uploads(hours=hours)

    logger.info(f"Removed {removed} staged uploads from {base_dir}")
    sys.exit(0)


if __name__ == "__main__":
    main()
