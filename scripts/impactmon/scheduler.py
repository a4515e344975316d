"""
External scheduler support.

The monitor runs one cycle per invocation; these helpers generate entries
for cron to drive it periodically.
"""

import shutil
import sys
from pathlib import Path
from typing import Optional

from .config import config


def generate_cron_entry(
    every_minutes: int = 60,
    command: Optional[str] = None,
    base_dir: Optional[Path] = None,
) -> str:
    """
    Generate a crontab line that runs the monitor periodically.

    Args:
        every_minutes: Interval between runs (1-59 minutes, or a multiple of 60).
        command: Command to run (defaults to the installed console script).
        base_dir: Working directory holding .env and the state file.

    Returns:
        A single crontab line.
    """
    if every_minutes < 1:
        raise ValueError("every_minutes must be positive")

    base_dir = base_dir or config.base_dir
    command = command or shutil.which("impactmon") or f"{sys.executable} -m impactmon.cli"
    log_file = config.logs_dir / "cron.log"

    if every_minutes < 60:
        schedule = f"*/{every_minutes} * * * *"
    elif every_minutes % 60 == 0 and every_minutes < 24 * 60:
        schedule = f"0 */{every_minutes // 60} * * *"
    else:
        raise ValueError("every_minutes must be below 60 or a whole number of hours under 24")

    return f'{schedule} cd "{base_dir}" && {command} >> "{log_file}" 2>&1'
