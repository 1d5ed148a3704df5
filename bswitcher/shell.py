"""Synchronous external command execution"""

import logging
import shutil
import subprocess
from typing import Iterable, List, Optional, Tuple

from .constants import SHELL
from .errors import CommandError, MissingDependency

logger = logging.getLogger(__name__)


def sh(command: str, input_text: Optional[str] = None) -> Tuple[str, str]:
    """Run a command line through the shell and wait for it

    Args:
        command: Shell command line, subject to normal shell expansion
        input_text: Optional text written to the command's stdin

    Returns:
        (stdout, stderr) as text

    Raises:
        CommandError: If the shell cannot be started or the command exits non-zero
    """
    logger.debug(f"Running: {command}")
    try:
        result = subprocess.run(
            [SHELL, "-c", command],
            input=input_text,
            capture_output=True,
            encoding="utf-8",
            # Titles from WM_NAME are often Latin-1
            errors="replace",
        )
    except OSError as e:
        raise CommandError(command, stderr=str(e)) from e

    if result.returncode != 0:
        raise CommandError(command, result.returncode, result.stderr)

    return result.stdout, result.stderr


def missing_programs(names: Iterable[str]) -> List[str]:
    """Return the names that are not executable on PATH"""
    return [name for name in names if shutil.which(name) is None]


def check_dependencies(names: Iterable[str]):
    """Raise MissingDependency unless every program is installed"""
    missing = missing_programs(names)
    if missing:
        raise MissingDependency(missing)
    logger.debug("All external programs found")
