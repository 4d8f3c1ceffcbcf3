"""
Result Persistence Module
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from ..errors import PersistenceError
from .report import build_file_content

logger = logging.getLogger(__name__)


def save_results(path: Optional[str], summary: str, samples: Iterable[float]) -> Optional[Path]:
    """Write the summary and raw samples to a text file

    Args:
        path: Destination file; empty or None skips saving
        summary: Rendered summary block
        samples: Accepted readings in chronological order

    Returns:
        Path written, or None if no path was given

    Raises:
        PersistenceError: If the file cannot be written
    """
    if path is None or not path.strip():
        logger.info("File path not provided. Results will not be saved to a file.")
        return None

    destination = Path(path.strip()).expanduser()
    try:
        destination.write_text(build_file_content(summary, samples), encoding="utf-8")
    except (OSError, ValueError) as e:
        # ValueError: paths pathlib rejects, e.g. an embedded NUL
        logger.error(f"Failed to write {destination}: {e}")
        raise PersistenceError(str(destination), str(e))

    logger.info(f"Saved results to {destination}")
    return destination
