import json
import logging
from pathlib import Path
from typing import Any

from step_runner.core.errors import TaskFileError

logger = logging.getLogger(__name__)


def load_task(task_path: str) -> Any:
    """Read a task file and return the parsed JSON document.

    The document is returned as-is; checking that it is a list of steps is the
    validator's job.
    """
    path = Path(task_path)
    logger.debug(f"Loading task from: {path}")
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TaskFileError(f"Cannot read task file {task_path}: {e}") from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise TaskFileError(f"Task file {task_path} is not valid JSON: {e}") from e
