import logging
from collections.abc import Mapping
from typing import Any

from step_runner.core.errors import ValidationError
from step_runner.core.model.step import (
    SELECTOR_ACTIONS,
    SUPPORTED_ACTIONS,
    VALUE_ACTIONS,
    Action,
    Step,
    build_step,
)

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _action_of(raw: Any) -> Any:
    if isinstance(raw, Mapping):
        return raw.get("action")
    return None


def _check_step(index: int, raw: Any) -> None:
    action_name = _action_of(raw)
    if action_name is None or action_name in ("", 0):
        raise ValidationError(f"Step {index}: Missing 'action'.", index)
    if action_name not in SUPPORTED_ACTIONS:
        raise ValidationError(f"Step {index}: Unsupported action '{action_name}'.", index)

    action = Action(action_name)
    if action in SELECTOR_ACTIONS and raw.get("selector") is None:
        raise ValidationError(f"Step {index}: 'selector' is required.", index)
    # Only a missing key fails; 0, "" and null are accepted values.
    if action in VALUE_ACTIONS and "value" not in raw:
        raise ValidationError(f"Step {index}: 'value' is required.", index)
    if action is Action.WAIT and not _is_number(raw["value"]):
        raise ValidationError(f"Step {index}: 'wait' requires numeric milliseconds.", index)


def validate(steps: Any) -> tuple[Step, ...]:
    """Check a raw task and return it as immutable step variants.

    Stops at the first violation. The input is only read, so validating the
    same task again gives the same result.
    """
    if not isinstance(steps, (list, tuple)) or len(steps) == 0:
        raise ValidationError("Task must be a non-empty array.")
    if _action_of(steps[0]) != Action.GOTO.value:
        raise ValidationError("First step must be 'goto'.", 0)

    for index, raw in enumerate(steps):
        _check_step(index, raw)

    logger.info("✅ Validation passed.")
    return tuple(build_step(raw) for raw in steps)
