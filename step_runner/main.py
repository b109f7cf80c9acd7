import argparse
import logging
import os
import sys
from contextlib import AbstractContextManager
from dataclasses import replace
from functools import partial
from typing import Callable, Optional, Sequence

from step_runner.config.config import Config
from step_runner.config.logging_config import configure_logging
from step_runner.core.errors import ExecutionError, StepRunnerError
from step_runner.core.executor import execute
from step_runner.core.protocols.driver_protocol import DriverProtocol
from step_runner.core.validator import validate
from step_runner.infrastructure.config_loader import load
from step_runner.infrastructure.task_loader import load_task

logger = logging.getLogger(__name__)

DriverOpener = Callable[[], AbstractContextManager[DriverProtocol]]


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="step-runner",
        description="Run a JSON list of browser steps and stop at the first failure.",
    )
    parser.add_argument("task_file", nargs="?", help="path to the task JSON (default: task_path from config)")
    parser.add_argument("--config", dest="config_path", help="path to config.yaml")
    parser.add_argument("--headless", action="store_true", help="run the browser without a window")
    parser.add_argument("--validate-only", action="store_true", help="check the task and exit without a browser")
    return parser.parse_args(argv)


def setup_env(config_path: Optional[str] = None) -> Config:
    """Load configuration and configure logging. LOG_LEVEL overrides the configured level."""
    config = load(config_path)
    configure_logging(os.getenv("LOG_LEVEL", config.log_level))
    return config


def run(task_path: str, config: Config, open_driver: Optional[DriverOpener] = None, validate_only: bool = False) -> int:
    """Load, validate and execute one task. Returns the process exit code."""
    try:
        steps = validate(load_task(task_path))
        if validate_only:
            return 0

        if open_driver is None:
            from step_runner.driver_adapter.driver import open_driver as open_playwright_driver
            open_driver = partial(open_playwright_driver, config.driver_config)

        execute(steps, open_driver, config)
    except ExecutionError:
        # Already reported by the executor; the browser is closed by now.
        return 1
    except StepRunnerError as e:
        logger.error(f"❌ Fatal Error: {e}")
        return 1
    except Exception as e:
        logger.exception(f"❌ Fatal Error: {e}")
        return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    try:
        config = setup_env(args.config_path)
    except Exception as e:
        configure_logging()
        logger.error(f"❌ Fatal Error: {e}")
        sys.exit(1)

    if args.headless:
        config = replace(config, driver_config=replace(config.driver_config, headless=True))

    sys.exit(run(args.task_file or config.task_path, config, validate_only=args.validate_only))


if __name__ == "__main__":
    main()
