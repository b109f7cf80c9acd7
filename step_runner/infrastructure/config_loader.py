import os
import re
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from step_runner.config.config import DEFAULT_TASK_PATH, CatalogConfig, Config, DriverConfig

CONFIG_FILENAME = "config.yaml"


def find_config_path() -> str | None:
    """Find the most appropriate config.yaml path.

    Order of precedence:
    1. CONFIG_PATH environment variable (must point to an existing file)
    2. ./config.yaml in current working directory
    3. Search upward from current working directory for config.yaml
    4. config.yaml in the project root (when running from the source tree)

    Returns None when no file is found; the runner then uses built-in defaults.
    """
    env_config_path = os.getenv("CONFIG_PATH")
    if env_config_path:
        path = Path(env_config_path)
        if path.is_file():
            return str(path)
        raise FileNotFoundError(f"CONFIG_PATH is set but file not found: {env_config_path}")

    p = Path.cwd()
    for parent in (p, *p.parents):
        candidate = parent / CONFIG_FILENAME
        if candidate.is_file():
            return str(candidate)

    package_config = Path(__file__).resolve().parents[2] / CONFIG_FILENAME
    if package_config.is_file():
        return str(package_config)

    return None


def load(config_path: Optional[str] = None) -> Config:
    file = _find_config(config_path)
    if file is None:
        return Config()

    data = _read_config(file)
    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ValueError(f"Parsed config file {file} does not contain a mapping")

    return _map_to_domain(data)


def _read_config(file: Path) -> Any:
    content = file.read_text()

    def replace_env_var(match: re.Match) -> str:
        var_name = match.group(1)
        return os.getenv(var_name, match.group(0))

    content = re.sub(r'\$\{(\w+)}', replace_env_var, content)

    return yaml.safe_load(content)


def _find_config(config_path: str | None) -> Path | None:
    load_dotenv()

    if config_path:
        path = Path(config_path)
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return path

    found = find_config_path()
    return Path(found) if found else None


def _as_bool(value: Any) -> bool:
    # ${VAR} substitution yields strings such as "false"
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _map_to_domain(data: dict) -> Config:
    defaults = DriverConfig()
    driver_data = data.get('driver') or {}
    driver_config = DriverConfig(
        browser=str(driver_data.get('browser', defaults.browser)),
        headless=_as_bool(driver_data.get('headless', defaults.headless)),
        element_timeout_ms=int(driver_data.get('element-timeout-ms', defaults.element_timeout_ms)),
        slow_mo_ms=int(driver_data.get('slow-mo-ms', defaults.slow_mo_ms)),
        input_selector=str(driver_data.get('input-selector', defaults.input_selector)),
    )

    catalog_defaults = CatalogConfig()
    catalog_data = data.get('catalog') or {}
    catalog_config = CatalogConfig(
        product_selector=str(catalog_data.get('product-selector', catalog_defaults.product_selector)),
        price_selector=str(catalog_data.get('price-selector', catalog_defaults.price_selector)),
        link_selector=str(catalog_data.get('link-selector', catalog_defaults.link_selector)),
    )

    return Config(
        log_level=str(data.get('log_level', 'INFO')),
        task_path=str(data.get('task_path', DEFAULT_TASK_PATH)),
        driver_config=driver_config,
        catalog_config=catalog_config,
    )
