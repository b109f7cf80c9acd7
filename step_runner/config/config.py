from dataclasses import dataclass, field

DEFAULT_TASK_PATH = "./task.json"


@dataclass(frozen=True)
class DriverConfig:
    """Configuration for the browser driver."""
    browser: str = "chromium"
    headless: bool = False
    element_timeout_ms: int = 20000  # ceiling for every element/text wait
    slow_mo_ms: int = 0
    input_selector: str = "input:visible"


@dataclass(frozen=True)
class CatalogConfig:
    """Selectors used to find products, their prices and their links."""
    product_selector: str = ".products .product"
    price_selector: str = ".price"
    link_selector: str = "a"


@dataclass(frozen=True)
class Config:
    """Main configuration containing log level, task location and nested config objects."""
    log_level: str = "INFO"
    task_path: str = DEFAULT_TASK_PATH
    driver_config: DriverConfig = field(default_factory=DriverConfig)
    catalog_config: CatalogConfig = field(default_factory=CatalogConfig)
