from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Mapping, Union

Selector = Union[str, int, float]
Value = Union[str, int, float, None]


class Action(Enum):
    GOTO = "goto"
    CLICK = "click"
    CLICK_FIRST = "clickFirst"
    FILL = "fill"
    WAIT = "wait"
    WAIT_FOR_SELECTOR = "waitForSelector"
    VERIFY_TEXT = "verifyText"
    SCROLL_TO_TEXT = "scrollToText"
    SCROLL_TO_SELECTOR = "scrollToSelector"
    CLICK_PRODUCT_BY_PRICE_RANGE = "clickProductByPriceRange"


SUPPORTED_ACTIONS: tuple[str, ...] = tuple(action.value for action in Action)

SELECTOR_ACTIONS: frozenset[Action] = frozenset({
    Action.CLICK,
    Action.CLICK_FIRST,
    Action.FILL,
    Action.WAIT_FOR_SELECTOR,
    Action.SCROLL_TO_SELECTOR,
})

VALUE_ACTIONS: frozenset[Action] = frozenset({
    Action.GOTO,
    Action.WAIT,
    Action.VERIFY_TEXT,
    Action.SCROLL_TO_TEXT,
})


@dataclass(frozen=True)
class Step(ABC):
    """Base for all step variants. Subclasses declare only the fields they use."""

    action: ClassVar[Action]

    @classmethod
    @abstractmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "Step":
        pass

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        pass


@dataclass(frozen=True)
class SelectorStep(Step):
    selector: Selector

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "SelectorStep":
        return cls(selector=raw["selector"])

    def to_dict(self) -> dict[str, Any]:
        return {"action": self.action.value, "selector": self.selector}


@dataclass(frozen=True)
class ValueStep(Step):
    value: Value

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "ValueStep":
        return cls(value=raw["value"])

    def to_dict(self) -> dict[str, Any]:
        return {"action": self.action.value, "value": self.value}


@dataclass(frozen=True)
class Goto(ValueStep):
    action: ClassVar[Action] = Action.GOTO


@dataclass(frozen=True)
class Click(SelectorStep):
    action: ClassVar[Action] = Action.CLICK


@dataclass(frozen=True)
class ClickFirst(SelectorStep):
    action: ClassVar[Action] = Action.CLICK_FIRST


@dataclass(frozen=True)
class Fill(Step):
    action: ClassVar[Action] = Action.FILL

    selector: Selector
    value: Value = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "Fill":
        return cls(selector=raw["selector"], value=raw.get("value"))

    def to_dict(self) -> dict[str, Any]:
        return {"action": self.action.value, "selector": self.selector, "value": self.value}


@dataclass(frozen=True)
class Wait(ValueStep):
    action: ClassVar[Action] = Action.WAIT

    value: int | float


@dataclass(frozen=True)
class WaitForSelector(SelectorStep):
    action: ClassVar[Action] = Action.WAIT_FOR_SELECTOR


@dataclass(frozen=True)
class VerifyText(ValueStep):
    action: ClassVar[Action] = Action.VERIFY_TEXT


@dataclass(frozen=True)
class ScrollToText(ValueStep):
    action: ClassVar[Action] = Action.SCROLL_TO_TEXT


@dataclass(frozen=True)
class ScrollToSelector(SelectorStep):
    action: ClassVar[Action] = Action.SCROLL_TO_SELECTOR


def _as_bound(value: Any) -> float | None:
    # true and false compare as 1 and 0, as in the browser
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class ClickProductByPriceRange(Step):
    action: ClassVar[Action] = Action.CLICK_PRODUCT_BY_PRICE_RANGE

    min_price: int | float | str | None = None
    max_price: int | float | str | None = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "ClickProductByPriceRange":
        return cls(min_price=raw.get("min"), max_price=raw.get("max"))

    def to_dict(self) -> dict[str, Any]:
        return {"action": self.action.value, "min": self.min_price, "max": self.max_price}

    def contains(self, price: float) -> bool:
        """Inclusive range check.

        Numeric strings such as "10" are compared as numbers. A missing or
        non-numeric bound never matches.
        """
        low, high = _as_bound(self.min_price), _as_bound(self.max_price)
        if low is None or high is None:
            return False
        return low <= price <= high


STEP_TYPES: dict[Action, type[Step]] = {
    step_type.action: step_type
    for step_type in (
        Goto,
        Click,
        ClickFirst,
        Fill,
        Wait,
        WaitForSelector,
        VerifyText,
        ScrollToText,
        ScrollToSelector,
        ClickProductByPriceRange,
    )
}


def build_step(raw: Mapping[str, Any]) -> Step:
    """Build the variant for an already validated raw step."""
    return STEP_TYPES[Action(raw["action"])].from_raw(raw)
