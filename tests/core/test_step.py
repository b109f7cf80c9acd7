from dataclasses import FrozenInstanceError

import pytest

from step_runner.core.model.step import (
    SUPPORTED_ACTIONS,
    Action,
    Click,
    ClickProductByPriceRange,
    Fill,
    Goto,
    Step,
    Wait,
    build_step,
)


def test_supported_actions_are_the_closed_vocabulary() -> None:
    assert SUPPORTED_ACTIONS == (
        "goto",
        "click",
        "clickFirst",
        "fill",
        "wait",
        "waitForSelector",
        "verifyText",
        "scrollToText",
        "scrollToSelector",
        "clickProductByPriceRange",
    )


def test_build_step_keeps_only_fields_of_the_variant() -> None:
    step = build_step({"action": "click", "selector": "#buy", "value": "ignored", "min": 1})

    assert step == Click(selector="#buy")
    assert step.to_dict() == {"action": "click", "selector": "#buy"}


def test_price_range_maps_min_and_max() -> None:
    step = build_step({"action": "clickProductByPriceRange", "min": 10, "max": 20.5})

    assert step == ClickProductByPriceRange(min_price=10, max_price=20.5)
    assert step.to_dict() == {"action": "clickProductByPriceRange", "min": 10, "max": 20.5}


@pytest.mark.parametrize(
    "price,expected",
    [(10, True), (20, True), (15.5, True), (9.99, False), (20.01, False)],
)
def test_price_range_contains_is_inclusive(price: float, expected: bool) -> None:
    assert ClickProductByPriceRange(min_price=10, max_price=20).contains(price) is expected


def test_price_range_with_missing_bound_matches_nothing() -> None:
    assert ClickProductByPriceRange(min_price=10).contains(15) is False
    assert ClickProductByPriceRange(max_price=20).contains(15) is False


def test_fill_value_is_optional() -> None:
    assert build_step({"action": "fill", "selector": 0}) == Fill(selector=0, value=None)


def test_steps_are_immutable() -> None:
    step = Goto(value="https://example.com")
    with pytest.raises(FrozenInstanceError):
        step.value = "https://elsewhere.com"


def test_variant_carries_its_action() -> None:
    assert Wait(value=1).action is Action.WAIT
    assert Wait(value=1).to_dict() == {"action": "wait", "value": 1}


@pytest.mark.parametrize(
    "low,high,price,expected",
    [
        ("10", "20", 15.0, True),
        ("10.5", 20, 10.5, True),
        ("", 20, 0.0, True),
        (False, True, 1.0, True),
        ("ten", 20, 15.0, False),
        (10, [20], 15.0, False),
    ],
)
def test_price_range_bounds_compare_as_numbers(low, high, price: float, expected: bool) -> None:
    assert ClickProductByPriceRange(min_price=low, max_price=high).contains(price) is expected


def test_base_step_cannot_be_instantiated() -> None:
    with pytest.raises(TypeError):
        Step()
