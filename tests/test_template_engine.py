import pytest

from scenario_content.utils.template_engine import (
    FormatKind,
    classify_key,
    find_placeholders,
    format_currency,
    format_percent,
    format_value,
    populate,
)


@pytest.mark.parametrize(
    "amount,expected",
    [
        (0, "$0"),
        (999, "$999"),
        (1000, "$1K"),
        (1_000_000, "$1.0M"),
        (999.5, "$1K"),
        (1500, "$2K"),
        (49822, "$50K"),
        (300851, "$301K"),
        (1_049_999, "$1.0M"),
        (2_250_000, "$2.3M"),
    ],
)
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


def test_format_percent():
    assert format_percent(7) == "7%"
    assert format_percent(5.25) == "5.3%"
    assert format_percent(3.2) == "3.2%"


@pytest.mark.parametrize(
    "key,kind",
    [
        ("futureValue", FormatKind.CURRENCY),
        ("higherContributionGain", FormatKind.CURRENCY),
        ("lumpSumValue", FormatKind.CURRENCY),
        ("taxSavings", FormatKind.PERCENT),
        ("annualReturn", FormatKind.PERCENT),
        ("stockAllocation", FormatKind.PERCENT),
        ("currentInflation", FormatKind.PERCENT),
        ("extendedTimeline", FormatKind.YEARS),
        ("milestoneTimeframe", FormatKind.YEARS),
        ("riskCategory", FormatKind.PLAIN),
        ("timeHorizon", FormatKind.PLAIN),
    ],
)
def test_classify_key(key, kind):
    assert classify_key(key) is kind


def test_format_value_by_key():
    assert format_value("futureValue", 300851) == "$301K"
    assert format_value("annualReturn", 7.0) == "7%"
    assert format_value("extendedTimeline", 25) == "25 years"
    assert format_value("extendedTimeline", 25, years_unit="lat") == "25 lat"
    assert format_value("timeHorizon", 20) == "20"
    assert format_value("volatilityRange", "4%-12%") == "4%-12%"


def test_populate_both_placeholder_styles():
    out = populate("<p>{{ futureValue }} in {timeHorizon} years at {{annualReturn}}</p>", {
        "futureValue": 300851, "timeHorizon": 20, "annualReturn": 7,
    })
    assert out == "<p>$301K in 20 years at 7%</p>"


def test_unknown_placeholders_left_untouched():
    out = populate("{{known}} {{unknown}} { also_unknown } {not a placeholder}", {"known": "x"})
    assert out == "x {{unknown}} { also_unknown } {not a placeholder}"


def test_repeated_placeholders_all_replaced():
    assert populate("{{goal}}/{{goal}}/{goal}", {"goal": "retirement"}) == "retirement/retirement/retirement"


def test_substituted_values_are_not_rescanned():
    assert populate("{{a}}", {"a": "{{b}}", "b": "nope"}) == "{{b}}"


def test_empty_template():
    assert populate("", {"a": 1}) == ""


def test_find_placeholders_in_order():
    assert find_placeholders("{{b}} {a} {{ b }} {c}") == ["b", "a", "c"]
