import pytest

from scenario_content.core.schemas import CalculatorInputs, GoalTag
from scenario_content.utils.goal_classifier import classify_goal
from scenario_content.utils.slug_codec import decode_slug, encode_slug, is_consistent


def _inputs(initial, monthly, rate, years):
    return CalculatorInputs(initial_amount=initial, monthly_contribution=monthly, annual_return=rate, time_horizon=years)


def test_encode_reference_slug():
    inp = _inputs(10000, 500, 7, 20)
    assert encode_slug(inp, classify_goal(inp)) == "invest-10000-monthly-500-7percent-20years-starter"


def test_encode_classifies_when_goal_missing():
    assert encode_slug(_inputs(10000, 500, 7.5, 20)) == "invest-10000-monthly-500-7.5percent-20years-starter"
    assert encode_slug(_inputs(0, 1000, 6.0, 10)) == "invest-0-monthly-1000-6percent-10years-education"


def test_encode_rounds_half_up():
    assert encode_slug(_inputs(10500.75, 499.99, 7.25, 20)) == "invest-10501-monthly-500-7.3percent-20years-investment"
    assert encode_slug(_inputs(1000000, 10000, 15.75, 30)) == "invest-1000000-monthly-10000-15.8percent-30years-retirement"


def test_encode_keeps_hyphenated_goal():
    assert encode_slug(_inputs(50000, 2000, 8, 15), "wealth-building").endswith("-15years-wealth-building")


def test_decode_valid_slug():
    slug = "invest-10000-monthly-500-7.5percent-20years-starter"
    out = decode_slug(slug)
    assert out is not None
    assert out.initial_amount == 10000
    assert out.monthly_contribution == 500
    assert out.annual_return == 7.5
    assert out.time_horizon == 20
    assert out.goal == "starter"
    assert out.slug == slug


def test_decode_variants():
    assert decode_slug("invest-5000-monthly-250-4.25percent-5years-emergency").annual_return == 4.25
    assert decode_slug("invest-50000-monthly-2000-8percent-15years-wealth-building").goal == "wealth-building"
    assert decode_slug("invest-10000-monthly-500-7point5percent-20years-starter").annual_return == 7.5
    assert decode_slug("invest-0-monthly-1000-6percent-10years-education").initial_amount == 0


@pytest.mark.parametrize(
    "slug",
    [
        "invalid-format",
        "invest-abc-monthly-500-7percent-20years-retirement",
        "invest-10000-monthly-xyz-7percent-20years-retirement",
        "invest-10000-monthly-500-abcpercent-20years-retirement",
        "invest-10000-monthly-500-7percent-abcyears-retirement",
        "notinvest-10000-monthly-500-7percent-20years-retirement",
        "invest-10000-500-7percent-20years-retirement",
        "invest-10000-weekly-500-7percent-20years-retirement-plan",
        "invest-10000-monthly-500-7percent-0years-retirement",
        "invest-10000-monthly-500-7percent-20years-",
        "invest--1000-monthly-500-7percent-20years-retirement",
        "invest-10000-monthly--500-7percent-20years-retirement",
        "invest-10000-monthly-500--7percent-20years-retirement",
        "invest-10000-monthly-500-7percent--20years-retirement",
        "invest-\u0661\u0660-monthly-500-7percent-20years-starter",
        "invest-10000-monthly-500-7\u0665percent-20years-starter",
        "invest-10000-monthly-500-7percent-20\nyears-starter",
        "invest-10000\n-monthly-500-7percent-20years-starter",
        "invest-10000-monthly-500-7percent-20years-starter\n",
        "invest-10000-monthly-500-7percent-20years-star ter",
        "invest-10000-monthly-500-7percent-101years-starter",
        "invest-10000-monthly-500-101percent-20years-starter",
        "invest-10000000000000-monthly-500-7percent-20years-starter",
        "",
    ],
)
def test_decode_rejects_malformed(slug):
    assert decode_slug(slug) is None


def test_decode_trusts_embedded_goal():
    out = decode_slug("invest-10000-monthly-500-7percent-20years-retirement")
    assert out is not None
    assert out.goal == "retirement"
    assert classify_goal(out.inputs()) == GoalTag.STARTER
    assert is_consistent(out) is False
    assert is_consistent(decode_slug("invest-10000-monthly-500-7percent-20years-starter")) is True


@pytest.mark.parametrize(
    "initial,monthly,rate,years",
    [(10000, 500, 7, 20), (2500.4, 99.5, 3.14, 7), (0, 0, 0, 1), (750000, 12500, 11.96, 35)],
)
def test_round_trip(initial, monthly, rate, years):
    inp = _inputs(initial, monthly, rate, years)
    goal = classify_goal(inp)
    slug = encode_slug(inp, goal)
    out = decode_slug(slug)

    assert out is not None
    assert out.slug == slug
    assert out.goal == goal.value
    assert out.initial_amount == int(initial + 0.5)
    assert out.monthly_contribution == int(monthly + 0.5)
    assert out.annual_return == pytest.approx(int(rate * 10 + 0.5) / 10)
    assert out.time_horizon == years
