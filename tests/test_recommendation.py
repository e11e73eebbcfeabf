"""
Test cases for recommendation.py: property type, rooms, prices, districts,
and the buy-vs-rent vote.
"""

import itertools

import pytest

from real_estate_budget.catalog import get_city
from real_estate_budget.models import (
    CityProfile,
    DistrictProfile,
    Ownership,
    PropertyType,
    RoomRequirement,
)
from real_estate_budget.recommendation import (
    BUY_REASON,
    district_score,
    estimate_monthly_rent,
    estimate_price,
    ownership_decision,
    property_reasons,
    recommend_property_type,
    required_rooms,
    select_district,
)


# ── Fixtures ──────────────────────────────────────────────────────────────────

def make_district(name, multiplier=1.0, demand=5, growth=5) -> DistrictProfile:
    return DistrictProfile(
        name=name,
        price_multiplier=multiplier,
        demand_score=demand,
        future_growth_potential=growth,
    )


def make_city(districts=None, inflation=0.03, average_price=500_000) -> CityProfile:
    if districts is None:
        districts = [
            make_district("Growth", multiplier=1.0, demand=5, growth=9),
            make_district("Demand", multiplier=0.5, demand=9, growth=4),
            make_district("Prime", multiplier=2.0, demand=10, growth=10),
        ]
    return CityProfile(
        key="Testville",
        average_price=average_price,
        price_per_sqm=3_000,
        inflation_rate=inflation,
        districts=tuple(districts),
        base_sizes={PropertyType.APARTMENT: 110},
    )


@pytest.fixture
def riyadh() -> CityProfile:
    return get_city("Riyadh")


TYPE_ORDER = {PropertyType.APARTMENT: 0, PropertyType.DUPLEX: 1, PropertyType.VILLA: 2}


# ── Property type ─────────────────────────────────────────────────────────────

@pytest.mark.parametrize("family,rooms,expected", [
    (7, 2, PropertyType.VILLA),      # family size wins over few rooms
    (6, 1, PropertyType.VILLA),
    (1, 4, PropertyType.VILLA),
    (4, 1, PropertyType.DUPLEX),
    (2, 3, PropertyType.DUPLEX),
    (3, 2, PropertyType.APARTMENT),
    (1, 1, PropertyType.APARTMENT),
])
def test_property_type_thresholds(family, rooms, expected):
    assert recommend_property_type(family, rooms).property_type == expected


def test_property_type_monotonic():
    for family, rooms in itertools.product(range(1, 20), range(1, 10)):
        base = TYPE_ORDER[recommend_property_type(family, rooms).property_type]
        assert TYPE_ORDER[recommend_property_type(family + 1, rooms).property_type] >= base
        assert TYPE_ORDER[recommend_property_type(family, rooms + 1).property_type] >= base


def test_base_size_from_city_table(riyadh):
    assert recommend_property_type(7, 2, riyadh).base_size == 320
    assert recommend_property_type(7, 2).base_size == 300
    # Synthetic city records only an apartment size; others use the default catalog
    city = make_city()
    assert recommend_property_type(2, 1, city).base_size == 110
    assert recommend_property_type(4, 1, city).base_size == 200


# ── Rooms ─────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("family,bedrooms,bathrooms", [
    (1, 1, 1), (2, 1, 1),
    (3, 2, 2), (4, 2, 2),
    (5, 3, 2), (6, 3, 2),
    (7, 4, 3), (8, 4, 3),
    (9, 5, 3), (20, 5, 3),
])
def test_required_rooms_brackets(family, bedrooms, bathrooms):
    assert required_rooms(family) == RoomRequirement(bedrooms=bedrooms, bathrooms=bathrooms)


# ── Prices ────────────────────────────────────────────────────────────────────

def test_estimate_price_from_multipliers(riyadh):
    rabwah = riyadh.district("Al Rabwah")
    assert estimate_price(riyadh, rabwah, PropertyType.APARTMENT) == pytest.approx(680_000)
    assert estimate_price(riyadh, rabwah, PropertyType.VILLA) == pytest.approx(1_496_000)
    assert estimate_price(riyadh, rabwah, PropertyType.STUDIO) == pytest.approx(408_000)


def test_recorded_sample_takes_priority(riyadh):
    olaya = riyadh.district("Al Olaya")
    assert estimate_price(riyadh, olaya, PropertyType.APARTMENT) == 1_250_000
    # Without samples the derived estimate is used
    assert estimate_price(riyadh, olaya, PropertyType.APARTMENT, price_samples={}) == (
        pytest.approx(1_200_000)
    )


def test_city_wide_price_without_district(riyadh):
    assert estimate_price(riyadh, None, PropertyType.DUPLEX) == pytest.approx(1_440_000)


def test_monthly_rent_estimate():
    assert estimate_monthly_rent(800_000) == 3_200


# ── District selection ────────────────────────────────────────────────────────

def test_small_household_prefers_growth():
    city = make_city()
    d = select_district(city, 600_000, 2, PropertyType.APARTMENT, price_samples={})
    assert d.name == "Growth"


def test_large_household_prefers_demand():
    city = make_city()
    d = select_district(city, 600_000, 5, PropertyType.APARTMENT, price_samples={})
    assert d.name == "Demand"


def test_larger_budget_unlocks_prime_district():
    city = make_city()
    d = select_district(city, 1_000_000, 2, PropertyType.APARTMENT, price_samples={})
    assert d.name == "Prime"


def test_no_affordable_district_returns_none():
    city = make_city()
    assert select_district(city, 200_000, 2, PropertyType.APARTMENT) is None


def test_ties_keep_table_order():
    city = make_city(districts=[
        make_district("First", demand=7, growth=7),
        make_district("Second", demand=7, growth=7),
    ])
    d = select_district(city, 1_000_000, 3, PropertyType.APARTMENT)
    assert d.name == "First"


@pytest.mark.parametrize("ptype", [PropertyType.APARTMENT, PropertyType.DUPLEX, PropertyType.VILLA])
@pytest.mark.parametrize("budget", [500_000, 700_000, 900_000, 1_500_000, 2_500_000])
def test_selected_district_within_budget(riyadh, ptype, budget):
    d = select_district(riyadh, budget, 4, ptype)
    if d is not None:
        assert estimate_price(riyadh, d, ptype) <= budget


def test_district_selection_is_deterministic(riyadh):
    picks = {select_district(riyadh, 2_000_000, 2, PropertyType.APARTMENT).name for _ in range(20)}
    assert picks == {"Al Narjis"}


def test_district_score_weights():
    d = make_district("X", demand=9, growth=4)
    assert district_score(d, 3) == pytest.approx(0.7 * 4 + 0.3 * 9)
    assert district_score(d, 4) == pytest.approx(0.7 * 9 + 0.3 * 4)


# ── Ownership decision ────────────────────────────────────────────────────────

def test_buy_when_no_triggers():
    decision = ownership_decision(make_city(), age=30, budget=1_000_000, years_until_retirement=35)
    assert decision.recommendation == Ownership.BUY
    assert decision.reasons == (BUY_REASON,)


def test_single_trigger_still_buys():
    decision = ownership_decision(make_city(), age=55, budget=1_000_000, years_until_retirement=10)
    assert decision.recommendation == Ownership.BUY
    assert len(decision.reasons) == 1


def test_age_and_retirement_recommend_rent():
    decision = ownership_decision(make_city(), age=58, budget=1_000_000, years_until_retirement=7)
    assert decision.recommendation == Ownership.RENT
    assert len(decision.reasons) == 2
    assert "58" in decision.reasons[0]


def test_inflation_and_shortfall_recommend_rent():
    city = make_city(inflation=0.06)
    decision = ownership_decision(city, age=30, budget=300_000, years_until_retirement=35)
    assert decision.recommendation == Ownership.RENT
    assert "6.0%" in decision.reasons[0]
    assert "70%" in decision.reasons[1]


def test_boundaries_do_not_trigger():
    city = make_city(inflation=0.055, average_price=500_000)
    decision = ownership_decision(city, age=50, budget=350_000, years_until_retirement=10)
    assert decision.recommendation == Ownership.BUY


@pytest.mark.parametrize("high_inflation,senior,shortfall,near_retirement", list(
    itertools.product([False, True], repeat=4)
))
def test_rent_iff_two_triggers(high_inflation, senior, shortfall, near_retirement):
    city = make_city(inflation=0.07 if high_inflation else 0.02)
    decision = ownership_decision(
        city,
        age=60 if senior else 30,
        budget=100_000 if shortfall else 2_000_000,
        years_until_retirement=5 if near_retirement else 30,
    )
    triggers = sum([high_inflation, senior, shortfall, near_retirement])
    if triggers >= 2:
        assert decision.recommendation == Ownership.RENT
        assert len(decision.reasons) == triggers
    else:
        assert decision.recommendation == Ownership.BUY
        assert decision.reasons == (BUY_REASON,)


# ── Property reasons ──────────────────────────────────────────────────────────

def test_property_reasons_with_district(riyadh):
    narjis = riyadh.district("Al Narjis")
    reasons = property_reasons(
        riyadh, PropertyType.APARTMENT, 130, 2, required_rooms(2), narjis, "النرجس"
    )
    assert reasons[0] == "An apartment fits a household of 2 (bedrooms: 1, bathrooms: 1)"
    assert "130 m²" in reasons[1]
    assert "Al Narjis scores 8/10 for demand" in reasons[2]
    assert reasons[-1] == "Al Narjis is in your work area"


def test_property_reasons_without_district(riyadh):
    reasons = property_reasons(
        riyadh, PropertyType.VILLA, 320, 7, required_rooms(7), None
    )
    assert reasons[-1] == "No Riyadh district is within budget for a villa"
