"""
Recommendation core: property type, room sizing, price estimates, district
selection and the buy-vs-rent heuristic.

All functions are deterministic; district ties are broken by table order.
"""

import logging
from collections.abc import Mapping

from real_estate_budget.data.cities import (
    BUDGET_SHORTFALL_RATIO,
    DEFAULT_BASE_SIZES,
    HIGH_INFLATION_RATE,
    LARGE_HOUSEHOLD_WEIGHTS,
    LARGEST_ROOMS,
    MONTHLY_RENT_YIELD,
    PRICE_SAMPLES,
    PROPERTY_TYPE_MULTIPLIERS,
    RETIREMENT_FLEXIBILITY_YEARS,
    ROOM_BRACKETS,
    SENIOR_AGE,
    SMALL_HOUSEHOLD_MAX_SIZE,
    SMALL_HOUSEHOLD_WEIGHTS,
)
from real_estate_budget.errors import InvalidInputError
from real_estate_budget.formatting import format_currency, format_ratio
from real_estate_budget.models import (
    CityProfile,
    DistrictProfile,
    Ownership,
    OwnershipDecision,
    PropertyType,
    PropertyTypeRecommendation,
    RoomRequirement,
)

logger = logging.getLogger(__name__)

BUY_REASON = (
    "Buying builds a long-term asset and gives your family housing stability"
)


def recommend_property_type(
    family_size: int,
    required_rooms: int,
    city: CityProfile | None = None,
) -> PropertyTypeRecommendation:
    """
    Thresholds (first match wins):
      family >= 6 or rooms >= 4 -> Villa
      family >= 4 or rooms >= 3 -> Duplex
      otherwise                 -> Apartment
    """
    if family_size < 1 or required_rooms < 1:
        raise InvalidInputError("family_size and required_rooms must be at least 1")

    if family_size >= 6 or required_rooms >= 4:
        property_type = PropertyType.VILLA
    elif family_size >= 4 or required_rooms >= 3:
        property_type = PropertyType.DUPLEX
    else:
        property_type = PropertyType.APARTMENT

    return PropertyTypeRecommendation(
        property_type=property_type,
        base_size=base_size(property_type, city),
    )


def base_size(property_type: PropertyType, city: CityProfile | None = None) -> int:
    """Built-up area for a property type, from the city table when recorded."""
    property_type = PropertyType(property_type)
    if city is not None and property_type in city.base_sizes:
        return city.base_sizes[property_type]
    return DEFAULT_BASE_SIZES[property_type.value]


def required_rooms(family_size: int) -> RoomRequirement:
    """Bedrooms and bathrooms by family-size bracket."""
    if family_size < 1:
        raise InvalidInputError("family_size must be at least 1")
    for upper, bedrooms, bathrooms in ROOM_BRACKETS:
        if family_size <= upper:
            return RoomRequirement(bedrooms=bedrooms, bathrooms=bathrooms)
    bedrooms, bathrooms = LARGEST_ROOMS
    return RoomRequirement(bedrooms=bedrooms, bathrooms=bathrooms)


def estimate_price(
    city: CityProfile,
    district: DistrictProfile | None,
    property_type: PropertyType,
    price_samples: Mapping[tuple[str, str, str], float] | None = None,
) -> float:
    """
    Estimated purchase price (SAR).

    A recorded sample for (city, district, type) is used as-is. Otherwise:
        city average price x district multiplier x property type multiplier
    With no district the city-wide typical price is returned (multiplier 1.0).
    """
    property_type = PropertyType(property_type)
    samples = PRICE_SAMPLES if price_samples is None else price_samples

    if district is not None:
        sample = samples.get((city.key, district.name, property_type.value))
        if sample is not None:
            return float(sample)

    district_multiplier = district.price_multiplier if district is not None else 1.0
    price = (
        city.average_price
        * district_multiplier
        * PROPERTY_TYPE_MULTIPLIERS[property_type.value]
    )
    return round(price, 2)


def estimate_monthly_rent(price: float) -> float:
    return float(round(price * MONTHLY_RENT_YIELD))


def district_score(district: DistrictProfile, family_size: int) -> float:
    """
    Small households (<= 3) weight future growth, larger ones current demand.
    """
    if family_size <= SMALL_HOUSEHOLD_MAX_SIZE:
        growth_w, demand_w = SMALL_HOUSEHOLD_WEIGHTS
    else:
        growth_w, demand_w = LARGE_HOUSEHOLD_WEIGHTS
    return growth_w * district.future_growth_potential + demand_w * district.demand_score


def select_district(
    city: CityProfile,
    budget: float,
    family_size: int,
    property_type: PropertyType,
    price_samples: Mapping[tuple[str, str, str], float] | None = None,
) -> DistrictProfile | None:
    """
    Highest-scoring district whose estimated price fits the budget.

    Returns None when no district is affordable; callers treat that as
    "no match", not as an error.
    """
    affordable = [
        d for d in city.districts
        if estimate_price(city, d, property_type, price_samples) <= budget
    ]
    if not affordable:
        logger.info(
            "no affordable %s district in %s for budget %.2f",
            PropertyType(property_type).value, city.key, budget,
        )
        return None

    # sorted() is stable, so equal scores keep table order
    ranked = sorted(affordable, key=lambda d: district_score(d, family_size), reverse=True)
    best = ranked[0]
    logger.debug(
        "district %s selected in %s (score %.2f, %d candidates)",
        best.name, city.key, district_score(best, family_size), len(affordable),
    )
    return best


def ownership_decision(
    city: CityProfile,
    age: int,
    budget: float,
    years_until_retirement: int,
) -> OwnershipDecision:
    """
    Buy-vs-rent vote over four triggers, checked in this order:
      1. city property inflation > 5.5%
      2. age > 50
      3. budget < 70% of the city average price
      4. fewer than 10 years until retirement
    Two or more triggers -> rent, with the triggered reasons.
    Otherwise -> buy, with a single reason.
    """
    reasons: list[str] = []

    if city.inflation_rate > HIGH_INFLATION_RATE:
        reasons.append(
            f"Property prices in {city.key} rise {format_ratio(city.inflation_rate)} "
            "a year; high inflation favours buying now, so weigh the timing carefully"
        )
    if age > SENIOR_AGE:
        reasons.append(
            f"At {age}, renting avoids taking on long-term debt"
        )
    if budget < BUDGET_SHORTFALL_RATIO * city.average_price:
        reasons.append(
            f"Your budget {format_currency(budget)} is below "
            f"{BUDGET_SHORTFALL_RATIO:.0%} of the {city.key} average price "
            f"{format_currency(city.average_price)}"
        )
    if years_until_retirement < RETIREMENT_FLEXIBILITY_YEARS:
        reasons.append(
            f"With {years_until_retirement} years to retirement, renting keeps "
            "you flexible"
        )

    if len(reasons) >= 2:
        return OwnershipDecision(recommendation=Ownership.RENT, reasons=tuple(reasons))
    return OwnershipDecision(recommendation=Ownership.BUY, reasons=(BUY_REASON,))


def property_reasons(
    city: CityProfile,
    property_type: PropertyType,
    property_size: int,
    family_size: int,
    rooms: RoomRequirement,
    district: DistrictProfile | None,
    work_location: str = "",
) -> tuple[str, ...]:
    """Justification lines for the recommended property, in display order."""
    label = PropertyType(property_type).value
    article = "an" if label[0] in "aeiou" else "a"
    reasons = [
        f"{article.capitalize()} {label} fits a household of {family_size} "
        f"(bedrooms: {rooms.bedrooms}, bathrooms: {rooms.bathrooms})",
        f"{property_size} m² gives enough living space",
    ]
    if district is None:
        reasons.append(f"No {city.key} district is within budget for {article} {label}")
        return tuple(reasons)

    reasons.append(
        f"{district.name} scores {district.demand_score}/10 for demand and "
        f"{district.future_growth_potential}/10 for growth potential"
    )
    if work_location and work_location.strip() in (district.name, district.name_ar):
        reasons.append(f"{district.name} is in your work area")
    return tuple(reasons)
