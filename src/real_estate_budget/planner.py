"""
Budget planning pipeline and financing-option comparison.

plan_budget runs one household profile through, in order:
  net income -> retirement impact -> max budget -> property type ->
  district -> ownership decision -> affordability -> BudgetReport
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from real_estate_budget.calculator import (
    affordability_band,
    calculate_max_budget,
    net_income,
    retirement_impact,
)
from real_estate_budget.catalog import get_city
from real_estate_budget.errors import InvalidInputError
from real_estate_budget.models import (
    BudgetReport,
    FinancingComparison,
    FinancingOption,
    HouseholdProfile,
    Ownership,
    PropertyRecommendation,
    PropertyType,
)
from real_estate_budget.recommendation import (
    estimate_monthly_rent,
    estimate_price,
    ownership_decision,
    property_reasons,
    recommend_property_type,
    required_rooms,
    select_district,
)

logger = logging.getLogger(__name__)


def coerce_profile(profile: HouseholdProfile | Mapping[str, Any]) -> HouseholdProfile:
    """Validate a raw mapping into a HouseholdProfile, raising InvalidInputError."""
    if isinstance(profile, HouseholdProfile):
        return profile
    try:
        return HouseholdProfile.model_validate(dict(profile))
    except ValidationError as exc:
        raise InvalidInputError(str(exc)) from exc


def plan_budget(profile: HouseholdProfile | Mapping[str, Any]) -> BudgetReport:
    """
    Full analysis for one household.

    Raises:
        InvalidInputError: the profile fails validation.
        UnknownCityError:  current_city is not in the catalog.

    No affordable district is not an error: the recommendation carries no
    district and renting is recommended.
    """
    profile = coerce_profile(profile)
    city = get_city(profile.current_city)

    net = net_income(profile.monthly_income, profile.monthly_obligations)
    retirement = retirement_impact(profile.age, net, profile.expected_salary_increase)
    budget = calculate_max_budget(
        net,
        profile.financing_option,
        profile.age,
        profile.expected_salary_increase,
        profile.mortgage_interest_rate,
    )

    type_rec = recommend_property_type(profile.family_size, profile.required_rooms, city)
    rooms = required_rooms(profile.family_size)
    typical_price = estimate_price(city, None, type_rec.property_type)

    district = select_district(
        city, budget.max_budget, profile.family_size, type_rec.property_type
    )

    decision = ownership_decision(
        city, profile.age, budget.max_budget, retirement.years_until_retirement
    )
    ownership = decision.recommendation
    reasons = decision.reasons
    if district is None:
        if ownership == Ownership.BUY:
            reasons = ()
        ownership = Ownership.RENT
        reasons = reasons + (
            f"No district in {city.key} offers a "
            f"{type_rec.property_type.value} within your budget",
        )

    price = (
        estimate_price(city, district, type_rec.property_type)
        if district is not None
        else typical_price
    )

    recommendation = PropertyRecommendation(
        property_type=type_rec.property_type,
        property_size=type_rec.base_size,
        estimated_price=price,
        monthly_rent_estimate=estimate_monthly_rent(price),
        recommended_district=district,
        ownership_recommendation=ownership,
        reasons=reasons,
        property_reasons=property_reasons(
            city,
            type_rec.property_type,
            type_rec.base_size,
            profile.family_size,
            rooms,
            district,
            profile.work_location,
        ),
    )

    report = BudgetReport(
        profile=profile,
        city=city,
        net_income=net,
        retirement=retirement,
        budget=budget,
        rooms=rooms,
        typical_price=typical_price,
        is_affordable=budget.max_budget >= price,
        recommendation=recommendation,
        notes=_notes(profile, budget.affordability_ratio, type_rec.property_type, ownership),
    )
    logger.debug(
        "plan city=%s option=%s budget=%.2f type=%s district=%s ownership=%s",
        city.key,
        budget.financing_option.value,
        budget.max_budget,
        type_rec.property_type.value,
        district.name if district else None,
        ownership.value,
    )
    return report


def _notes(
    profile: HouseholdProfile,
    ratio: float,
    property_type: PropertyType,
    ownership: Ownership,
) -> tuple[str, ...]:
    notes: list[str] = []
    preferred = profile.preferred_property_type
    if preferred is not None and preferred != property_type:
        notes.append(
            f"Your preferred {preferred.value} differs from the recommended "
            f"{property_type.value} based on your budget and household needs"
        )
    if profile.ownership_preference == Ownership.BUY and ownership == Ownership.RENT:
        notes.append(
            "Although you prefer to buy, renting may suit your current "
            "financial position and age better"
        )
    band = affordability_band(ratio)
    if band == "high":
        notes.append("The monthly payment is a high share of income and may be a burden")
    elif band == "moderate":
        notes.append("The monthly payment is acceptable but leaves little room for other spending")
    return tuple(notes)


def compare_financing_options(
    profile: HouseholdProfile | Mapping[str, Any],
) -> list[FinancingComparison]:
    """
    Run the budget for every financing option with the same household.
    Returns results sorted by max budget, highest first; ties keep enum order.
    """
    profile = coerce_profile(profile)
    net = net_income(profile.monthly_income, profile.monthly_obligations)

    results = [
        calculate_max_budget(
            net,
            option,
            profile.age,
            profile.expected_salary_increase,
            profile.mortgage_interest_rate,
        )
        for option in FinancingOption
    ]
    results.sort(key=lambda r: r.max_budget, reverse=True)

    return [
        FinancingComparison(
            rank=i + 1,
            financing_option=r.financing_option,
            max_budget=r.max_budget,
            monthly_payment=r.monthly_payment,
            affordability_ratio=r.affordability_ratio,
            result=r,
        )
        for i, r in enumerate(results)
    ]
