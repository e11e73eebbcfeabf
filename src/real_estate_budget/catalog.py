"""
City catalog: builds CityProfile records from the static reference tables.
"""

from functools import lru_cache

from real_estate_budget.data.cities import CITIES, CITY_ALIASES, CITY_KEYS
from real_estate_budget.errors import UnknownCityError
from real_estate_budget.models import CityProfile


@lru_cache(maxsize=1)
def load_cities() -> tuple[CityProfile, ...]:
    """Return every supported city in table order. Built once per process."""
    return tuple(CityProfile.from_record(record) for record in CITIES)


def supported_cities() -> list[str]:
    return list(CITY_KEYS)


def get_city(name: str) -> CityProfile:
    """
    Look up a city by English key or Arabic name.

    Raises UnknownCityError rather than substituting a default city.
    """
    key = CITY_ALIASES.get(name.strip(), name.strip())
    for city in load_cities():
        if city.key == key:
            return city
    raise UnknownCityError(name, supported_cities())
