"""Domain errors raised by the budget engine."""


class BudgetPlannerError(Exception):
    """Base class for all budget engine errors."""


class InvalidInputError(BudgetPlannerError, ValueError):
    """An out-of-range or missing input reached the engine."""


class UnknownCityError(BudgetPlannerError, KeyError):
    """The requested city is not in the reference table."""

    def __init__(self, city: str, supported: list[str]):
        self.city = city
        self.supported = supported
        super().__init__(city)

    def __str__(self) -> str:
        return f"unknown city {self.city!r}; supported cities: {', '.join(self.supported)}"
