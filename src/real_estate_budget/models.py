"""Pydantic v2 models for the real-estate budget planner."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from real_estate_budget.data.cities import (
    CITY_ALIASES,
    HIGH_BURDEN_RATIO,
    CityRecord,
)


class FinancingOption(str, Enum):
    CASH = "cash"
    MORTGAGE = "mortgage"
    DIRECT_INSTALLMENT = "direct_installment"


class PropertyType(str, Enum):
    STUDIO = "studio"
    APARTMENT = "apartment"
    DUPLEX = "duplex"
    VILLA = "villa"


class Ownership(str, Enum):
    BUY = "buy"
    RENT = "rent"


class HouseholdProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    monthly_income: float               # Gross monthly income (SAR)
    monthly_obligations: float = 0.0    # Fixed monthly commitments (SAR)
    age: int
    family_size: int
    required_rooms: int
    expected_salary_increase: float = 0.0   # Percent per year
    current_city: str                   # English key or Arabic name
    work_location: str = ""             # Free text, e.g. a district near work
    financing_option: FinancingOption
    mortgage_interest_rate: float = 4.0     # Annual percent
    preferred_property_type: PropertyType | None = None
    ownership_preference: Ownership | None = None

    @field_validator("monthly_income")
    @classmethod
    def validate_income(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("monthly_income must be positive")
        return v

    @field_validator("monthly_obligations")
    @classmethod
    def validate_obligations(cls, v: float) -> float:
        if v < 0:
            raise ValueError("monthly_obligations cannot be negative")
        return v

    @field_validator("age")
    @classmethod
    def validate_age(cls, v: int) -> int:
        if not 18 <= v <= 90:
            raise ValueError(f"age must be between 18 and 90, got {v}")
        return v

    @field_validator("family_size")
    @classmethod
    def validate_family_size(cls, v: int) -> int:
        if not 1 <= v <= 20:
            raise ValueError(f"family_size must be between 1 and 20, got {v}")
        return v

    @field_validator("required_rooms")
    @classmethod
    def validate_required_rooms(cls, v: int) -> int:
        if not 1 <= v <= 10:
            raise ValueError(f"required_rooms must be between 1 and 10, got {v}")
        return v

    @field_validator("expected_salary_increase")
    @classmethod
    def validate_salary_increase(cls, v: float) -> float:
        if not 0 <= v <= 20:
            raise ValueError("expected_salary_increase must be between 0 and 20 percent")
        return v

    @field_validator("mortgage_interest_rate")
    @classmethod
    def validate_rate(cls, v: float) -> float:
        if not 0 <= v <= 15:
            raise ValueError("mortgage_interest_rate must be between 0 and 15 percent")
        return v

    @field_validator("current_city")
    @classmethod
    def normalize_city(cls, v: str) -> str:
        # Membership is checked against the catalog when the city is looked up
        v = v.strip()
        if not v:
            raise ValueError("current_city is required")
        return CITY_ALIASES.get(v, v)

    @property
    def net_income(self) -> float:
        return max(0.0, self.monthly_income - self.monthly_obligations)


# ── Reference data ────────────────────────────────────────────────────────────

class DistrictProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    name_ar: str = ""
    price_multiplier: float        # Relative to the city's average price
    demand_score: int              # 1-10
    future_growth_potential: int   # 1-10

    @field_validator("demand_score", "future_growth_potential")
    @classmethod
    def validate_score(cls, v: int) -> int:
        if not 1 <= v <= 10:
            raise ValueError(f"scores must be between 1 and 10, got {v}")
        return v

    @field_validator("price_multiplier")
    @classmethod
    def validate_multiplier(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("price_multiplier must be positive")
        return v


class CityProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    name_ar: str = ""
    average_price: float
    average_rent: float = 0.0
    price_per_sqm: float
    inflation_rate: float           # Annual fraction, e.g. 0.058
    description: str = ""
    districts: tuple[DistrictProfile, ...]
    base_sizes: dict[PropertyType, int] = {}

    @model_validator(mode="after")
    def validate_districts(self) -> "CityProfile":
        names = [d.name for d in self.districts]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate district names in {self.key}")
        return self

    @classmethod
    def from_record(cls, record: CityRecord) -> "CityProfile":
        return cls(
            key=record["key"],
            name_ar=record["name_ar"],
            average_price=record["average_price"],
            average_rent=record["average_rent"],
            price_per_sqm=record["price_per_sqm"],
            inflation_rate=record["inflation_rate"],
            description=record["description"],
            base_sizes={PropertyType(k): v for k, v in record["base_sizes"].items()},
            districts=tuple(
                DistrictProfile(
                    name=d["name"],
                    name_ar=d["name_ar"],
                    price_multiplier=d["price_multiplier"],
                    demand_score=d["demand_score"],
                    future_growth_potential=d["growth_score"],
                )
                for d in record["districts"]
            ),
        )

    def district(self, name: str) -> DistrictProfile | None:
        for d in self.districts:
            if d.name == name or d.name_ar == name:
                return d
        return None


# ── Financial results ─────────────────────────────────────────────────────────

class CalculationStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: float
    explanation: str


class RetirementImpact(BaseModel):
    model_config = ConfigDict(frozen=True)

    years_until_retirement: int
    pre_retirement_income: float        # Monthly net income at retirement
    post_retirement_income: float       # Monthly pension estimate
    total_pre_retirement_income: float  # Linear approximation of cumulative income


class BudgetResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    financing_option: FinancingOption
    max_budget: float
    monthly_payment: float               # 0 for cash
    affordability_ratio: float           # monthly_payment / net income
    loan_amount: float                   # 0 for cash
    loan_term_years: int                 # 0 for cash
    interest_rate: float                 # Annual percent applied, 0 for cash
    calculation_steps: tuple[CalculationStep, ...]

    @property
    def is_high_burden(self) -> bool:
        return self.affordability_ratio > HIGH_BURDEN_RATIO


# ── Recommendations ───────────────────────────────────────────────────────────

class PropertyTypeRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    property_type: PropertyType
    base_size: int                       # m²


class RoomRequirement(BaseModel):
    model_config = ConfigDict(frozen=True)

    bedrooms: int
    bathrooms: int


class OwnershipDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    recommendation: Ownership
    reasons: tuple[str, ...]


class PropertyRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    property_type: PropertyType
    property_size: int                   # m²
    estimated_price: float               # District price, or city typical price
    monthly_rent_estimate: float
    recommended_district: DistrictProfile | None
    ownership_recommendation: Ownership
    reasons: tuple[str, ...]             # Ownership justification, priority order
    property_reasons: tuple[str, ...]


class BudgetReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    profile: HouseholdProfile
    city: CityProfile
    net_income: float
    retirement: RetirementImpact
    budget: BudgetResult
    rooms: RoomRequirement
    typical_price: float                 # City-wide price of the recommended type
    is_affordable: bool                  # max_budget >= recommendation.estimated_price
    recommendation: PropertyRecommendation
    notes: tuple[str, ...]


class FinancingComparison(BaseModel):
    model_config = ConfigDict(frozen=True)

    rank: int
    financing_option: FinancingOption
    max_budget: float
    monthly_payment: float
    affordability_ratio: float
    result: BudgetResult
