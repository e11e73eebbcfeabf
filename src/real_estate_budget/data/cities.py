"""
Hardcoded Saudi housing reference data for Q3 2026.
Update these values when market data changes.
"""

from typing import TypedDict

DATA_DATE = "2026-07-01"

# ── Policy constants ─────────────────────────────────────────────────────────
RETIREMENT_AGE = 65
PENSION_REPLACEMENT_RATIO = 0.60      # Post-retirement income as share of final income

# SAMA caps the debt-burden ratio for housing finance at 35% of net income
DEBT_BURDEN_RATIO = 0.35
HIGH_BURDEN_RATIO = 0.40              # Above this the payment is a heavy burden
MODERATE_BURDEN_RATIO = 0.35          # Above this the payment needs care

# Mortgage: repay at most 5 years past retirement, 25-year product maximum
MAX_MORTGAGE_TERM_YEARS = 25
POST_RETIREMENT_REPAYMENT_YEARS = 5
MORTGAGE_FALLBACK_INCOME_YEARS = 5    # Budget ceiling when no term is available

# Retirement-proximity taper for mortgages taken within 15 years of retirement
PROXIMITY_THRESHOLD_YEARS = 15
PROXIMITY_BASE_FACTOR = 0.95
PROXIMITY_STEP = 0.01
PROXIMITY_FLOOR = 0.80

# Cash: save the debt-burden share of income for at most 4 years
CASH_MAX_SAVING_YEARS = 4

# Direct developer/bank installment: higher-cost product, shorter term
DIRECT_INSTALLMENT_RATE = 5.5         # Annual %, fixed
MAX_INSTALLMENT_TERM_YEARS = 10
INSTALLMENT_FALLBACK_INCOME_YEARS = 2

# ── Recommendation heuristics ────────────────────────────────────────────────
HIGH_INFLATION_RATE = 0.055           # Annual property inflation favouring early purchase
SENIOR_AGE = 50
BUDGET_SHORTFALL_RATIO = 0.70         # Budget below 70% of city average price
RETIREMENT_FLEXIBILITY_YEARS = 10

# District ranking weights: (growth, demand)
SMALL_HOUSEHOLD_MAX_SIZE = 3
SMALL_HOUSEHOLD_WEIGHTS = (0.7, 0.3)  # Favour future growth potential
LARGE_HOUSEHOLD_WEIGHTS = (0.3, 0.7)  # Favour current demand and amenities

MONTHLY_RENT_YIELD = 0.004            # Monthly rent as share of property price

# ── Property type catalog ────────────────────────────────────────────────────
# Price relative to the city's average property price
PROPERTY_TYPE_MULTIPLIERS: dict[str, float] = {
    "studio":    0.6,
    "apartment": 1.0,
    "duplex":    1.8,
    "villa":     2.2,
}

# Built-up area (m²) used when no city-specific size is recorded
DEFAULT_BASE_SIZES: dict[str, int] = {
    "studio":    50,
    "apartment": 120,
    "duplex":    200,
    "villa":     300,
}

# Family size upper bound -> (bedrooms, bathrooms); larger families use the last row
ROOM_BRACKETS: list[tuple[int, int, int]] = [
    (2, 1, 1),
    (4, 2, 2),
    (6, 3, 2),
    (8, 4, 3),
]
LARGEST_ROOMS: tuple[int, int] = (5, 3)


# ── Cities and districts ─────────────────────────────────────────────────────
# demand_score and growth_score are on a 1-10 scale
# inflation_rate is the annual property price inflation as a fraction

class DistrictRecord(TypedDict):
    name: str
    name_ar: str
    price_multiplier: float
    demand_score: int
    growth_score: int


class CityRecord(TypedDict):
    key: str
    name_ar: str
    average_price: float
    average_rent: float
    price_per_sqm: float
    inflation_rate: float
    description: str
    base_sizes: dict[str, int]
    districts: list[DistrictRecord]


CITIES: list[CityRecord] = [
    {
        "key": "Riyadh",
        "name_ar": "الرياض",
        "average_price": 800_000,
        "average_rent": 3_500,
        "price_per_sqm": 4_000,
        "inflation_rate": 0.062,
        "description": (
            "The capital's market is driven by government relocation and "
            "Vision 2030 projects; northern districts lead price growth."
        ),
        "base_sizes": {"studio": 55, "apartment": 130, "duplex": 220, "villa": 320},
        "districts": [
            {"name": "Al Malqa",   "name_ar": "الملقا",   "price_multiplier": 1.35, "demand_score": 9, "growth_score": 8},
            {"name": "Al Narjis",  "name_ar": "النرجس",   "price_multiplier": 1.15, "demand_score": 8, "growth_score": 9},
            {"name": "Al Yasmin",  "name_ar": "الياسمين", "price_multiplier": 1.10, "demand_score": 8, "growth_score": 7},
            {"name": "Al Rabwah",  "name_ar": "الربوة",   "price_multiplier": 0.85, "demand_score": 6, "growth_score": 5},
            {"name": "Al Olaya",   "name_ar": "العليا",   "price_multiplier": 1.50, "demand_score": 10, "growth_score": 6},
            {"name": "Al Hamra",   "name_ar": "الحمراء",  "price_multiplier": 0.80, "demand_score": 5, "growth_score": 6},
        ],
    },
    {
        "key": "Jeddah",
        "name_ar": "جدة",
        "average_price": 750_000,
        "average_rent": 3_200,
        "price_per_sqm": 3_800,
        "inflation_rate": 0.048,
        "description": (
            "Coastal demand and the waterfront redevelopment keep northern "
            "Jeddah active; older southern districts remain affordable."
        ),
        "base_sizes": {"studio": 50, "apartment": 125, "duplex": 210, "villa": 300},
        "districts": [
            {"name": "Al Rawdah",    "name_ar": "الروضة",   "price_multiplier": 1.20, "demand_score": 8, "growth_score": 6},
            {"name": "Al Zahra",     "name_ar": "الزهراء",  "price_multiplier": 1.10, "demand_score": 7, "growth_score": 7},
            {"name": "Al Nuzha",     "name_ar": "النزهة",   "price_multiplier": 0.90, "demand_score": 6, "growth_score": 6},
            {"name": "Al Shati",     "name_ar": "الشاطئ",   "price_multiplier": 1.45, "demand_score": 9, "growth_score": 8},
            {"name": "Al Basateen",  "name_ar": "البساتين", "price_multiplier": 1.05, "demand_score": 6, "growth_score": 8},
            {"name": "Al Safa",      "name_ar": "الصفا",    "price_multiplier": 0.85, "demand_score": 6, "growth_score": 5},
        ],
    },
    {
        "key": "Makkah",
        "name_ar": "مكة المكرمة",
        "average_price": 650_000,
        "average_rent": 2_800,
        "price_per_sqm": 3_500,
        "inflation_rate": 0.051,
        "description": (
            "Prices near the Haram carry a large premium; residential demand "
            "is steady in the eastern and southern districts."
        ),
        "base_sizes": {"studio": 45, "apartment": 115, "duplex": 200, "villa": 280},
        "districts": [
            {"name": "Al Aziziyah",  "name_ar": "العزيزية", "price_multiplier": 1.25, "demand_score": 9, "growth_score": 6},
            {"name": "Al Shisha",    "name_ar": "الششة",    "price_multiplier": 0.90, "demand_score": 6, "growth_score": 5},
            {"name": "Al Naseem",    "name_ar": "النسيم",   "price_multiplier": 0.95, "demand_score": 7, "growth_score": 6},
            {"name": "Al Awali",     "name_ar": "العوالي",  "price_multiplier": 1.05, "demand_score": 7, "growth_score": 8},
            {"name": "Al Kakiyah",   "name_ar": "الكعكية",  "price_multiplier": 0.80, "demand_score": 5, "growth_score": 6},
            {"name": "Al Rusayfah",  "name_ar": "الرصيفة",  "price_multiplier": 1.10, "demand_score": 8, "growth_score": 7},
        ],
    },
    {
        "key": "Madinah",
        "name_ar": "المدينة المنورة",
        "average_price": 600_000,
        "average_rent": 2_500,
        "price_per_sqm": 3_200,
        "inflation_rate": 0.045,
        "description": (
            "A stable market with moderate inflation; new schemes in the "
            "north-west offer the best long-term growth."
        ),
        "base_sizes": {"studio": 45, "apartment": 120, "duplex": 200, "villa": 290},
        "districts": [
            {"name": "Quba",                  "name_ar": "قباء",          "price_multiplier": 1.20, "demand_score": 8, "growth_score": 7},
            {"name": "Al Awali",              "name_ar": "العوالي",       "price_multiplier": 0.95, "demand_score": 6, "growth_score": 6},
            {"name": "Al Harrah Al Sharqiyah", "name_ar": "الحرة الشرقية", "price_multiplier": 0.85, "demand_score": 5, "growth_score": 7},
            {"name": "Al Nakheel",            "name_ar": "النخيل",        "price_multiplier": 1.10, "demand_score": 7, "growth_score": 8},
            {"name": "Al Difa",               "name_ar": "الدفاع",        "price_multiplier": 1.00, "demand_score": 6, "growth_score": 6},
            {"name": "Al Azhari",             "name_ar": "الأزهري",       "price_multiplier": 0.90, "demand_score": 6, "growth_score": 5},
        ],
    },
    {
        "key": "Dammam",
        "name_ar": "الدمام",
        "average_price": 700_000,
        "average_rent": 3_000,
        "price_per_sqm": 3_600,
        "inflation_rate": 0.057,
        "description": (
            "Eastern Province demand follows the energy sector; waterfront "
            "districts lead, inland districts offer more space per riyal."
        ),
        "base_sizes": {"studio": 50, "apartment": 125, "duplex": 210, "villa": 310},
        "districts": [
            {"name": "Al Faisaliyah",  "name_ar": "الفيصلية", "price_multiplier": 1.00, "demand_score": 7, "growth_score": 6},
            {"name": "Al Shati",       "name_ar": "الشاطئ",   "price_multiplier": 1.40, "demand_score": 9, "growth_score": 7},
            {"name": "Al Jalawiyah",   "name_ar": "الجلوية",  "price_multiplier": 0.85, "demand_score": 5, "growth_score": 5},
            {"name": "Al Andalus",     "name_ar": "الأندلس",  "price_multiplier": 1.10, "demand_score": 7, "growth_score": 7},
            {"name": "Al Dabab",       "name_ar": "الضباب",   "price_multiplier": 0.90, "demand_score": 6, "growth_score": 5},
            {"name": "Al Firdaws",     "name_ar": "الفردوس",  "price_multiplier": 0.95, "demand_score": 6, "growth_score": 8},
        ],
    },
]

CITY_KEYS: list[str] = [c["key"] for c in CITIES]

# Arabic display name -> English key
CITY_ALIASES: dict[str, str] = {c["name_ar"]: c["key"] for c in CITIES}

# ── Observed price samples ───────────────────────────────────────────────────
# (city, district, property type) -> recorded transaction price (SAR).
# These take priority over the multiplier-derived estimate.
PRICE_SAMPLES: dict[tuple[str, str, str], float] = {
    ("Riyadh", "Al Malqa", "villa"):       2_450_000,
    ("Riyadh", "Al Narjis", "apartment"):    880_000,
    ("Riyadh", "Al Narjis", "villa"):      1_950_000,
    ("Riyadh", "Al Olaya", "apartment"):   1_250_000,
    ("Jeddah", "Al Shati", "apartment"):   1_150_000,
    ("Jeddah", "Al Zahra", "duplex"):      1_420_000,
    ("Makkah", "Al Aziziyah", "apartment"):  840_000,
    ("Madinah", "Quba", "villa"):          1_520_000,
    ("Dammam", "Al Shati", "villa"):       2_050_000,
    ("Dammam", "Al Faisaliyah", "apartment"): 690_000,
}
