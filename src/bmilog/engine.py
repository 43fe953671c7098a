"""
BMI computation engine.

Pure functions only: no state, no I/O. Degenerate input never raises; it
resolves to the sentinels 0 (bmi), Category.NOT_APPLICABLE and "N/A".

Rounding
--------
Every one-decimal value produced here (the BMI and the ideal weight label) is
rounded half-up on the shortest decimal representation of the float, so a
quotient printed as 20.25 becomes 20.3 (Python's round() would give 20.2).
"""

import math
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import NamedTuple

from .category import Category
from .measurement import Gender, MeasurementInput

NOT_AVAILABLE = "N/A"

# Devine formula constants: kilograms at 60 inches, kilograms per inch above it
DEVINE_BASE_KG = {
    Gender.MALE: 50.0,
    Gender.FEMALE: 45.5,
}
DEVINE_KG_PER_INCH = 2.3
DEVINE_BASELINE_INCHES = 60
CM_PER_INCH = 2.54

# Lower bound of each band, checked from the top down
CATEGORY_THRESHOLDS = (
    (30.0, Category.OBESE),
    (25.0, Category.OVERWEIGHT),
    (18.5, Category.NORMAL),
)

_ONE_DECIMAL = Decimal("0.1")
# wide enough for every finite float plus one decimal place
_ROUNDING_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


class Evaluation(NamedTuple):
    bmi: float
    category: Category
    ideal_weight_label: str


def round_half_up(value: float) -> float:
    """Round to one decimal place, ties away from zero. Non-finite values pass through."""
    value = float(value)
    if not math.isfinite(value):
        return value
    return float(Decimal(repr(value)).quantize(_ONE_DECIMAL, context=_ROUNDING_CONTEXT))


def compute_bmi(weight_kg: float, height_cm: float) -> float:
    """
    Body Mass Index, weight / height(m)^2, rounded to one decimal.
    Returns 0 if either argument is not positive, or if the quotient
    cannot be represented as a finite float.
    """
    if not (weight_kg > 0 and height_cm > 0):
        return 0
    height_m = height_cm / 100
    try:
        denominator = height_m ** 2
    except OverflowError:
        return 0
    if denominator == 0 or not math.isfinite(denominator):
        return 0
    bmi = weight_kg / denominator
    if not math.isfinite(bmi):
        return 0
    return round_half_up(bmi)


def classify(bmi: float) -> Category:
    """
    Map a BMI value to its category:
      - 0            -> NOT_APPLICABLE
      - below 18.5   -> UNDERWEIGHT
      - 18.5 to 24.9 -> NORMAL
      - 25 to 29.9   -> OVERWEIGHT
      - 30 and above -> OBESE
    """
    if bmi == 0:
        return Category.NOT_APPLICABLE
    for lower_bound, category in CATEGORY_THRESHOLDS:
        if bmi >= lower_bound:
            return category
    return Category.UNDERWEIGHT


def ideal_weight_kg(height_cm: float, gender: Gender) -> float:
    inches = height_cm / CM_PER_INCH
    return DEVINE_BASE_KG[Gender.from_label(gender)] + DEVINE_KG_PER_INCH * (inches - DEVINE_BASELINE_INCHES)


def ideal_weight_label(height_cm: float, gender: Gender) -> str:
    """
    Devine ideal weight formatted as e.g. '65.9 kg', or 'N/A' when the
    estimate is negative or not finite.
    """
    estimate = ideal_weight_kg(height_cm, gender)
    if not math.isfinite(estimate) or estimate < 0:
        return NOT_AVAILABLE
    return f"{round_half_up(estimate):.1f} kg"


def evaluate(measurement: MeasurementInput) -> Evaluation:
    bmi = compute_bmi(measurement.weight_kg, measurement.height_cm)
    return Evaluation(
        bmi=bmi,
        category=classify(bmi),
        ideal_weight_label=ideal_weight_label(measurement.height_cm, measurement.gender),
    )


def scale_position(bmi: float) -> int:
    """
    Index (0-3) of the quarter of the four-band BMI scale the value falls in.
    Used to place the indicator on the result scale.
    """
    if bmi < 18.5:
        return 0
    if bmi < 25:
        return 1
    if bmi < 30:
        return 2
    return 3
