"""
Measurement domain model.

Defines the Gender enum and the MeasurementInput dataclass handed to the engine.
"""

from dataclasses import dataclass
from enum import Enum


class Gender(Enum):
    """
    Biological sex used by the Devine ideal-weight estimate.
    The value is the lowercase label written to storage.
    """
    MALE = "male"
    FEMALE = "female"

    @classmethod
    def from_label(cls, label: str) -> "Gender":
        """
        Convert a human-readable label into the corresponding enum.
        Accepts 'male'/'female' and their one-letter forms, any casing.
        """
        if isinstance(label, cls):
            return label
        key = str(label).strip().lower()
        mapping = {
            "male": cls.MALE,
            "m": cls.MALE,
            "female": cls.FEMALE,
            "f": cls.FEMALE,
        }
        try:
            return mapping[key]
        except KeyError:
            raise ValueError(f"Unknown gender label: {label!r}")


@dataclass(frozen=True)
class MeasurementInput:
    """
    Represents one set of body measurements entered by the user.

    Attributes:
        age: Age in years.
        gender: Gender (a label such as 'female' is coerced).
        weight_kg: Body weight in kilograms.
        height_cm: Height in centimetres.
        name: Optional display name, never used in any computation.
    """

    age: int
    gender: Gender
    weight_kg: float
    height_cm: float
    name: str = ""

    def __post_init__(self):
        # frozen dataclass: assign through object.__setattr__
        if not isinstance(self.gender, Gender):
            object.__setattr__(self, "gender", Gender.from_label(self.gender))
        if self.name is None:
            object.__setattr__(self, "name", "")
