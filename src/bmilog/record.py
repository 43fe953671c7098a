"""
Result record domain model.

Defines the ResultRecord dataclass: one computed-and-stored BMI event, and
its mapping to the stored JSON object.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

from .category import Category
from .measurement import Gender, MeasurementInput

# Field order of the stored JSON object
STORED_FIELDS = (
    "id",
    "name",
    "age",
    "gender",
    "weightKg",
    "heightCm",
    "bmi",
    "category",
    "idealWeightLabel",
    "createdAt",
    "displayDate",
)


@dataclass(frozen=True)
class ResultRecord:
    """
    Represents one BMI computation kept in the history.

    Attributes:
        id: Unique identifier; the UTC creation instant, strictly increasing.
        name: Optional display name copied from the input.
        age: Age in years.
        gender: Gender.
        weight_kg: Body weight in kilograms.
        height_cm: Height in centimetres.
        bmi: Body Mass Index rounded to one decimal.
        category: BMI category derived from `bmi`.
        ideal_weight_label: Devine estimate such as '61.4 kg', or 'N/A'.
        created_at: Timezone-aware creation instant.
        display_date: Human-readable creation time.
    """

    id: str
    name: str
    age: int
    gender: Gender
    weight_kg: float
    height_cm: float
    bmi: float
    category: Category
    ideal_weight_label: str
    created_at: datetime
    display_date: str

    @property
    def measurement(self) -> MeasurementInput:
        return MeasurementInput(
            name=self.name,
            age=self.age,
            gender=self.gender,
            weight_kg=self.weight_kg,
            height_cm=self.height_cm,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "age": self.age,
            "gender": self.gender.value,
            "weightKg": self.weight_kg,
            "heightCm": self.height_cm,
            "bmi": self.bmi,
            "category": self.category.value,
            "idealWeightLabel": self.ideal_weight_label,
            "createdAt": self.created_at.isoformat(),
            "displayDate": self.display_date,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ResultRecord":
        """
        Build a record from its stored form.
        Raises KeyError, TypeError or ValueError on malformed data.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or ""),
            age=int(data["age"]),
            gender=Gender.from_label(data["gender"]),
            weight_kg=float(data["weightKg"]),
            height_cm=float(data["heightCm"]),
            bmi=float(data["bmi"]),
            category=Category.from_label(data["category"]),
            ideal_weight_label=str(data["idealWeightLabel"]),
            created_at=datetime.fromisoformat(str(data["createdAt"])),
            display_date=str(data.get("displayDate") or ""),
        )
