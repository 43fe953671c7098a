"""
Category domain model.

Defines the closed set of BMI categories and the lookup table holding
their display metadata.
"""

from dataclasses import dataclass
from enum import Enum


class Category(Enum):
    """
    BMI health categories. The value is the label written to storage.
    """
    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"
    NOT_APPLICABLE = "N/A"

    @classmethod
    def from_label(cls, label: str) -> "Category":
        """
        Convert a stored or displayed label into the corresponding enum.
        Accepts the stored label, the enum name, and the display label.
        """
        if isinstance(label, cls):
            return label
        key = str(label).strip().lower().replace(" ", "_")
        mapping = {}
        for member in cls:
            mapping[member.value.lower().replace(" ", "_")] = member
            mapping[member.name.lower()] = member
            mapping[CATEGORY_DISPLAY[member].label.lower().replace(" ", "_")] = member
        mapping["notapplicable"] = cls.NOT_APPLICABLE
        try:
            return mapping[key]
        except KeyError:
            raise ValueError(f"Unknown BMI category label: {label!r}")

    @property
    def display(self) -> "CategoryDisplay":
        return CATEGORY_DISPLAY[self]


@dataclass(frozen=True)
class CategoryDisplay:
    """
    Presentation metadata for a category.

    Attributes:
        label: Text shown to the user (e.g. 'Normal weight').
        color: Colour name the rendering layer should use.
    """

    label: str
    color: str


CATEGORY_DISPLAY: dict[Category, CategoryDisplay] = {
    Category.UNDERWEIGHT: CategoryDisplay(label="Underweight", color="blue"),
    Category.NORMAL: CategoryDisplay(label="Normal weight", color="green"),
    Category.OVERWEIGHT: CategoryDisplay(label="Overweight", color="yellow"),
    Category.OBESE: CategoryDisplay(label="Obese", color="red"),
    Category.NOT_APPLICABLE: CategoryDisplay(label="N/A", color="gray"),
}
