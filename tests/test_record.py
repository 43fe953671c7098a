import pytest
from datetime import datetime, timezone

from bmilog.category import Category
from bmilog.measurement import Gender
from bmilog.record import STORED_FIELDS, ResultRecord


def make_record(**overrides) -> ResultRecord:
    values = dict(
        id="2026-10-19T08:15:30.000000Z",
        name="Sari",
        age=25,
        gender=Gender.FEMALE,
        weight_kg=60,
        height_cm=170,
        bmi=20.8,
        category=Category.NORMAL,
        ideal_weight_label="61.4 kg",
        created_at=datetime(2026, 10, 19, 8, 15, 30, tzinfo=timezone.utc),
        display_date="19 Oct 2026, 15:15",
    )
    values.update(overrides)
    return ResultRecord(**values)


def test_to_dict_uses_stored_field_names():
    data = make_record().to_dict()
    assert tuple(data) == STORED_FIELDS
    assert data["gender"] == "female"
    assert data["category"] == "Normal"
    assert data["weightKg"] == 60
    assert data["idealWeightLabel"] == "61.4 kg"
    assert data["createdAt"] == "2026-10-19T08:15:30+00:00"


def test_from_dict_restores_record():
    record = make_record()
    assert ResultRecord.from_dict(record.to_dict()) == record


def test_from_dict_missing_name_defaults_to_empty():
    data = make_record().to_dict()
    del data["name"]
    assert ResultRecord.from_dict(data).name == ""


@pytest.mark.parametrize(
    "field, bad_value, error",
    [
        ("gender", "robot", ValueError),
        ("category", "Chubby", ValueError),
        ("createdAt", "yesterday", ValueError),
        ("age", "twenty", ValueError),
    ],
)
def test_from_dict_rejects_malformed_values(field, bad_value, error):
    data = make_record().to_dict()
    data[field] = bad_value
    with pytest.raises(error):
        ResultRecord.from_dict(data)


def test_from_dict_rejects_missing_required_field():
    data = make_record().to_dict()
    del data["bmi"]
    with pytest.raises(KeyError):
        ResultRecord.from_dict(data)


def test_from_dict_rejects_non_object():
    with pytest.raises(TypeError):
        ResultRecord.from_dict(["not", "a", "record"])


def test_measurement_view_of_record():
    m = make_record().measurement
    assert (m.weight_kg, m.height_cm, m.gender) == (60, 170, Gender.FEMALE)
