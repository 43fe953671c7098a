from stairval.notepad import create_notepad

from bmilog.audit import audit_history
from bmilog.category import Category
from test_record import make_record


def test_consistent_history_has_no_issues(session, female_measurement):
    session.submit_measurement(female_measurement)
    session.submit_measurement(female_measurement)
    notepad = create_notepad("history")

    entries = audit_history(session.history.records, notepad)

    assert entries == []
    assert not notepad.has_errors(include_subsections=True)
    assert not notepad.has_warnings(include_subsections=True)


def test_duplicate_and_misordered_ids_are_errors():
    older = make_record(id="2026-10-19T08:00:00.000000Z")
    newer = make_record(id="2026-10-19T09:00:00.000000Z")
    notepad = create_notepad("history")

    entries = audit_history([older, newer, newer], notepad)

    steps = {(e.step, e.level) for e in entries}
    assert ("unique-id", "error") in steps
    assert ("order", "error") in steps
    assert notepad.has_errors(include_subsections=True)


def test_tampered_derived_fields_are_warnings():
    tampered = make_record(bmi=31.0, category=Category.NORMAL, ideal_weight_label="99.9 kg")
    notepad = create_notepad("history")

    entries = audit_history([tampered], notepad)

    assert [e.step for e in entries] == ["bmi", "category", "ideal-weight"]
    assert all(e.level == "warning" for e in entries)
    assert notepad.has_warnings(include_subsections=True)
    assert not notepad.has_errors(include_subsections=True)
