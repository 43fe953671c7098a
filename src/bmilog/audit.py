"""
Consistency audit of a stored history.

Re-derives every computed field from the stored measurements and reports
disagreements through a stairval Notepad:
  - duplicate ids (error)
  - entries not in newest-first order (error)
  - bmi that does not match the stored weight and height (warning)
  - category that does not match the stored bmi (warning)
  - ideal weight label that does not match the stored height and gender (warning)
"""

from collections import namedtuple
from typing import Sequence

from stairval.notepad import Notepad

from .engine import classify, compute_bmi, ideal_weight_label
from .record import ResultRecord

AuditEntry = namedtuple("AuditEntry", ["step", "record", "message", "level"])


def audit_history(records: Sequence[ResultRecord], notepad: Notepad) -> list[AuditEntry]:
    """
    Check `records` (newest first) and add any problems to `notepad`.
    Returns the same problems as AuditEntry rows for tabular reporting.
    """
    entries: list[AuditEntry] = []

    def report(step: str, record_id: str, message: str, level: str) -> None:
        entries.append(AuditEntry(step=step, record=record_id, message=message, level=level))
        if level == "error":
            notepad.add_error(f"Record {record_id!r}: {message}")
        else:
            notepad.add_warning(f"Record {record_id!r}: {message}")

    # Step 1: unique ids
    seen: set[str] = set()
    for record in records:
        if record.id in seen:
            report("unique-id", record.id, "duplicate id", "error")
        seen.add(record.id)

    # Step 2: newest-first ordering
    for newer, older in zip(records, records[1:]):
        if newer.id <= older.id:
            report("order", newer.id, f"listed before older-or-equal id {older.id!r}", "error")

    # Step 3: derived fields
    for record in records:
        expected_bmi = compute_bmi(record.weight_kg, record.height_cm)
        if record.bmi != expected_bmi:
            report("bmi", record.id, f"stored bmi {record.bmi} but measurements give {expected_bmi}", "warning")
        expected_category = classify(record.bmi)
        if record.category is not expected_category:
            report(
                "category",
                record.id,
                f"stored category {record.category.value!r} but bmi {record.bmi} gives {expected_category.value!r}",
                "warning",
            )
        expected_label = ideal_weight_label(record.height_cm, record.gender)
        if record.ideal_weight_label != expected_label:
            report(
                "ideal-weight",
                record.id,
                f"stored ideal weight {record.ideal_weight_label!r} but height gives {expected_label!r}",
                "warning",
            )
    return entries
