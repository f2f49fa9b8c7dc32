"""Form-level validation built from the field rules."""

from __future__ import annotations

from collections.abc import Callable, Mapping

from erp_console.domain import FormValue

from .rules import (
    validate_batch,
    validate_capacity,
    validate_cutoff_marks,
    validate_domain_selection,
    validate_email,
    validate_exam_marks,
    validate_exam_name,
    validate_first_name,
    validate_join_year,
    validate_last_name,
    validate_program,
)

Rule = Callable[[FormValue], str]

DOMAIN_FORM_RULES: Mapping[str, Rule] = {
    "program": validate_program,
    "batch": validate_batch,
    "capacity": validate_capacity,
    "exam_name": validate_exam_name,
    "cutoff_marks": validate_cutoff_marks,
}

STUDENT_FORM_RULES: Mapping[str, Rule] = {
    "first_name": validate_first_name,
    "last_name": validate_last_name,
    "email": validate_email,
    "domain_id": validate_domain_selection,
    "join_year": validate_join_year,
    "exam_marks": validate_exam_marks,
}


def validate_form(
    values: Mapping[str, FormValue],
    rules: Mapping[str, Rule],
) -> dict[str, str]:
    """Return ``{field: message}`` for every failing field."""

    errors: dict[str, str] = {}
    for field, rule in rules.items():
        message = rule(values.get(field))
        if message:
            errors[field] = message
    return errors


def validate_domain_form(values: Mapping[str, FormValue]) -> dict[str, str]:
    return validate_form(values, DOMAIN_FORM_RULES)


def validate_student_form(values: Mapping[str, FormValue]) -> dict[str, str]:
    return validate_form(values, STUDENT_FORM_RULES)


__all__ = [
    "DOMAIN_FORM_RULES",
    "Rule",
    "STUDENT_FORM_RULES",
    "validate_domain_form",
    "validate_form",
    "validate_student_form",
]
