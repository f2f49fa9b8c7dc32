"""Client-side validation for domain and student forms."""

from .forms import (
    DOMAIN_FORM_RULES,
    STUDENT_FORM_RULES,
    Rule,
    validate_domain_form,
    validate_form,
    validate_student_form,
)
from .input_filters import (
    clamp_capacity_input,
    clamp_decimal_input,
    clamp_integer_input,
    clamp_marks_input,
    filter_decimal_input,
    filter_integer_input,
)
from .rules import (
    to_number,
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
    validate_required,
)

__all__ = [
    "DOMAIN_FORM_RULES",
    "Rule",
    "STUDENT_FORM_RULES",
    "clamp_capacity_input",
    "clamp_decimal_input",
    "clamp_integer_input",
    "clamp_marks_input",
    "filter_decimal_input",
    "filter_integer_input",
    "to_number",
    "validate_batch",
    "validate_capacity",
    "validate_cutoff_marks",
    "validate_domain_form",
    "validate_domain_selection",
    "validate_email",
    "validate_exam_marks",
    "validate_exam_name",
    "validate_first_name",
    "validate_form",
    "validate_join_year",
    "validate_last_name",
    "validate_program",
    "validate_required",
    "validate_student_form",
]
