"""List and detail views over domains and students."""

from .domain_detail import DELETE_STUDENT_PROMPT, DomainDetailView
from .domain_list import DELETE_DOMAIN_PROMPT, DomainListView, PendingDelete
from .sorting import next_sort_order, sort_by_exam_marks

__all__ = [
    "DELETE_DOMAIN_PROMPT",
    "DELETE_STUDENT_PROMPT",
    "DomainDetailView",
    "DomainListView",
    "PendingDelete",
    "next_sort_order",
    "sort_by_exam_marks",
]
