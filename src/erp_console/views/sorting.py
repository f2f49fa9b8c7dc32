"""Client-side ordering of student tables by exam marks."""

from __future__ import annotations

from collections.abc import Sequence

from erp_console.domain import SortOrder, Student

_NEXT_ORDER = {
    SortOrder.ASC: SortOrder.DESC,
    SortOrder.DESC: SortOrder.NONE,
    SortOrder.NONE: SortOrder.ASC,
}


def next_sort_order(order: SortOrder) -> SortOrder:
    """Header click cycle: ascending, descending, unsorted."""

    return _NEXT_ORDER[order]


def sort_by_exam_marks(students: Sequence[Student], order: SortOrder) -> list[Student]:
    """Stable sort by marks; students without marks stay last in both directions."""

    if order is SortOrder.NONE:
        return list(students)
    graded = [student for student in students if student.exam_marks is not None]
    ungraded = [student for student in students if student.exam_marks is None]
    graded.sort(key=lambda student: student.exam_marks or 0.0, reverse=order is SortOrder.DESC)
    return graded + ungraded


__all__ = ["next_sort_order", "sort_by_exam_marks"]
