# services/problem_type_engine/scorer.py
# Per-axis tallying and type code composition.

import logging
from typing import Any, Dict, List, Mapping, Sequence

from .models import Axis, AxisId, Question

logger = logging.getLogger(__name__)


def tally_axis(axis: Axis, questions: Sequence[Question], answers: Mapping[int, Any]) -> Dict[str, int]:
    """
    Counts primary and secondary answers for one axis.

    Anything that is not exactly the primary pole value counts as secondary,
    including a missing answer or a value that belongs to no axis.
    """
    primary_count = 0
    secondary_count = 0
    for question in questions:
        if answers.get(question.id) == axis.primary.value:
            primary_count += 1
        else:
            secondary_count += 1
    return {axis.primary.value: primary_count, axis.secondary.value: secondary_count}


def resolve_pole(axis: Axis, questions: Sequence[Question], answers: Mapping[int, Any]) -> str:
    """Resolves one axis to a pole. Ties go to the primary pole."""
    counts = tally_axis(axis, questions, answers)
    if counts[axis.primary.value] >= counts[axis.secondary.value]:
        return axis.primary.value
    return axis.secondary.value


def resolve_axes(
    axes: Sequence[Axis],
    axis_questions: Mapping[AxisId, Sequence[Question]],
    answers: Mapping[int, Any]
) -> Dict[AxisId, str]:
    """Resolves every axis, keeping the axis order."""
    poles = {
        axis.id: resolve_pole(axis, axis_questions.get(axis.id, ()), answers)
        for axis in axes
    }
    logger.debug(f"Resolved axis poles: {poles}")
    return poles


def compose_code(poles: Sequence[str]) -> str:
    """Concatenates resolved poles in axis order, e.g. ['I', 'P', 'T', 'E'] -> 'IPTE'."""
    return "".join(poles)


def code_from_answers(
    axes: Sequence[Axis],
    axis_questions: Mapping[AxisId, Sequence[Question]],
    answers: Mapping[int, Any]
) -> str:
    poles: List[str] = list(resolve_axes(axes, axis_questions, answers).values())
    return compose_code(poles)
