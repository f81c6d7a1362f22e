"""Grading of a submitted answer sheet against a quiz's answer key."""
from typing import Any, NamedTuple, Sequence

from quizmaster.errors import MalformedAnswers


class GradeResult(NamedTuple):
    score: int
    total: int


def grade(answer_key: Sequence[int], answers: Any) -> GradeResult:
    """
    Count exact matches between ``answers`` and ``answer_key``.

    ``answers`` must be a list with one entry per question. Entries that are
    null, out of range or not integers simply never match; there is no partial
    credit and no negative marking.
    """
    if not isinstance(answers, list) or len(answers) != len(answer_key):
        raise MalformedAnswers("Invalid answers array provided")

    score = 0
    for correct_index, given in zip(answer_key, answers):
        if isinstance(given, bool) or not isinstance(given, int):
            continue
        if given == correct_index:
            score += 1
    return GradeResult(score=score, total=len(answer_key))
