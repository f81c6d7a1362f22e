"""
Validation of quiz payloads sent by admins.

Create and update share one set of rules. A question's correct option can be
given as ``correctOptionIndex``, as a single ``isCorrect: true`` option flag,
or both; when both are present they have to agree. The cleaned output keeps
only the index.
"""
from typing import Any

from quizmaster.errors import ValidationError

TITLE_MAX_LENGTH = 255
MIN_OPTIONS = 2


def _is_int(value: Any) -> bool:
    # bool is an int subclass; True must not pass for index 1
    return isinstance(value, int) and not isinstance(value, bool)


def _clean_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _clean_title(value: Any) -> str:
    title = _clean_text(value)
    if not title:
        raise ValidationError("Please enter quiz title and at least one question.")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Quiz title must be at most {TITLE_MAX_LENGTH} characters")
    return title


def _clean_description(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError("Description must be a string.")
    return value.strip()


def _clean_option(option: Any, number: int, position: int) -> tuple[str, bool | None]:
    """Return (text, isCorrect flag or None when the option carries no flag)."""
    if isinstance(option, str):
        text, flag = option.strip(), None
    elif isinstance(option, dict):
        text = _clean_text(option.get("text"))
        flag = option.get("isCorrect")
        if flag is not None and not isinstance(flag, bool):
            raise ValidationError(f"Question {number}: option {position + 1} isCorrect must be a boolean.")
    else:
        raise ValidationError(f"Question {number}: option {position + 1} is malformed.")

    if not text:
        raise ValidationError(f"Question {number}: option {position + 1} must have non-empty text.")
    return text, flag


def clean_question(question: Any, number: int) -> dict:
    """Validate one question and return ``{question_text, options, correct_option_index}``."""
    if not isinstance(question, dict):
        raise ValidationError(f"Question {number} is malformed.")

    question_text = _clean_text(question.get("questionText"))
    if not question_text:
        raise ValidationError(f"Question {number} needs non-empty question text.")

    raw_options = question.get("options")
    if not isinstance(raw_options, list) or len(raw_options) < MIN_OPTIONS:
        raise ValidationError(f"Question {number} needs at least {MIN_OPTIONS} non-empty options.")

    options, flags = [], []
    for position, raw_option in enumerate(raw_options):
        text, flag = _clean_option(raw_option, number, position)
        options.append(text)
        flags.append(flag)
    flagged = [position for position, flag in enumerate(flags) if flag is True]
    has_flags = any(flag is not None for flag in flags)

    index = question.get("correctOptionIndex")
    if index is not None:
        if not _is_int(index) or not 0 <= index < len(options):
            raise ValidationError(f"Question {number}: correct option index is out of bounds.")
        if has_flags and flagged != [index]:
            raise ValidationError(
                f"Question {number}: isCorrect flags do not match correctOptionIndex."
            )
    elif len(flagged) == 1:
        index = flagged[0]
    else:
        raise ValidationError(f"Question {number} needs exactly one correct option.")

    return {
        "question_text": question_text,
        "options": options,
        "correct_option_index": index,
    }


def clean_questions(questions: Any) -> list[dict]:
    if not isinstance(questions, list):
        raise ValidationError("Questions must be an array.")
    if not questions:
        raise ValidationError("Please enter quiz title and at least one question.")
    return [clean_question(question, number) for number, question in enumerate(questions, start=1)]


def validate_quiz_payload(data: Any, partial: bool = False) -> dict:
    """
    Validate a create (``partial=False``) or update (``partial=True``) body.

    For updates only the keys present in the body are validated and returned;
    ``questions``, when present, is a full replacement validated exactly like
    on create.
    """
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")

    cleaned = {}
    if not partial or "title" in data:
        cleaned["title"] = _clean_title(data.get("title"))
    if not partial or "description" in data:
        cleaned["description"] = _clean_description(data.get("description"))
    if not partial or "questions" in data:
        cleaned["questions"] = clean_questions(data.get("questions"))
    return cleaned
