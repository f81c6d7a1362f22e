"""Quiz store operations and the submission transaction."""
from datetime import datetime

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from quizmaster import db
from quizmaster.auth.models import User
from quizmaster.errors import NotFound
from quizmaster.quiz.grading import GradeResult, grade
from quizmaster.quiz.models import Question, QuestionOption, Quiz, Result


def _require_user(user_id: int) -> User:
    # A still-valid token can outlive its account
    user = db.session.get(User, user_id)
    if not user:
        raise NotFound("User not found")
    return user


def _build_questions(cleaned_questions: list[dict]) -> list[Question]:
    questions = []
    for position, cleaned in enumerate(cleaned_questions):
        question = Question(
            question_text=cleaned["question_text"],
            correct_option_index=cleaned["correct_option_index"],
            order_index=position,
        )
        question.options = [
            QuestionOption(option_text=text, order_index=index)
            for index, text in enumerate(cleaned["options"])
        ]
        questions.append(question)
    return questions


class QuizService:
    """Service class for quizzes and their results."""

    @staticmethod
    def list_quizzes() -> list[Quiz]:
        return Quiz.query.order_by(Quiz.created_at, Quiz.id).all()

    @staticmethod
    def get_quiz(quiz_id: int) -> Quiz:
        quiz = db.session.get(Quiz, quiz_id)
        if not quiz:
            raise NotFound("Quiz not found")
        return quiz

    @staticmethod
    def create_quiz(cleaned: dict, created_by: int) -> Quiz:
        """Persist a quiz from a payload already run through validate_quiz_payload."""
        _require_user(created_by)
        quiz = Quiz(
            title=cleaned["title"],
            description=cleaned["description"],
            created_by=created_by,
        )
        quiz.questions = _build_questions(cleaned["questions"])
        db.session.add(quiz)
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception("Error while creating quiz")
            raise
        current_app.logger.info(f"Quiz {quiz.id} '{quiz.title}' created by user {created_by}")
        return quiz

    @staticmethod
    def update_quiz(quiz_id: int, cleaned: dict) -> Quiz:
        """Apply a partial update; a questions list replaces all existing questions."""
        quiz = QuizService.get_quiz(quiz_id)
        if "title" in cleaned:
            quiz.title = cleaned["title"]
        if "description" in cleaned:
            quiz.description = cleaned["description"]
        if "questions" in cleaned:
            quiz.questions = _build_questions(cleaned["questions"])
        quiz.updated_at = datetime.utcnow()
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception(f"Error while updating quiz {quiz_id}")
            raise
        current_app.logger.info(f"Quiz {quiz.id} updated")
        return quiz

    @staticmethod
    def delete_quiz(quiz_id: int) -> int:
        """
        Delete a quiz and every result that references it in one transaction.

        Returns the number of results removed. On a store failure the whole
        delete is rolled back, so no result is left pointing at a missing quiz.
        """
        quiz = QuizService.get_quiz(quiz_id)
        removed_results = quiz.results.count()
        db.session.delete(quiz)
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception(f"Error while deleting quiz {quiz_id}")
            raise
        current_app.logger.info(f"Quiz {quiz_id} deleted with {removed_results} result(s)")
        return removed_results

    @staticmethod
    def submit(quiz_id: int, user_id: int, answers) -> GradeResult:
        """
        Grade a submission and append exactly one Result for it.

        Resubmitting is allowed and records another Result each time.
        """
        quiz = QuizService.get_quiz(quiz_id)
        _require_user(user_id)
        graded = grade(quiz.answer_key(), answers)

        db.session.add(Result(
            user_id=user_id,
            quiz_id=quiz.id,
            score=graded.score,
            total=graded.total,
        ))
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception(f"Error while recording result for quiz {quiz_id}")
            raise
        current_app.logger.info(
            f"User {user_id} scored {graded.score}/{graded.total} on quiz {quiz_id}"
        )
        return graded
