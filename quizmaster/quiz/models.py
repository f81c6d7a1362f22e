"""
Database models for quizzes and the result ledger.

Each question stores only the index of its correct option. The per-option
``isCorrect`` flag seen by API clients is derived from that index when a quiz
is serialized, so the two can never disagree.
"""
from datetime import datetime

from sqlalchemy.ext.orderinglist import ordering_list

from quizmaster import db


class Quiz(db.Model):
    """A titled, ordered set of multiple-choice questions authored by an admin."""
    __tablename__ = "quizzes"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False, default="")
    # Reference to the author, not ownership: the quiz outlives the account
    created_by = db.Column(db.Integer, db.ForeignKey("users.id", ondelete='SET NULL'), nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    questions = db.relationship(
        "Question",
        backref="quiz",
        cascade="all, delete-orphan",
        order_by="Question.order_index",
        collection_class=ordering_list("order_index"),
    )
    results = db.relationship("Result", backref="quiz", lazy="dynamic", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Quiz {self.id}: {self.title}>"

    def get_question_count(self) -> int:
        return len(self.questions)

    def answer_key(self) -> list[int]:
        """Correct option index for each question, in question order."""
        return [question.correct_option_index for question in self.questions]

    def to_dict(self, include_answer_key: bool = True) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description or "",
            "questions": [q.to_dict(include_answer_key) for q in self.questions],
            "questionCount": self.get_question_count(),
            "createdBy": self.created_by,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


class Question(db.Model):
    __tablename__ = "quiz_questions"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id", ondelete='CASCADE'), nullable=False, index=True)
    question_text = db.Column(db.Text, nullable=False)
    correct_option_index = db.Column(db.Integer, nullable=False)
    order_index = db.Column(db.Integer, nullable=False, default=0)

    options = db.relationship(
        "QuestionOption",
        backref="question",
        cascade="all, delete-orphan",
        order_by="QuestionOption.order_index",
        collection_class=ordering_list("order_index"),
    )

    __table_args__ = (
        db.Index('ix_quiz_questions_quiz_order', 'quiz_id', 'order_index'),
        db.CheckConstraint('correct_option_index >= 0', name='ck_question_correct_index'),
    )

    def __repr__(self) -> str:
        return f"<Question {self.id}: {self.question_text[:50]}>"

    def to_dict(self, include_answer_key: bool = True) -> dict:
        options = []
        for index, option in enumerate(self.options):
            option_data = {"text": option.option_text}
            if include_answer_key:
                option_data["isCorrect"] = index == self.correct_option_index
            options.append(option_data)

        data = {"id": self.id, "questionText": self.question_text, "options": options}
        if include_answer_key:
            data["correctOptionIndex"] = self.correct_option_index
        return data


class QuestionOption(db.Model):
    __tablename__ = "quiz_question_options"

    id = db.Column(db.Integer, primary_key=True)
    question_id = db.Column(db.Integer, db.ForeignKey("quiz_questions.id", ondelete='CASCADE'), nullable=False, index=True)
    option_text = db.Column(db.Text, nullable=False)
    order_index = db.Column(db.Integer, nullable=False, default=0)

    __table_args__ = (
        db.Index('ix_question_options_question_order', 'question_id', 'order_index'),
    )

    def __repr__(self) -> str:
        return f"<QuestionOption {self.id}: {self.option_text[:50]}>"


class Result(db.Model):
    """
    One graded submission. Append-only: rows are never updated and are only
    removed together with their user or quiz.
    """
    __tablename__ = "quiz_results"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete='CASCADE'), nullable=False, index=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id", ondelete='CASCADE'), nullable=False, index=True)
    score = db.Column(db.Integer, nullable=False)
    total = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    __table_args__ = (
        db.Index('ix_quiz_results_user_created', 'user_id', 'created_at'),
        db.CheckConstraint('score >= 0 AND score <= total', name='ck_result_score_range'),
        db.CheckConstraint('total >= 1', name='ck_result_total'),
    )

    def __repr__(self) -> str:
        return f"<Result {self.id}: user={self.user_id} quiz={self.quiz_id} {self.score}/{self.total}>"

    def to_dict(self) -> dict:
        quiz_title = self.quiz.title if self.quiz else None
        return {
            "id": self.id,
            "userId": self.user_id,
            "quizId": self.quiz_id,
            "quizTitle": quiz_title,
            "quiz": {"id": self.quiz_id, "title": quiz_title},
            "score": self.score,
            "total": self.total,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
