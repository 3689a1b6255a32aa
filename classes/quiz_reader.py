import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from classes.errors import NotFoundError
from utils.response import ApiResponse
from utils.security_logger import log_database_error

logger = logging.getLogger("quiz_api")

ANSWER_FIELDS = ("answer_text", "is_correct")


class QuizReader:
    """Reads a quiz together with its questions and their answers."""

    def __init__(self, helper):
        self.db = helper

    def read(self, quiz_id):
        quiz = self.db.find_by_id("quizzes", quiz_id)
        if not quiz:
            raise NotFoundError("Quiz not found")

        quiz["questions"] = self.group_answers(self.fetch_question_rows(quiz_id))
        return quiz

    def fetch_question_rows(self, quiz_id):
        questions = self.db.table("quiz_questions")
        answers = self.db.table("answers")

        stmt = (
            select(
                questions,
                answers.c.id.label("answer_id"),
                answers.c.answer_text,
                answers.c.is_correct,
                answers.c.image_url.label("answer_image_url"),
                answers.c.created_at.label("answer_created_at"),
                answers.c.updated_at.label("answer_updated_at"),
            )
            .select_from(questions.outerjoin(answers, questions.c.id == answers.c.question_id))
            .where(questions.c.quiz_id == quiz_id)
            .order_by(questions.c.id, answers.c.id)
        )
        return self.db.fetch_all(stmt)

    @staticmethod
    def group_answers(rows):
        """Fold joined question/answer rows into questions with an answers list."""
        grouped = {}
        for row in rows:
            question = grouped.get(row["id"])
            if question is None:
                question = {
                    key: value for key, value in row.items()
                    if key not in ANSWER_FIELDS and not key.startswith("answer_")
                }
                question["answers"] = []
                grouped[row["id"]] = question

            if row["answer_id"] is not None:
                question["answers"].append({
                    "id": row["answer_id"],
                    "answer_text": row["answer_text"],
                    "is_correct": bool(row["is_correct"]),
                    "image_url": row["answer_image_url"],
                    "created_at": row["answer_created_at"],
                    "updated_at": row["answer_updated_at"],
                })

        return list(grouped.values())

    def handle_request(self, method, quiz_id):
        if method not in ("GET", "HEAD"):
            return ApiResponse("Method not allowed", None, 405)

        try:
            return ApiResponse("Success", self.read(quiz_id))
        except NotFoundError as e:
            return ApiResponse.from_error(e)
        except SQLAlchemyError as e:
            logger.exception("Database error reading complete quiz %s", quiz_id)
            self.db.session.rollback()
            log_database_error(e)
            return ApiResponse("Internal server error", None, 500)
