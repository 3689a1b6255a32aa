from sqlalchemy import select

from classes.base_controller import BaseController
from classes.errors import NotFoundError
from classes.schemas import answer_rules
from models.answers import Answer


class AnswerController(BaseController):
    table = "answers"
    model = Answer
    entity_name = "Answer"
    plural_name = "answers"

    def build_rules(self, config):
        return answer_rules(config)

    def fetch_list(self, args):
        quiz_id = self.parse_id_filter(args, "quiz_id", "quizId")
        question_id = self.parse_id_filter(args, "question_id", "questionId")

        if quiz_id is None:
            filters = {"question_id": question_id} if question_id is not None else {}
            return self.db.find_all(self.table, filters)

        answers = self.db.table("answers")
        questions = self.db.table("quiz_questions")
        stmt = (
            select(answers)
            .join(questions, answers.c.question_id == questions.c.id)
            .where(questions.c.quiz_id == quiz_id)
        )
        if question_id is not None:
            stmt = stmt.where(answers.c.question_id == question_id)
        return self.db.fetch_all(stmt.order_by(answers.c.id))

    def resolve_parent(self, values, partial=False):
        """quiz_id always follows the referenced question, never the client."""
        values.pop("quiz_id", None)
        if "question_id" not in values:
            return values

        question = self.db.find_by_id("quiz_questions", values["question_id"], for_update=True)
        if not question:
            raise NotFoundError("Question not found")

        values["quiz_id"] = question["quiz_id"]
        return values
