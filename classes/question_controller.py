from classes.base_controller import BaseController
from classes.errors import DependentRecordsExist, NotFoundError
from classes.schemas import question_rules
from models.quiz_questions import QuizQuestion


class QuestionController(BaseController):
    table = "quiz_questions"
    model = QuizQuestion
    entity_name = "Question"
    plural_name = "questions"

    def build_rules(self, config):
        return question_rules(config)

    def list_filters(self, args):
        quiz_id = self.parse_id_filter(args, "quiz_id", "quizId")
        return {"quiz_id": quiz_id} if quiz_id is not None else {}

    def resolve_parent(self, values, partial=False):
        if "quiz_id" in values and not self.db.exists("quizzes", values["quiz_id"]):
            raise NotFoundError("Quiz not found")
        return values

    def before_delete(self, resource_id):
        # Answers must be removed first; there is no cascade
        if self.db.count("answers", {"question_id": resource_id}):
            raise DependentRecordsExist(
                "Cannot delete question with existing answers. Delete answers first."
            )
