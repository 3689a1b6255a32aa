from classes.base_controller import BaseController
from classes.schemas import quiz_rules
from classes.validators import sanitize_text
from models.quizzes import Quiz


class QuizController(BaseController):
    table = "quizzes"
    model = Quiz
    entity_name = "Quiz"
    plural_name = "quizzes"

    def build_rules(self, config):
        return quiz_rules(config)

    def list_filters(self, args):
        category = (args.get("category") or "").strip()
        # Stored categories are escaped
        return {"category": sanitize_text(category)} if category else {}
