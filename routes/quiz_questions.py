from flask import Blueprint
from classes.question_controller import QuestionController
from utils.utils import dispatch

questions_bp = Blueprint("quiz_questions", __name__)

METHODS = ["GET", "POST", "PUT", "DELETE"]


# Questions collection: list (optional ?quizId=) or create
# --------------------------------------------------------------------------------
@questions_bp.route("/quiz_questions", methods=METHODS)
@questions_bp.route("/questions", methods=METHODS, endpoint="questions_alias")
def questions():
    return dispatch(QuestionController)


# Single question
# --------------------------------------------------------------------------------
@questions_bp.route("/quiz_questions/<int:question_id>", methods=METHODS)
@questions_bp.route("/questions/<int:question_id>", methods=METHODS, endpoint="question_alias")
def question(question_id):
    return dispatch(QuestionController, question_id)
