from flask import Blueprint
from classes.quiz_controller import QuizController
from utils.utils import dispatch

quizzes_bp = Blueprint("quizzes", __name__)

METHODS = ["GET", "POST", "PUT", "DELETE"]


# Quizzes collection: list (optional ?category=) or create
# --------------------------------------------------------------------------------
@quizzes_bp.route("/quizzes", methods=METHODS)
def quizzes():
    return dispatch(QuizController)


# Single quiz: fetch, update or delete
# --------------------------------------------------------------------------------
@quizzes_bp.route("/quizzes/<int:quiz_id>", methods=METHODS)
def quiz(quiz_id):
    return dispatch(QuizController, quiz_id)
