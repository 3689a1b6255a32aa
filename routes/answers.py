from flask import Blueprint
from classes.answer_controller import AnswerController
from utils.utils import dispatch

answers_bp = Blueprint("answers", __name__)

METHODS = ["GET", "POST", "PUT", "DELETE"]


# Answers collection: list (optional ?question_id= or ?quiz_id=) or create
# --------------------------------------------------------------------------------
@answers_bp.route("/answers", methods=METHODS)
def answers():
    return dispatch(AnswerController)


# Single answer
# --------------------------------------------------------------------------------
@answers_bp.route("/answers/<int:answer_id>", methods=METHODS)
def answer(answer_id):
    return dispatch(AnswerController, answer_id)
