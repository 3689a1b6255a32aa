from flask import Blueprint, request
from classes.quiz_reader import QuizReader
from utils.utils import get_database_helper

quiz_complete_bp = Blueprint("quiz_complete", __name__)


# Quiz with all of its questions and their answers
# --------------------------------------------------------------------------------
@quiz_complete_bp.route("/quiz_complete/<int:quiz_id>", methods=["GET", "POST", "PUT", "DELETE"])
def quiz_complete(quiz_id):
    reader = QuizReader(get_database_helper())
    return reader.handle_request(request.method, quiz_id).to_response()
