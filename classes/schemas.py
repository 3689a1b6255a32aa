"""
Declarative field rules for each resource, consumed by classes.validators.Validator.
"""
from classes.validators import FieldRule
from models.quiz_questions import QUESTION_TYPES

TITLE_PATTERN = r"^[a-zA-Z0-9\s\-\.,!?'\":&()]+$"
DESCRIPTION_PATTERN = r"^[a-zA-Z0-9\s.,!?'\"-]*$"


def quiz_rules(config):
    return {
        "title": FieldRule(
            "string", required=True, min_length=1,
            max_length=config.get("MAX_TITLE_LENGTH", 255),
            pattern=TITLE_PATTERN,
            message="Title contains invalid characters",
        ),
        "description": FieldRule(
            "string", max_length=config.get("MAX_DESCRIPTION_LENGTH", 1000),
            pattern=DESCRIPTION_PATTERN,
            message="Description can only contain alphanumeric characters, spaces, and basic punctuation",
            default="",
        ),
        "category": FieldRule("string", max_length=config.get("MAX_CATEGORY_LENGTH", 100)),
        "tags": FieldRule("string", max_length=config.get("MAX_TAGS_LENGTH", 500)),
        "image_url": FieldRule(
            "url", max_length=config.get("MAX_URL_LENGTH", 500), aliases=("imageUrl",),
        ),
    }


def question_rules(config):
    return {
        "quiz_id": FieldRule("int", required=True, min=1, aliases=("quizId",)),
        "question_text": FieldRule(
            "string", required=True, min_length=1,
            max_length=config.get("MAX_QUESTION_LENGTH", 500),
            aliases=("questionText", "question"),
        ),
        "question_type": FieldRule(
            "string", choices=QUESTION_TYPES, aliases=("questionType",),
            default="multiple_choice",
        ),
        "time_limit": FieldRule(
            "int", min=1, max=config.get("MAX_TIME_LIMIT", 300),
            aliases=("timeLimit",), default=config.get("DEFAULT_TIME_LIMIT", 30),
        ),
        "image_url": FieldRule(
            "url", max_length=config.get("MAX_URL_LENGTH", 500), aliases=("imageUrl",),
        ),
    }


def answer_rules(config):
    return {
        "question_id": FieldRule("int", required=True, min=1, aliases=("questionId",)),
        "answer_text": FieldRule(
            "string", required=True, min_length=1,
            max_length=config.get("MAX_ANSWER_LENGTH", 500),
            aliases=("answerText",),
        ),
        "is_correct": FieldRule("bool", required=True, aliases=("isCorrect",)),
        "image_url": FieldRule(
            "url", max_length=config.get("MAX_URL_LENGTH", 500), aliases=("imageUrl",),
        ),
    }
