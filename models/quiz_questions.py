from models import db
from sqlalchemy.orm import validates
from classes.errors import QuestionError
from utils.helpers import is_valid_url

QUESTION_TYPES = ("multiple_choice", "true_false", "text")


class QuizQuestion(db.Model):
    __tablename__ = "quiz_questions"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id"), nullable=False, index=True)
    question_text = db.Column(db.Text, nullable=False)
    question_type = db.Column(db.String(50), nullable=False, default="multiple_choice")
    time_limit = db.Column(db.Integer, nullable=True, default=30)
    image_url = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)
    updated_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    quiz = db.relationship("Quiz", back_populates="questions")
    answers = db.relationship("Answer", back_populates="question")

    @validates("quiz_id")
    def validate_quiz_id(self, key, quiz_id):
        if quiz_id is None or quiz_id <= 0:
            raise QuestionError("Quiz ID must be a positive integer")
        return quiz_id

    @validates("question_text")
    def validate_question_text(self, key, question_text):
        if question_text is None or not question_text.strip():
            raise QuestionError("Question cannot be empty")
        return question_text

    @validates("question_type")
    def validate_question_type(self, key, question_type):
        if question_type not in QUESTION_TYPES:
            raise QuestionError(f"Question type must be one of: {', '.join(QUESTION_TYPES)}")
        return question_type

    @validates("time_limit")
    def validate_time_limit(self, key, time_limit):
        if time_limit is not None and time_limit <= 0:
            raise QuestionError("Time limit must be a positive number of seconds")
        return time_limit

    @validates("image_url")
    def validate_image_url(self, key, image_url):
        if image_url is not None and not is_valid_url(image_url):
            raise QuestionError("Invalid image URL format")
        return image_url

    def __repr__(self):
        return f"<QuizQuestion {self.id} (Quiz ID {self.quiz_id})>"

    def to_record(self):
        return {
            "quiz_id": self.quiz_id,
            "question_text": self.question_text,
            "question_type": self.question_type,
            "time_limit": self.time_limit,
            "image_url": self.image_url,
        }
