from models import db
from sqlalchemy.orm import validates
from classes.errors import AnswerError
from utils.helpers import is_valid_url


class Answer(db.Model):
    __tablename__ = "answers"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id"), nullable=False, index=True)
    question_id = db.Column(db.Integer, db.ForeignKey("quiz_questions.id"), nullable=False, index=True)
    answer_text = db.Column(db.Text, nullable=False)
    is_correct = db.Column(db.Boolean, nullable=False, default=False)
    image_url = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)
    updated_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    question = db.relationship("QuizQuestion", back_populates="answers")

    @validates("quiz_id", "question_id")
    def validate_parent_id(self, key, value):
        if value is None or value <= 0:
            label = "Quiz ID" if key == "quiz_id" else "Question ID"
            raise AnswerError(f"{label} must be a positive integer")
        return value

    @validates("answer_text")
    def validate_answer_text(self, key, answer_text):
        if answer_text is None or not answer_text.strip():
            raise AnswerError("Answer text cannot be empty")
        return answer_text

    @validates("is_correct")
    def validate_is_correct(self, key, is_correct):
        if not isinstance(is_correct, bool):
            raise AnswerError("is_correct must be a boolean value")
        return is_correct

    @validates("image_url")
    def validate_image_url(self, key, image_url):
        if image_url is not None and not is_valid_url(image_url):
            raise AnswerError("Invalid image URL format")
        return image_url

    def __repr__(self):
        return f"<Answer {self.id} (Question ID {self.question_id})>"

    def to_record(self):
        return {
            "quiz_id": self.quiz_id,
            "question_id": self.question_id,
            "answer_text": self.answer_text,
            "is_correct": self.is_correct,
            "image_url": self.image_url,
        }
