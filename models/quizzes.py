from models import db, ESCAPED_WIDTH
from sqlalchemy.orm import validates
from classes.errors import QuizError
from utils.helpers import is_valid_url


class Quiz(db.Model):
    __tablename__ = "quizzes"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255 * ESCAPED_WIDTH), nullable=False)
    description = db.Column(db.Text, nullable=False, default="")
    category = db.Column(db.String(100 * ESCAPED_WIDTH), nullable=True, index=True)
    tags = db.Column(db.String(500 * ESCAPED_WIDTH), nullable=True)
    image_url = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)
    updated_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    questions = db.relationship("QuizQuestion", back_populates="quiz")

    @validates("title")
    def validate_title(self, key, title):
        if title is None or not title.strip():
            raise QuizError("Title cannot be empty")
        if len(title) > 255:
            raise QuizError("Title cannot exceed 255 characters")
        return title

    @validates("description")
    def validate_description(self, key, description):
        if description and len(description) > 1000:
            raise QuizError("Description cannot exceed 1000 characters")
        return description or ""

    @validates("category")
    def validate_category(self, key, category):
        if category and len(category) > 100:
            raise QuizError("Category cannot exceed 100 characters")
        return category or None

    @validates("image_url")
    def validate_image_url(self, key, image_url):
        if image_url is not None and not is_valid_url(image_url):
            raise QuizError("Invalid image URL format")
        return image_url

    @property
    def tags_list(self):
        return [tag.strip() for tag in self.tags.split(",") if tag.strip()] if self.tags else []

    def __repr__(self):
        return f"<Quiz {self.title}>"

    def to_record(self):
        """Column values to persist, without store-assigned fields."""
        return {
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "tags": self.tags,
            "image_url": self.image_url,
        }
