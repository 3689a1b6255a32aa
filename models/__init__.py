from flask_sqlalchemy import SQLAlchemy

# Initialize SQLAlchemy
db = SQLAlchemy()

# Free text is stored HTML-escaped and "&" grows to "&amp;"
ESCAPED_WIDTH = 5

# Import models
from models.quizzes import Quiz
from models.quiz_questions import QuizQuestion
from models.answers import Answer
