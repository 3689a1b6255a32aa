import pytest

from app import create_app
from models import db


@pytest.fixture
def app():
    """Create a fresh app backed by an in-memory database for each test."""
    app = create_app("testing")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture
def create_quiz(client):
    def _create_quiz(**overrides):
        payload = {"title": "Science Quiz", "description": "Test knowledge", "category": "Science"}
        payload.update(overrides)
        response = client.post("/quizzes", json=payload)
        assert response.status_code == 201, response.json
        return response.json["data"]
    return _create_quiz


@pytest.fixture
def create_question(client):
    def _create_question(quiz_id, **overrides):
        payload = {"quizId": quiz_id, "question_text": "What is the chemical symbol for water?"}
        payload.update(overrides)
        response = client.post("/quiz_questions", json=payload)
        assert response.status_code == 201, response.json
        return response.json["data"]
    return _create_question


@pytest.fixture
def create_answer(client):
    def _create_answer(question_id, **overrides):
        payload = {"question_id": question_id, "answer_text": "H2O", "is_correct": True}
        payload.update(overrides)
        response = client.post("/answers", json=payload)
        assert response.status_code == 201, response.json
        return response.json["data"]
    return _create_answer
