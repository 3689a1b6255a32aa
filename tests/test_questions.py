from models import db
from models.quiz_questions import QuizQuestion


def test_create_question(client, create_quiz):
    quiz = create_quiz()

    response = client.post("/quiz_questions", json={
        "quizId": quiz["id"],
        "question_text": "What is the chemical symbol for water?",
    })

    assert response.status_code == 201
    assert response.json["message"] == "Question created successfully"
    data = response.json["data"]
    assert data["quiz_id"] == quiz["id"]
    assert data["question_text"] == "What is the chemical symbol for water?"
    assert data["time_limit"] == 30
    assert data["question_type"] == "multiple_choice"


def test_create_question_with_camel_case_fields(client, create_quiz):
    quiz = create_quiz()

    response = client.post("/questions", json={
        "quizId": quiz["id"],
        "questionText": "Is water wet?",
        "questionType": "true_false",
        "timeLimit": 45,
    })

    assert response.status_code == 201
    data = response.json["data"]
    assert data["question_type"] == "true_false"
    assert data["time_limit"] == 45


def test_create_question_for_missing_quiz(client):
    response = client.post("/quiz_questions", json={"quizId": 999, "question_text": "Orphan?"})

    assert response.status_code == 404
    assert response.json == {"message": "Quiz not found", "data": None}
    assert db.session.query(QuizQuestion).count() == 0


def test_create_question_rejects_out_of_range_time_limit(client, create_quiz):
    quiz = create_quiz()

    for time_limit in (0, 301, "soon"):
        response = client.post("/quiz_questions", json={
            "quizId": quiz["id"],
            "question_text": "How fast?",
            "time_limit": time_limit,
        })
        assert response.status_code == 400

    assert db.session.query(QuizQuestion).count() == 0


def test_create_question_rejects_unknown_type(client, create_quiz):
    quiz = create_quiz()

    response = client.post("/quiz_questions", json={
        "quizId": quiz["id"],
        "question_text": "Pick one",
        "question_type": "essay",
    })

    assert response.status_code == 400
    assert "question_type" in response.json["data"][0]


def test_create_question_requires_fields(client):
    response = client.post("/quiz_questions", json={})

    assert response.status_code == 400
    assert response.json["data"] == [
        "Field 'quiz_id' is required",
        "Field 'question_text' is required",
    ]


def test_list_questions_by_quiz(client, create_quiz, create_question):
    first = create_quiz(title="First Quiz")
    second = create_quiz(title="Second Quiz")
    create_question(first["id"], question_text="One")
    create_question(second["id"], question_text="Two")
    create_question(first["id"], question_text="Three")

    response = client.get(f"/quiz_questions?quizId={first['id']}")

    assert response.status_code == 200
    assert [q["question_text"] for q in response.json["data"]] == ["One", "Three"]
    assert len(client.get("/questions").json["data"]) == 3


def test_list_questions_rejects_non_numeric_filter(client):
    response = client.get("/quiz_questions?quiz_id=abc")

    assert response.status_code == 400


def test_list_questions_empty(client):
    response = client.get("/quiz_questions")

    assert response.status_code == 404
    assert response.json["message"] == "No questions found"


def test_get_missing_question(client):
    response = client.get("/quiz_questions/42")

    assert response.status_code == 404
    assert response.json["message"] == "Question not found"


def test_update_question(client, create_quiz, create_question):
    quiz = create_quiz()
    question = create_question(quiz["id"])

    response = client.put(f"/quiz_questions/{question['id']}", json={"timeLimit": 60})

    assert response.status_code == 200
    assert response.json["message"] == "Question updated successfully"
    assert response.json["data"]["time_limit"] == 60
    assert response.json["data"]["question_text"] == question["question_text"]


def test_update_question_to_missing_quiz(client, create_quiz, create_question):
    quiz = create_quiz()
    question = create_question(quiz["id"])

    response = client.put(f"/quiz_questions/{question['id']}", json={"quizId": 999})

    assert response.status_code == 404
    assert response.json["message"] == "Quiz not found"
    assert client.get(f"/quiz_questions/{question['id']}").json["data"]["quiz_id"] == quiz["id"]


def test_delete_question_with_answers_is_refused(client, create_quiz, create_question, create_answer):
    quiz = create_quiz()
    question = create_question(quiz["id"])
    answer = create_answer(question["id"])

    response = client.delete(f"/quiz_questions/{question['id']}")

    assert response.status_code == 400
    assert response.json["message"] == (
        "Cannot delete question with existing answers. Delete answers first."
    )
    assert client.get(f"/quiz_questions/{question['id']}").status_code == 200

    assert client.delete(f"/answers/{answer['id']}").status_code == 200
    response = client.delete(f"/quiz_questions/{question['id']}")
    assert response.status_code == 200
    assert response.json["message"] == "Question deleted successfully"

    assert client.get(f"/quiz_questions/{question['id']}").status_code == 404
    assert client.delete(f"/quiz_questions/{question['id']}").status_code == 404
