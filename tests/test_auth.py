"""Signup/login and the authenticated quiz mode."""

import pytest

from quizmaster.models.user_db.user_db import User


def signup_and_login(client, email, password="secret123"):
    client.post("/auth/signup", json={"email": email, "password": password})
    token = client.post("/auth/login", json={"email": email, "password": password}).json()["token"]
    return {"Authorization": f"Bearer {token}"}


def test_signup_sends_welcome_email(client, notifier):
    response = client.post("/auth/signup", json={"email": "new@user.com", "password": "secret123"})

    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "new@user.com"
    assert isinstance(body["id"], int)
    assert notifier.sent[0][0] == "new@user.com"
    assert notifier.sent[0][1] == "Welcome to QuizMaster!"


def test_signup_survives_failed_welcome_email(client, notifier):
    notifier.result = False
    response = client.post("/auth/signup", json={"email": "new@user.com", "password": "secret123"})
    assert response.status_code == 201


def test_duplicate_signup(client):
    client.post("/auth/signup", json={"email": "dup@user.com", "password": "secret123"})
    response = client.post("/auth/signup", json={"email": "dup@user.com", "password": "secret123"})
    assert response.status_code == 409


@pytest.mark.parametrize("payload", [
    {"email": "not-an-email", "password": "secret123"},
    {"email": "short@user.com", "password": "123"},
])
def test_signup_validation(client, payload):
    assert client.post("/auth/signup", json=payload).status_code == 400


def test_login_and_me(client):
    headers = signup_and_login(client, "me@user.com")

    response = client.get("/auth/me", headers=headers)

    assert response.status_code == 200
    assert response.json()["email"] == "me@user.com"


def test_login_with_wrong_password(client):
    client.post("/auth/signup", json={"email": "me@user.com", "password": "secret123"})
    response = client.post("/auth/login", json={"email": "me@user.com", "password": "wrong-pass"})
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_me_requires_token(client):
    assert client.get("/auth/me").status_code == 401


@pytest.mark.usefixtures("auth_mode")
class TestAuthenticatedQuizzes:

    def test_routes_require_a_token(self, client, math_quiz):
        assert client.get("/quizzes").status_code == 401
        assert client.post("/quizzes", json=math_quiz).status_code == 401
        assert client.get("/quizzes/1").status_code == 401
        answers = {"email": "a@b.com", "answers": [{"questionId": 1, "selectedOptionId": 1}]}
        assert client.post("/quizzes/1/answers", json=answers).status_code == 401
        assert client.get("/quizzes", headers={"Authorization": "Bearer garbage"}).status_code == 401

    def test_token_of_deleted_user_is_rejected(self, client, session_factory):
        headers = signup_and_login(client, "gone@user.com")
        db = session_factory()
        db.query(User).filter(User.email == "gone@user.com").delete()
        db.commit()
        db.close()

        response = client.get("/quizzes", headers=headers)

        assert response.status_code == 401
        assert response.json() == {"error": "User no longer exists"}

    def test_owner_comes_from_identity(self, client, math_quiz):
        headers = signup_and_login(client, "owner@user.com")
        math_quiz.pop("email")

        response = client.post("/quizzes", json=math_quiz, headers=headers)

        assert response.status_code == 201
        assert response.json()["email"] == "owner@user.com"

    def test_listing_is_per_user(self, client, math_quiz):
        alice = signup_and_login(client, "alice@user.com")
        bob = signup_and_login(client, "bob@user.com")
        mine = client.post("/quizzes", json=math_quiz, headers=alice).json()
        client.post("/quizzes", json=dict(math_quiz, title="Bob's"), headers=bob)

        response = client.get("/quizzes", headers=alice)

        assert [q["id"] for q in response.json()] == [mine["id"]]

    def test_submitter_email_from_identity(self, client, notifier, math_quiz):
        headers = signup_and_login(client, "taker@user.com")
        quiz = client.post("/quizzes", json=math_quiz, headers=headers).json()
        qid = quiz["questions"][0]["id"]

        response = client.post(
            f"/quizzes/{quiz['id']}/answers",
            json={"answers": [{"questionId": qid, "selectedOptionId": 1}]},
            headers=headers,
        )

        assert response.json() == {"score": 0, "total": 1, "percentage": "0.00"}
        assert notifier.sent[-1][0] == "taker@user.com"
