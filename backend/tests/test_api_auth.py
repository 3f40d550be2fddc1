"""
Account endpoint tests: /sign-up, /sign-in, /sign-out.
"""

import logging

import pytest

from wallet.models import SessionToken, User

from conftest import PASSWORD


class TestSignUp:

    def test_created(self, client, db_session):
        resp = client.post("/sign-up", json={"name": "Ana", "email": "a@a.com", "password": "x"})

        assert resp.status_code == 201
        assert db_session.query(User).count() == 1

    def test_duplicate_any_case_conflicts(self, client, db_session):
        body = {"name": "Ana", "email": "a@a.com", "password": "x"}
        assert client.post("/sign-up", json=body).status_code == 201

        resp = client.post("/sign-up", json={**body, "email": "A@A.COM"})

        assert resp.status_code == 409
        assert db_session.query(User).count() == 1

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"name": "Ana", "email": "a@a.com"},
            {"name": "Ana", "email": "nope", "password": "x"},
            {"name": 7, "email": "a@a.com", "password": "x"},
        ],
    )
    def test_invalid_body(self, client, db_session, body):
        resp = client.post("/sign-up", json=body)

        assert resp.status_code == 400
        assert "error" in resp.json
        assert db_session.query(User).count() == 0

    def test_no_body(self, client):
        assert client.post("/sign-up").status_code == 400

    def test_non_ascii_email_signs_in_and_conflicts(self, client, db_session, sign_in):
        body = {"name": "Élise", "email": "ÉLISE@example.com", "password": PASSWORD}
        assert client.post("/sign-up", json=body).status_code == 201

        assert sign_in("ÉLISE@example.com") == "test-token-1"
        assert sign_in("élise@example.com") == "test-token-2"

        resp = client.post("/sign-up", json={**body, "email": "élise@example.com"})
        assert resp.status_code == 409
        assert db_session.query(User).count() == 1

    def test_password_is_never_echoed(self, client):
        resp = client.post("/sign-up", json={"name": "Ana", "email": "a@a.com", "password": "hunter2"})
        assert b"hunter2" not in resp.data


class TestSignIn:

    def test_success(self, client, user_ana):
        resp = client.post("/sign-in", json={"email": "ana@example.com", "password": PASSWORD})

        assert resp.status_code == 200
        assert resp.json == {
            "id": user_ana.id,
            "name": "Ana",
            "email": "ana@example.com",
            "token": "test-token-1",
        }

    def test_new_token_each_time(self, client, user_ana, sign_in):
        tokens = [sign_in("ana@example.com") for _ in range(3)]
        assert tokens == ["test-token-1", "test-token-2", "test-token-3"]

    def test_case_insensitive_email(self, client, user_ana, sign_in):
        assert sign_in("ANA@EXAMPLE.COM") is not None

    def test_bad_credentials_are_indistinguishable(self, client, user_ana):
        unknown = client.post("/sign-in", json={"email": "ghost@example.com", "password": PASSWORD})
        wrong = client.post("/sign-in", json={"email": "ana@example.com", "password": "wrong"})

        assert unknown.status_code == wrong.status_code == 400
        assert unknown.json == wrong.json

    def test_invalid_body(self, client):
        resp = client.post("/sign-in", json={"email": "ana@example.com"})
        assert resp.status_code == 400
        assert resp.json["field"] == "password"


class TestSignOut:

    def test_missing_token(self, client):
        assert client.post("/sign-out").status_code == 400

    def test_empty_bearer(self, client):
        assert client.post("/sign-out", headers={"Authorization": "Bearer "}).status_code == 400

    def test_removes_session(self, client, db_session, ana_headers):
        resp = client.post("/sign-out", headers=ana_headers)

        assert resp.status_code == 200
        assert db_session.query(SessionToken).count() == 0

    def test_unknown_token_is_ok(self, client, db_session, ana_headers):
        resp = client.post("/sign-out", headers={"Authorization": "Bearer never-issued"})

        assert resp.status_code == 200
        assert db_session.query(SessionToken).count() == 1

    def test_other_sessions_survive(self, client, user_ana, sign_in):
        first = sign_in("ana@example.com")
        second = sign_in("ana@example.com")

        client.post("/sign-out", headers={"Authorization": f"Bearer {first}"})

        assert client.get("/transactions", headers={"Authorization": f"Bearer {first}"}).status_code == 401
        assert client.get("/transactions", headers={"Authorization": f"Bearer {second}"}).status_code == 200


class TestInternalErrors:

    def test_unexpected_failure_is_generic_500(self, app, client, services, monkeypatch):
        def boom(**kwargs):
            raise RuntimeError("database is on fire")

        monkeypatch.setattr(services.accounts, "sign_up", boom)

        resp = client.post("/sign-up", json={"name": "Ana", "email": "a@a.com", "password": "x"})

        assert resp.status_code == 500
        assert resp.json == {"error": "Internal server error"}
        assert b"fire" not in resp.data


class TestLogging:

    def test_credentials_never_reach_the_log(self, client, caplog):
        caplog.set_level(logging.DEBUG, logger="wallet")

        client.post("/sign-up", json={"name": "Ana", "email": "ana@example.com", "password": PASSWORD})
        client.post("/sign-in", json={"email": "ana@example.com", "password": "wrong-Passw0rd"})
        token = client.post("/sign-in", json={"email": "ana@example.com", "password": PASSWORD}).json["token"]
        client.get("/transactions", headers={"Authorization": f"Bearer {token}"})
        client.post("/sign-out", headers={"Authorization": f"Bearer {token}"})

        assert "Failed sign-in attempt" in caplog.text
        assert "Session destroyed" in caplog.text
        for secret in (PASSWORD, "wrong-Passw0rd", token):
            assert secret not in caplog.text
