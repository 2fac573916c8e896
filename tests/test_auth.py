"""Tests for bearer-token identity."""
import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from jose import jwt

from spa_api.core.auth import decode_identity
from spa_api.core.config import settings
from spa_api.main import app
from spa_api.models.user import Role


def _token(payload, secret=None):
    return jwt.encode(payload, secret or settings.SECRET_KEY, algorithm=settings.ALGORITHM)


class TestDecodeIdentity:
    def test_worker_token(self):
        identity = decode_identity(_token({"sub": "w1", "role": "worker"}))
        assert identity.worker_id == "w1"
        assert identity.role == Role.WORKER
        assert not identity.is_admin

    def test_admin_token(self):
        assert decode_identity(_token({"sub": "a1", "role": "admin"})).is_admin

    def test_role_defaults_to_worker(self):
        assert decode_identity(_token({"sub": "12"})).role == Role.WORKER

    @pytest.mark.parametrize(
        "token",
        [
            _token({"sub": "w1"}, secret="someone-else"),
            _token({"role": "admin"}),
            _token({"sub": "w1", "role": "owner"}),
            "not-a-jwt",
        ],
    )
    def test_rejected_tokens(self, token):
        with pytest.raises(HTTPException) as exc:
            decode_identity(token)
        assert exc.value.status_code == 401


def test_endpoint_requires_bearer_token():
    client = TestClient(app)
    assert client.get("/api/v1/settlements/stats").status_code in (401, 403)

    response = client.get(
        "/api/v1/financials/daily",
        headers={"Authorization": f"Bearer {_token({'sub': 'w1', 'role': 'worker'})}"},
    )
    assert response.status_code == 403


def test_root():
    response = TestClient(app).get("/")
    assert response.status_code == 200
