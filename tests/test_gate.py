"""Tests for the Auth Gate middleware."""

from __future__ import annotations

import pytest
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from guesswho.auth.gate import AuthGateMiddleware, extract_bearer_token
from guesswho.auth.verifier import AuthDecision, TokenVerifier


class StubVerifier(TokenVerifier):
    """Accepts exactly one token and records every call."""

    def __init__(self, accepted: str = "good-token"):
        self.accepted = accepted
        self.seen: list[str | None] = []

    def verify(self, token):
        self.seen.append(token)
        if token == self.accepted:
            return AuthDecision.allow({"sub": "player-1"})
        return AuthDecision.deny("Missing or invalid token" if token is None else "Invalid token")


async def whoami(request: Request):
    claims = getattr(request.state, "auth_claims", None)
    return JSONResponse({"claims": claims})


@pytest.fixture
def verifier():
    return StubVerifier()


@pytest.fixture
def gated_client(verifier):
    app = Starlette(
        routes=[
            Route("/api/whoami", whoami),
            Route("/api", whoami),
            Route("/apiary", whoami),
            Route("/public", whoami),
        ]
    )
    app.add_middleware(AuthGateMiddleware, verifier=verifier, prefix="/api/")
    return TestClient(app)


class TestExtractBearerToken:
    @pytest.mark.parametrize(
        "header,expected",
        [
            ("Bearer abc.def", "abc.def"),
            ("bearer abc.def", "abc.def"),
            ("Bearer   abc.def  ", "abc.def"),
            ("Bearer", None),
            ("Bearer ", None),
            ("Basic dXNlcjpwYXNz", None),
            ("", None),
            (None, None),
        ],
    )
    def test_extract(self, header, expected):
        assert extract_bearer_token(header) == expected


class TestAuthGateMiddleware:
    def test_protected_path_requires_token(self, gated_client, verifier):
        resp = gated_client.get("/api/whoami")
        assert resp.status_code == 401
        assert resp.json() == {"error": "Missing or invalid token"}
        assert resp.headers["WWW-Authenticate"] == "Bearer"
        assert verifier.seen == [None]

    def test_prefix_itself_is_protected(self, gated_client):
        assert gated_client.get("/api").status_code == 401

    def test_rejected_token_reason(self, gated_client):
        resp = gated_client.get("/api/whoami", headers={"Authorization": "Bearer nope"})
        assert resp.status_code == 401
        assert resp.json() == {"error": "Invalid token"}

    def test_accepted_token_passes_claims(self, gated_client):
        resp = gated_client.get("/api/whoami", headers={"Authorization": "Bearer good-token"})
        assert resp.status_code == 200
        assert resp.json() == {"claims": {"sub": "player-1"}}

    @pytest.mark.parametrize("path", ["/public", "/apiary"])
    def test_unprotected_paths_skip_verifier(self, gated_client, verifier, path):
        """Paths outside the prefix, including lookalikes, are not gated."""
        resp = gated_client.get(path)
        assert resp.status_code == 200
        assert resp.json() == {"claims": None}
        assert verifier.seen == []
