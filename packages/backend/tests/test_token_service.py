"""Token issuer tests: issuance contract and downstream verification."""

import pytest

from muzer.auth.jwt import TokenError, create_session_token
from muzer.errors import BadRequest
from muzer.services.token_service import TokenIssuer


def test_issue_and_verify():
    issuer = TokenIssuer()
    token = issuer.issue("user-1", "creator-9")
    claims = issuer.verify(token)
    assert claims.user_id == "user-1"
    assert claims.creator_id == "creator-9"
    assert claims.expires_at > claims.issued_at


def test_issue_requires_creator():
    with pytest.raises(BadRequest, match="Missing creatorId"):
        TokenIssuer().issue("user-1", "")
    with pytest.raises(BadRequest):
        TokenIssuer().issue("user-1", None)


def test_custom_lifetime():
    issuer = TokenIssuer(expires_minutes=5)
    claims = issuer.verify(issuer.issue("user-1", "creator-9"))
    lifetime = claims.expires_at - claims.issued_at
    assert lifetime.total_seconds() == pytest.approx(300, abs=2)


def test_verify_rejects_session_token():
    with pytest.raises(TokenError):
        TokenIssuer().verify(create_session_token("user-1"))


def test_verify_rejects_garbage():
    with pytest.raises(TokenError):
        TokenIssuer().verify("definitely.not.ajwt")
