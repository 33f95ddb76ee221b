from sqlalchemy import select

from app.models.auth import AuthToken
from app.services.auth import auth_service
from app.core.security import verify_token


def test_login_stores_signature_only(db):
    auth_service.login_user(db, 1, "h.p.sig")

    rows = db.execute(select(AuthToken)).scalars().all()
    assert [(row.token, row.user_id) for row in rows] == [("sig", 1)]


def test_logged_in_until_logout(db):
    auth_service.login_user(db, 1, "h.p.sig")
    assert auth_service.is_logged_in(db, "h.p.sig")

    auth_service.logout_user(db, "h.p.sig")
    assert not auth_service.is_logged_in(db, "h.p.sig")


def test_tokens_sharing_a_signature_share_a_session(db):
    auth_service.login_user(db, 1, "h.p.sig")

    assert auth_service.is_logged_in(db, "other.header.sig")


def test_repeated_login_with_same_signature_is_noop(db):
    auth_service.login_user(db, 1, "h.p.sig")
    auth_service.login_user(db, 1, "h.p.sig")

    assert len(db.execute(select(AuthToken)).scalars().all()) == 1


def test_malformed_token_is_never_logged_in(db):
    auth_service.login_user(db, 1, "not-a-jwt")

    assert not auth_service.is_logged_in(db, "not-a-jwt")
    assert not auth_service.is_logged_in(db, "")


def test_issue_token_carries_user_and_opens_session(db, make_user):
    user = make_user(email="kai@test.com")

    token = auth_service.issue_token(db, user)

    claims = verify_token(token)
    assert claims["id"] == user.id
    assert claims["email"] == "kai@test.com"
    assert claims["roles"] == [{"role": "diner", "objectId": None}]
    assert auth_service.is_logged_in(db, token)
