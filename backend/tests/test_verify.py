"""Tests for /verify and /isReferred."""

import re
from datetime import datetime, timezone

from sqlalchemy import update

from referral_service.db.database import db
from referral_service.models import Referral, ReferralStatus
from referral_service.repositories import referral_repository

from conftest import SPONSOR_ID, NEW_USER_ID, OTHER_USER_ID


class TestVerify:

    def test_redeems_available_token(self, app, client, auth_headers, grant_token):
        token = grant_token()

        resp = client.get(f"/verify/{NEW_USER_ID}/{token}", headers=auth_headers(NEW_USER_ID))

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["verified"] is True
        assert body["sponsor_id"] == SPONSOR_ID
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", body["updated"])

        with app.app_context():
            ref = Referral.query.filter_by(token=token).one()
            assert ref.status == ReferralStatus.used
            assert ref.user_id == NEW_USER_ID
            assert ref.updated_at is not None

    def test_second_redeem_fails_and_keeps_state(self, app, client, auth_headers, grant_token):
        token = grant_token()
        client.get(f"/verify/{NEW_USER_ID}/{token}", headers=auth_headers(NEW_USER_ID))

        resp = client.get(f"/verify/{OTHER_USER_ID}/{token}", headers=auth_headers(OTHER_USER_ID))

        assert resp.status_code == 409
        body = resp.get_json()
        assert body["verified"] is False
        assert body["message"] == "Referral already used"
        assert body["status"] == "used"

        with app.app_context():
            ref = Referral.query.filter_by(token=token).one()
            assert ref.user_id == NEW_USER_ID

    def test_same_user_cannot_redeem_twice(self, client, auth_headers, grant_token):
        token = grant_token()
        first = client.get(f"/verify/{NEW_USER_ID}/{token}", headers=auth_headers(NEW_USER_ID))
        second = client.get(f"/verify/{NEW_USER_ID}/{token}", headers=auth_headers(NEW_USER_ID))

        assert first.status_code == 200
        assert second.status_code == 409

    def test_unknown_token_is_invalid(self, client, auth_headers):
        resp = client.get(
            f"/verify/{NEW_USER_ID}/00000000-0000-4000-8000-000000000000",
            headers=auth_headers(NEW_USER_ID),
        )

        assert resp.status_code == 404
        assert resp.get_json() == {"verified": False, "message": "Invalid referral token"}

    def test_requires_auth(self, client, grant_token):
        token = grant_token()
        resp = client.get(f"/verify/{NEW_USER_ID}/{token}")
        assert resp.status_code == 401

    def test_conditional_update_only_wins_once(self, app, grant_token):
        token = grant_token()
        now = datetime.now(timezone.utc)

        with app.app_context():
            assert referral_repository.redeem(token, NEW_USER_ID, now) == SPONSOR_ID
            assert referral_repository.redeem(token, OTHER_USER_ID, now) is None
            assert referral_repository.find_by_token(token)["user_id"] == NEW_USER_ID

    def test_available_token_with_user_is_reported_used(self, app, client, auth_headers, grant_token):
        token = grant_token()
        with app.app_context():
            db.session.execute(
                update(Referral).where(Referral.token == token).values(user_id=OTHER_USER_ID)
            )
            db.session.commit()

        resp = client.get(f"/verify/{NEW_USER_ID}/{token}", headers=auth_headers(NEW_USER_ID))

        assert resp.status_code == 409
        assert resp.get_json() == {
            "verified": False,
            "message": "Referral already used",
            "status": "used",
        }
        with app.app_context():
            ref = Referral.query.filter_by(token=token).one()
            assert ref.status == ReferralStatus.available
            assert ref.user_id == OTHER_USER_ID


class TestIsReferred:

    def test_false_before_and_true_after_redeem(self, client, auth_headers, grant_token):
        token = grant_token()

        assert client.get(f"/isReferred/{NEW_USER_ID}").get_json() == {"referred": False}
        client.get(f"/verify/{NEW_USER_ID}/{token}", headers=auth_headers(NEW_USER_ID))
        assert client.get(f"/isReferred/{NEW_USER_ID}").get_json() == {"referred": True}

    def test_no_auth_needed(self, client):
        resp = client.get(f"/isReferred/{OTHER_USER_ID}")
        assert resp.status_code == 200


class TestReferralScenario:

    def test_grant_verify_reject_lookup(self, client, auth_headers):
        resp = client.post("/grant", json={"sponsor_id": SPONSOR_ID}, headers=auth_headers(SPONSOR_ID))
        token = resp.get_json()["token"]

        ok = client.get(f"/verify/{NEW_USER_ID}/{token}", headers=auth_headers(NEW_USER_ID))
        assert ok.get_json()["verified"] is True
        assert ok.get_json()["sponsor_id"] == SPONSOR_ID

        again = client.get(f"/verify/{OTHER_USER_ID}/{token}", headers=auth_headers(OTHER_USER_ID))
        assert again.get_json()["message"] == "Referral already used"

        assert client.get(f"/isReferred/{NEW_USER_ID}").get_json() == {"referred": True}
        assert client.get(f"/isReferred/{OTHER_USER_ID}").get_json() == {"referred": False}
