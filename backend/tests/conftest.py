# backend/tests/conftest.py
import os, sys

# añade "backend/" al sys.path para que "from referral_service ..." funcione sin instalar
HERE = os.path.dirname(__file__)
BACKEND_DIR = os.path.abspath(os.path.join(HERE, ".."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest
from flask_jwt_extended import create_access_token

from referral_service import create_app
from referral_service.db.database import db
from referral_service.models import User

TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    "AUTO_CREATE_TABLES": True,
    "JWT_SECRET_KEY": "test-secret-key-0123456789abcdef0123456789",
}

SPONSOR_ID = 7
OTHER_SPONSOR_ID = 8
ADMIN_ID = 1
NEW_USER_ID = 42
OTHER_USER_ID = 99


def _seed_users(app):
    with app.app_context():
        db.session.add_all([
            User(id=ADMIN_ID, username="admin"),
            User(id=SPONSOR_ID, username="sponsor7"),
            User(id=OTHER_SPONSOR_ID, username="sponsor8"),
            User(id=NEW_USER_ID, username="newbie42"),
            User(id=OTHER_USER_ID, username="late99"),
        ])
        db.session.commit()


@pytest.fixture
def app():
    app = create_app(dict(TEST_CONFIG))
    _seed_users(app)

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    """auth_headers(user_id, admin=False) -> cabecera Authorization con un JWT válido."""
    def _make(user_id, admin=False):
        with app.app_context():
            token = create_access_token(
                identity=str(user_id),
                additional_claims={"rid": 1 if admin else 2},
            )
        return {"Authorization": f"Bearer {token}"}
    return _make


@pytest.fixture
def grant_token(client, auth_headers):
    """Emite un token vía HTTP y devuelve el string."""
    def _grant(sponsor_id=SPONSOR_ID):
        resp = client.post(
            "/grant",
            json={"sponsor_id": sponsor_id},
            headers=auth_headers(sponsor_id),
        )
        assert resp.status_code == 200, resp.get_json()
        return resp.get_json()["token"]
    return _grant


@pytest.fixture
def file_app(tmp_path):
    """App sobre SQLite en fichero: varias conexiones reales para pruebas con hilos."""
    config = dict(TEST_CONFIG)
    config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{tmp_path / 'referrals.db'}"
    config["SQLALCHEMY_ENGINE_OPTIONS"] = {
        "connect_args": {"check_same_thread": False, "timeout": 30},
    }
    app = create_app(config)
    _seed_users(app)

    yield app

    with app.app_context():
        db.session.remove()
        db.engine.dispose()
