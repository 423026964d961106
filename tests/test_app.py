import pytest

from app import create_app
from models import Snapshot, db
from services.session_helper import SNAPSHOT_KEY


@pytest.fixture
def app():
    app = create_app({"TESTING": True, "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:"})
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def test_homepage(client):
    """Test the homepage loads with an empty board"""
    response = client.get("/")
    assert response.status_code == 200
    assert b"Score" in response.data
    assert b"$0" in response.data
    assert b"0 out of 0" in response.data


def test_homepage_assigns_snapshot_key(client):
    client.get("/")
    with client.session_transaction() as sess:
        assert sess.get(SNAPSHOT_KEY)


def test_malformed_snapshot_recovered_silently(app, client):
    with client.session_transaction() as sess:
        sess[SNAPSHOT_KEY] = "broken"
    db.session.add(Snapshot(key="broken", payload="{definitely not json"))
    db.session.commit()

    response = client.get("/")
    assert response.status_code == 200
    assert b"0 out of 0" in response.data
    assert b"alert-danger" not in response.data


def test_healthz(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok", "db": True}


def test_not_found(client):
    response = client.get("/no_such_page_xyz")
    assert response.status_code == 404
    assert b"Page not found" in response.data


def test_security_headers(client):
    response = client.get("/")
    assert response.headers.get("X-Frame-Options") == "DENY"
    assert response.headers.get("X-Content-Type-Options") == "nosniff"
    assert response.headers.get("Content-Security-Policy")
