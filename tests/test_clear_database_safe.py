import builtins

from app import create_app
from models import db
from services.state_store import SnapshotStore
from services.trivia_types import INITIAL_STATE


def test_clear_database_safe(monkeypatch):
    import clear_database

    app = create_app({"TESTING": True, "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:"})
    with app.app_context():
        db.create_all()
        SnapshotStore().save("a", INITIAL_STATE)

    # Silence prints for cleaner test output
    monkeypatch.setattr(builtins, "print", lambda *a, **k: None)

    assert clear_database.clear_all_data(app) == 1
    assert clear_database.clear_all_data(app) == 0


def test_clear_database_rolls_back_on_error(monkeypatch):
    import clear_database

    app = create_app({"TESTING": True, "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:"})

    def boom(self):
        raise RuntimeError("db locked")

    monkeypatch.setattr(clear_database.SnapshotStore, "clear", boom)
    monkeypatch.setattr(builtins, "print", lambda *a, **k: None)
    assert clear_database.clear_all_data(app) == 0
