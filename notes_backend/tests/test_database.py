from sqlalchemy import inspect, text

from notes_database.db import Database, get_database_url
from notes_database.init_db import init_db


def test_schema_has_tables_and_indexes(database):
    inspector = inspect(database.engine)
    assert {"users", "notes"} <= set(inspector.get_table_names())
    index_names = {ix["name"] for ix in inspector.get_indexes("notes")}
    assert {"idx_notes_user_id", "idx_notes_tags"} <= index_names
    fks = inspector.get_foreign_keys("notes")
    assert fks[0]["referred_table"] == "users"
    assert fks[0]["options"].get("ondelete") == "CASCADE"

def test_create_all_is_idempotent(database):
    database.create_all()
    init_db(database)
    assert {"users", "notes"} <= set(inspect(database.engine).get_table_names())

def test_foreign_keys_enforced(db_session):
    assert db_session.execute(text("PRAGMA foreign_keys")).scalar() == 1

def test_file_database_uses_wal(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'notes.db'}")
    try:
        db.create_all()
        with db.engine.connect() as conn:
            assert conn.execute(text("PRAGMA journal_mode")).scalar().lower() == "wal"
    finally:
        db.dispose()

def test_database_url_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///explicit.db")
    assert get_database_url() == "sqlite:///explicit.db"
    monkeypatch.delenv("DATABASE_URL")
    monkeypatch.setenv("DB_PATH", str(tmp_path / "from_path.db"))
    assert get_database_url() == f"sqlite:///{tmp_path / 'from_path.db'}"
