"""
Database initialization script.

Run `python -m notes_database.init_db` to create all required tables and
indexes in the configured database. Creation is additive and idempotent.
"""
from notes_database.db import Database


# PUBLIC_INTERFACE
def init_db(database=None):
    """Initializes the database by creating all tables if they do not exist."""
    database = database or Database()
    database.create_all()
    return database

if __name__ == "__main__":
    db = init_db()
    db.dispose()
    print("Database tables created successfully.")
