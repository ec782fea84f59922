from fastapi import Request


# DATABASE Dependency
def get_db(request: Request):
    """Yields a session from the Database attached to the running app."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
