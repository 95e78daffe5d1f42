# substation_backend/database.py
import os
import sqlite3

from substation_backend.config import DEFAULT_DB_FILENAME, db_path_override

ALERTS_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS alerts (
        id TEXT PRIMARY KEY,
        message TEXT,
        time TEXT,
        stationInfo TEXT,
        weather TEXT,
        tools TEXT,
        parts TEXT,
        maintenanceSteps TEXT,
        usedParts TEXT
    )
"""


def resolve_db_path() -> str:
    """
    Find the maintenance database, preferring an explicit MAINTENANCE_DB_PATH
    """
    override = db_path_override()
    if override:
        return override

    possible_paths = [
        # data/ folder next to the project root
        os.path.join(os.path.dirname(__file__), "..", "data", DEFAULT_DB_FILENAME),
        # Package directory
        os.path.join(os.path.dirname(__file__), DEFAULT_DB_FILENAME),
        # Current working directory
        os.path.join("data", DEFAULT_DB_FILENAME),
        DEFAULT_DB_FILENAME,
    ]

    for path in possible_paths:
        if os.path.exists(path):
            return path

    # If no existing database found, create one under data/
    return os.path.join("data", DEFAULT_DB_FILENAME)


def get_db():
    db_path = resolve_db_path()
    directory = os.path.dirname(db_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    print(f"Using database path: {os.path.abspath(db_path)}")
    conn = sqlite3.connect(db_path)
    conn.execute(ALERTS_TABLE_SQL)
    return conn
