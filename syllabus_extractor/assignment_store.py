"""
Assignment storage for extracted syllabus results.

Uses SQLite for local development and PostgreSQL for production.
Automatically selects the appropriate store based on environment variables.

The store is the persistence collaborator of the pipeline: it receives the
validated assignment list plus an opaque course identifier and creates one
record per assignment. Records are created with status "pending".
"""

import os
import sqlite3
from pathlib import Path
from datetime import datetime
from typing import Any, Dict, List, Optional

from .models import Assignment, describe_assignment, serialize_date

DEFAULT_STATUS = "pending"


def assignment_record(course_id: str, assignment: Assignment, created_at: datetime) -> Dict[str, Any]:
    """Build the row stored for one assignment (same shape for every backend)."""
    return {
        "course_id": course_id,
        "title": assignment.title,
        "description": describe_assignment(assignment),
        "due_date": serialize_date(assignment.due_date),
        "category": assignment.category,
        "source": assignment.source,
        "status": DEFAULT_STATUS,
        "created_at": created_at.isoformat(),
    }


def row_to_dict(row: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a stored row to the camelCase shape the API returns."""
    due_date = row.get("due_date")
    created_at = row.get("created_at")
    return {
        "id": row.get("id"),
        "courseId": row.get("course_id"),
        "title": row.get("title"),
        "description": row.get("description"),
        "dueDate": due_date.isoformat() if hasattr(due_date, "isoformat") else due_date,
        "category": row.get("category"),
        "source": row.get("source"),
        "status": row.get("status"),
        "createdAt": created_at.isoformat() if hasattr(created_at, "isoformat") else created_at,
    }


class SQLiteAssignmentStore:
    """Stores assignments in a local SQLite database."""

    def __init__(self, data_dir: Optional[Path] = None):
        """Initialize the store.

        Args:
            data_dir: Directory for the database file. Defaults to ~/.syllabus_extractor
        """
        if data_dir is None:
            data_dir = Path.home() / ".syllabus_extractor"
        data_dir = Path(data_dir)
        data_dir.mkdir(parents=True, exist_ok=True)
        self.db_path = data_dir / "assignments.db"
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self):
        """Initialize database schema."""
        conn = self._connect()
        conn.execute("""
            CREATE TABLE IF NOT EXISTS assignments (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                course_id TEXT NOT NULL,
                title TEXT NOT NULL,
                description TEXT,
                due_date TEXT,
                category TEXT NOT NULL,
                source TEXT,
                status TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
        """)
        conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_assignments_course ON assignments (course_id)"
        )
        conn.commit()
        conn.close()

    def save_assignments(self, course_id: str, assignments: List[Assignment]) -> int:
        """Create one record per assignment for the given course.

        Args:
            course_id: Opaque identifier of the owning course
            assignments: Validated assignments, in output order

        Returns:
            Number of records written
        """
        now = datetime.now()
        records = [assignment_record(course_id, a, now) for a in assignments]

        conn = self._connect()
        try:
            conn.executemany(
                """
                INSERT INTO assignments
                (course_id, title, description, due_date, category, source, status, created_at)
                VALUES (:course_id, :title, :description, :due_date, :category, :source, :status, :created_at)
                """,
                records
            )
            conn.commit()
        finally:
            conn.close()
        return len(records)

    def list_assignments(self, course_id: str) -> List[Dict[str, Any]]:
        """Return the stored records of a course, ordered by due date."""
        conn = self._connect()
        try:
            cursor = conn.execute(
                """
                SELECT id, course_id, title, description, due_date, category,
                       source, status, created_at
                FROM assignments
                WHERE course_id = ?
                ORDER BY due_date IS NULL, due_date, id
                """,
                (course_id,)
            )
            rows = cursor.fetchall()
        finally:
            conn.close()
        return [row_to_dict(dict(row)) for row in rows]


# Auto-select store based on environment
def get_assignment_store():
    """Get the appropriate assignment store based on environment.

    Returns:
        PostgresAssignmentStore if DATABASE_URL is set, otherwise SQLiteAssignmentStore
    """
    if os.getenv("DATABASE_URL"):
        # Use PostgreSQL for production
        from .postgres_store import PostgresAssignmentStore
        return PostgresAssignmentStore()
    else:
        # Use SQLite for local development
        return SQLiteAssignmentStore()
