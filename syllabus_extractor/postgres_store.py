"""
PostgreSQL-based assignment store for production deployment.

Uses a hosted PostgreSQL database instead of local SQLite.
Automatically used when DATABASE_URL environment variable is set.
"""

import os
from datetime import datetime
from typing import Any, Dict, List, Optional

import psycopg2
from psycopg2.extras import RealDictCursor, execute_batch

from .assignment_store import assignment_record, row_to_dict
from .models import Assignment


class PostgresAssignmentStore:
    """Stores assignments in PostgreSQL.

    The schema mirrors the SQLite store so both backends return identical
    records. The table is created on first use if it does not exist.
    """

    def __init__(self, database_url: Optional[str] = None):
        """Initialize the PostgreSQL store.

        Args:
            database_url: PostgreSQL connection string. If None, reads from
                         DATABASE_URL environment variable.

        Raises:
            ValueError: If database_url is not provided and DATABASE_URL env var is not set
            ConnectionError: If the database cannot be reached
        """
        if database_url is None:
            database_url = os.getenv("DATABASE_URL")

        if not database_url:
            raise ValueError(
                "DATABASE_URL environment variable must be set for the PostgreSQL store. "
                "For local development, use SQLiteAssignmentStore instead."
            )

        self.database_url = database_url
        self._test_connection()
        self._init_db()

    def _test_connection(self):
        """Test database connection on initialization.

        Raises:
            ConnectionError: If connection fails
        """
        try:
            conn = psycopg2.connect(self.database_url)
            conn.close()
        except psycopg2.Error as e:
            raise ConnectionError(f"Failed to connect to PostgreSQL: {e}")

    def _get_connection(self):
        """Get a database connection.

        Returns:
            psycopg2 connection object
        """
        return psycopg2.connect(self.database_url)

    def _init_db(self):
        conn = self._get_connection()
        try:
            cur = conn.cursor()
            cur.execute("""
                CREATE TABLE IF NOT EXISTS assignments (
                    id SERIAL PRIMARY KEY,
                    course_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    description TEXT,
                    due_date DATE,
                    category TEXT NOT NULL,
                    source TEXT,
                    status TEXT NOT NULL,
                    created_at TIMESTAMP NOT NULL
                )
            """)
            cur.execute(
                "CREATE INDEX IF NOT EXISTS idx_assignments_course ON assignments (course_id)"
            )
            conn.commit()
            cur.close()
        finally:
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

        conn = self._get_connection()
        try:
            cur = conn.cursor()
            execute_batch(
                cur,
                """
                INSERT INTO assignments
                (course_id, title, description, due_date, category, source, status, created_at)
                VALUES (%(course_id)s, %(title)s, %(description)s, %(due_date)s,
                        %(category)s, %(source)s, %(status)s, %(created_at)s)
                """,
                records
            )
            conn.commit()
            cur.close()
        finally:
            conn.close()
        return len(records)

    def list_assignments(self, course_id: str) -> List[Dict[str, Any]]:
        """Return the stored records of a course, ordered by due date."""
        conn = self._get_connection()
        try:
            cur = conn.cursor(cursor_factory=RealDictCursor)
            cur.execute(
                """
                SELECT id, course_id, title, description, due_date, category,
                       source, status, created_at
                FROM assignments
                WHERE course_id = %s
                ORDER BY due_date NULLS LAST, id
                """,
                (course_id,)
            )
            rows = cur.fetchall()
            cur.close()
        finally:
            conn.close()
        return [row_to_dict(dict(row)) for row in rows]
