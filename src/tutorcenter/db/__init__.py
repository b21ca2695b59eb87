"""Database module for relational persistence.

Provides:
- Engine and ORM session management
- Schema initialization
- Declarative models (users, students, tutors, sessions, reports, settings)
- Repository functions used by the web layer
"""

from tutorcenter.db.database import get_db, get_session, init_db, list_table_names

__all__ = ["get_db", "get_session", "init_db", "list_table_names"]
