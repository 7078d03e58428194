"""
Example 04: Persistence

This example demonstrates validating and saving a form inside a SQLite
transaction, with automatic rollback when a save fails.
"""

from form_map import build, configure_logging, mapper
from pydantic import BaseModel, Field
from typing import ClassVar, Any
import logging
import sqlite3


class Account(BaseModel):
    """Account record persisted to SQLite"""
    db: ClassVar[Any] = None

    id: int | None = None
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+$")
    plan: str = "free"

    def save(self):
        try:
            cursor = self.db.execute(
                "INSERT INTO accounts (email, plan) VALUES (?, ?)", (self.email, self.plan)
            )
        except sqlite3.IntegrityError:
            return False
        self.id = cursor.lastrowid
        return True


def main():
    configure_logging(logging.INFO)

    conn = sqlite3.connect(":memory:")
    conn.execute("""
        CREATE TABLE accounts (
            id INTEGER PRIMARY KEY,
            email TEXT NOT NULL UNIQUE,
            plan TEXT NOT NULL
        )
    """)
    Account.db = conn

    plan = mapper("AccountMapper", Account).map_fields("email", "plan").build()

    print("=== Valid form ===\n")
    m = build(plan)
    applied = m.apply({"email": "dave@example.com", "plan": "pro"}, transaction=lambda: conn)
    print(f"  applied: {applied}")
    print(f"  id: {m.id}")

    print("\n=== Invalid form ===\n")
    m = build(plan)
    print(f"  applied: {m.apply({'email': 'not-an-email'}, transaction=lambda: conn)}")
    print(f"  errors: {m.errors.to_dict()}")

    print("\n=== Failing save (duplicate email) ===\n")
    m = build(plan)
    print(f"  applied: {m.apply({'email': 'dave@example.com'}, transaction=lambda: conn)}")

    count = conn.execute("SELECT COUNT(*) FROM accounts").fetchone()[0]
    print(f"\n  accounts stored: {count}")
    conn.close()


if __name__ == "__main__":
    main()
