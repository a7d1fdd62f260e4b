"""Infrastructure adapters.

- auth: role-based capability checker
- persistence: PostgreSQL case store (SQLAlchemy async)
"""
