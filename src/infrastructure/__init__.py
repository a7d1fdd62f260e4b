"""
Infrastructure layer - Adapters for the case-lifecycle engine.

This layer contains:
- PostgreSQL case store (SQLAlchemy async + asyncpg)
- In-memory case store stubs for development and testing
- Role-based capability checker
- Structured logging and request correlation

IMPORT RULES:
- CAN import from: domain, application
- Implements ports defined in application layer
"""
