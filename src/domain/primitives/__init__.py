"""Domain primitives.

- AtomicOperationContext: all-or-nothing execution with LIFO rollback
  handlers; the in-memory store builds its transactions on it.
"""

from src.domain.primitives.ensure_atomicity import AtomicOperationContext

__all__: list[str] = ["AtomicOperationContext"]
