"""
Case-lifecycle engine for an administrative appeals board.

Protocols become numbered resources, resources are adjudicated in
sessions, decisions keep an append-only publication log, and notification
lists track delivery attempts until receipt is confirmed.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
