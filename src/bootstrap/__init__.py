"""Composition root.

Picks the case store backend from configuration and owns the service
singletons the API depends on.
"""
