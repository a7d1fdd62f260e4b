"""Actor resolution and capability checks for the API."""

from src.api.auth.actor_auth import get_actor, require_capability

__all__ = ["get_actor", "require_capability"]
