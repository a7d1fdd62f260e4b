"""
Application layer - Use cases and orchestration for the case-lifecycle engine.

This layer contains:
- Services implementing each lifecycle operation
- Port definitions (abstract interfaces for infrastructure)

IMPORT RULES:
- CAN import from: domain, config
- CAN import from: infrastructure.observability (logging, correlation)
- CANNOT import from: other infrastructure, api, bootstrap
"""
