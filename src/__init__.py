"""Caster Insights Backend - broadcast analytics API.

This package provides a hexagonal architecture wrapper around the
``caster`` analytics engine.

Layers:
- application: Use cases and port interfaces
- infrastructure: Adapters for external services
- api: REST endpoints
"""

__version__ = "1.0.0"
