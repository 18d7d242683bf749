"""
Boundary layer for external system integrations.

Handles all interactions with external systems (vector index, model providers).
Provides adapters and clients for infrastructure dependencies.
"""
