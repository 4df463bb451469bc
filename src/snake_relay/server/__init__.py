"""Multiplayer relay: room registry, wire protocol and FastAPI transport."""
