"""
FastAPI application layer for gemini-relay.

Exposes the four generation endpoints plus health probes and maps every
relay error onto a ``{"error": ...}`` JSON body.
"""
