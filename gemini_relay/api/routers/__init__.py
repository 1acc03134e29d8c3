"""
API route handlers: generation endpoints and health probes.
"""
