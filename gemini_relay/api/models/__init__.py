"""
Pydantic models for API request/response schemas.
"""
