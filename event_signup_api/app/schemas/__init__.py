"""Pydantic models exchanged by the API."""
