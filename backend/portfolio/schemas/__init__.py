"""Schemas — Pydantic models for every payload crossing the HTTP boundary."""
