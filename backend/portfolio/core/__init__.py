"""Core — pure domain logic: record ids, error hierarchy, session authentication.

Invariants:
    - Core never imports from infrastructure, api or services
"""
