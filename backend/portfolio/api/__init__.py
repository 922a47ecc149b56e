"""API Layer — route groups, dependencies and error handlers.

Invariants:
    - Route groups assembled explicitly in main.py (no auto-discovery)
    - Protected routes always sit behind the session gate dependency
"""
