"""Route Modules — one file per concern.

Invariants:
    - Each module defines its own APIRouter(s); none of them applies the session gate itself
    - Routes never contain business logic (delegate to services)
    - Gating is applied per route group in api/route_groups.py
"""
