"""Portfolio Site Package — public content browser plus single-admin publishing.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
