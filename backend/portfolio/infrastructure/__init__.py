"""Infrastructure Layer — database pool, record store and logging setup.

Invariants:
    - Infrastructure never imports from api/ or services/
    - Every SQLAlchemy failure is mapped to StorageError before leaving this layer
"""
