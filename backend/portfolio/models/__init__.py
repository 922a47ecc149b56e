"""ORM Models — one table per document collection."""
