"""BlogPost ORM — the blog_post document collection.

Invariants:
    - key is the opaque suffix of the record id; the collection prefix is never stored
    - title and content are non-nullable text
    - created_at set server-side at persistence time
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.db.base import Base


class BlogPost(Base):
    """A published blog post ("view")."""
    __tablename__ = "blog_post"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
