# models.py

import sqlalchemy as sa
from sqlalchemy.orm import declarative_base

Base = declarative_base()

class Category(Base):
    __tablename__ = "categories"

    title = sa.Column(sa.String, primary_key=True)

    def __repr__(self):
        return f"<Category(title='{self.title}')>"


class Post(Base):
    __tablename__ = "posts"

    id = sa.Column(sa.Integer, primary_key=True, index=True)
    title = sa.Column(sa.String, nullable=False, default="")
    content = sa.Column(sa.Text)
    # Posts are written by the post-management service; this layer only reads them
    category = sa.Column(
        sa.String,
        sa.ForeignKey("categories.title", onupdate="CASCADE", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    is_public = sa.Column(sa.Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<Post(id={self.id}, category='{self.category}', is_public={self.is_public})>"


class Analytic(Base):
    __tablename__ = "analytics"

    id = sa.Column(sa.Integer, primary_key=True, autoincrement=True)
    # Unique: at most one analytic per post, enforced by the database
    post_id = sa.Column(
        sa.Integer,
        sa.ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    views = sa.Column(sa.Integer, nullable=False, default=0)
    likes = sa.Column(sa.Integer, nullable=False, default=0)
    comments = sa.Column(sa.Integer, nullable=False, default=0)
    shares = sa.Column(sa.Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<Analytic(id={self.id}, post_id={self.post_id})>"
