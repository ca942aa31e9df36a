"""Post and comment data access.

Repositories take a SQLAlchemy session in their constructor and hand back
immutable records, so nothing outside this module touches live ORM rows.
"""
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from urllib.parse import urlsplit

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from linkboard.errors import PostNotFound, StoreError
from linkboard.models import Post, Comment


def link_host(link: str) -> str:
    """Network authority of ``link`` (host and port, no user info), or ''."""
    if not link:
        return ""
    try:
        parts = urlsplit(link)
        parts.port  # raises ValueError for a non-numeric or out of range port
    except ValueError:
        return ""
    if any(ch.isspace() for ch in parts.netloc):
        return ""
    return parts.netloc.rpartition("@")[2]


@dataclass(frozen=True)
class PostRecord:
    id: int
    title: str
    link: str
    content: str
    created_at: Optional[datetime]
    comment_count: int = 0

    @property
    def host(self):
        return link_host(self.link)

    @classmethod
    def from_model(cls, post, comment_count=0):
        return cls(
            id=post.id,
            title=post.title,
            link=post.link or "",
            content=post.content,
            created_at=post.created_at,
            comment_count=comment_count,
        )


@dataclass(frozen=True)
class CommentRecord:
    id: int
    content: str
    post_id: int
    created_at: Optional[datetime]

    @classmethod
    def from_model(cls, comment):
        return cls(
            id=comment.id,
            content=comment.content,
            post_id=comment.post_id,
            created_at=comment.created_at,
        )


class _Repository:
    def __init__(self, session):
        self.session = session

    @contextmanager
    def _store_errors(self):
        """Roll back and re-raise any database failure as StoreError."""
        try:
            yield
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(str(getattr(e, "orig", None) or e)) from e


class PostRepository(_Repository):

    def _comment_counts(self):
        return (
            self.session.query(
                Comment.post_id.label("post_id"),
                func.count(Comment.id).label("comment_count"),
            )
            .group_by(Comment.post_id)
            .subquery()
        )

    def list_posts(self) -> List[PostRecord]:
        """All posts, newest first, with their comment counts."""
        counts = self._comment_counts()
        with self._store_errors():
            rows = (
                self.session.query(Post, func.coalesce(counts.c.comment_count, 0))
                .outerjoin(counts, counts.c.post_id == Post.id)
                .order_by(Post.created_at.desc(), Post.id.desc())
                .all()
            )
        return [PostRecord.from_model(post, count) for post, count in rows]

    def get_post(self, post_id: int) -> PostRecord:
        counts = self._comment_counts()
        with self._store_errors():
            row = (
                self.session.query(Post, func.coalesce(counts.c.comment_count, 0))
                .outerjoin(counts, counts.c.post_id == Post.id)
                .filter(Post.id == post_id)
                .first()
            )
        if row is None:
            raise PostNotFound()
        post, count = row
        return PostRecord.from_model(post, count)

    def create_post(self, title: str, link: str, content: str) -> int:
        """Insert a post as given; the database assigns id and created_at."""
        post = Post(title=title, link=link, content=content)
        with self._store_errors():
            self.session.add(post)
            self.session.commit()
            return post.id


class CommentRepository(_Repository):

    def list_comments(self, post_id: int) -> List[CommentRecord]:
        with self._store_errors():
            comments = (
                self.session.query(Comment)
                .filter(Comment.post_id == post_id)
                .order_by(Comment.created_at.desc(), Comment.id.desc())
                .all()
            )
        return [CommentRecord.from_model(comment) for comment in comments]

    def create_comment(self, post_id: int, content: str) -> int:
        # no existence check; the foreign key rejects comments on missing posts
        comment = Comment(post_id=post_id, content=content)
        with self._store_errors():
            self.session.add(comment)
            self.session.commit()
            return comment.id
