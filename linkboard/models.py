import sqlite3 # foreign key pragma for local databases

from flask_sqlalchemy import SQLAlchemy # database operations
from sqlalchemy import event
from sqlalchemy.engine import Engine

# Create SQLAlchemy instance
db = SQLAlchemy()


# SQLite ignores foreign keys unless every connection switches them on
@event.listens_for(Engine, "connect")
def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Define Data Model (Data Layer Interface)
# Each post has an ID, title, optional link, content and creation time set by the database
class Post(db.Model):
    __tablename__ = "posts"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    link = db.Column(db.String(255), nullable=False, default="", server_default="")
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    def __repr__(self):
        return f"<Post {self.id} {self.title!r}>"


# Comments belong to exactly one post; deleting posts is not supported so there is no cascade
class Comment(db.Model):
    __tablename__ = "comments"

    id = db.Column(db.Integer, primary_key=True)
    content = db.Column(db.Text, nullable=False)
    post_id = db.Column(db.Integer, db.ForeignKey("posts.id"), nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    def __repr__(self):
        return f"<Comment {self.id} on post {self.post_id}>"
