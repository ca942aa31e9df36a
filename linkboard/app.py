from flask import Blueprint, Flask, jsonify, redirect, request, url_for # web framework
from werkzeug.exceptions import HTTPException

from linkboard.config import Config
from linkboard.errors import BoardError
from linkboard.logger import get_logger
from linkboard.models import db # shared SQLAlchemy handle
from linkboard.repositories import CommentRepository, PostRepository
from linkboard.schema import init_database
from linkboard.views import IndexView, PostDetailView, render

logger = get_logger("app")

board = Blueprint("board", __name__)


# Displays all posts, newest first (READ operation)
@board.route("/", methods=['GET'])
def index():
    posts = PostRepository(db.session).list_posts()
    logger.debug(f"✓ Retrieved {len(posts)} posts")
    return render(IndexView(posts=posts))


# Creates a post from the submitted form, then goes back to the list
@board.route("/new", methods=['POST'])
def new_post():
    title = request.form.get('title', '')
    content = request.form.get('content', '')
    link = request.form.get('link', '')
    post_id = PostRepository(db.session).create_post(title, link, content)
    logger.debug(f"✓ Created post {post_id}: {title}")
    return redirect(url_for('board.index'))


# Shows a single post with its comments
@board.route("/post/<int:post_id>", methods=['GET'])
def post_detail(post_id):
    post = PostRepository(db.session).get_post(post_id)
    comments = CommentRepository(db.session).list_comments(post_id)
    return render(PostDetailView(post=post, comments=comments))


# Adds a comment; a missing post is rejected by the database, not checked here
@board.route("/post/<int:post_id>/comment", methods=['POST'])
def new_comment(post_id):
    content = request.form.get('content', '')
    CommentRepository(db.session).create_comment(post_id, content)
    return redirect(url_for('board.post_detail', post_id=post_id))


def register_error_handlers(app):

    @app.errorhandler(BoardError)
    def handle_board_error(e):
        if e.status_code >= 500:
            logger.error(f"✗ {e.kind.value} error on {request.path}: {e.message}")
        return jsonify(error=e.message), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        # routing redirects are HTTPExceptions too
        if e.code is None or e.code < 400:
            return e
        return jsonify(error=e.name), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.exception(f"✗ Unexpected error on {request.path}")
        return jsonify(error=str(e)), 500


def create_app(test_config=None):
    # Flask(__name__) makes the templates/ and static/ folders next to this file available
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    # Initialize db with app
    db.init_app(app)

    app.register_blueprint(board)
    register_error_handlers(app)
    return app


def main():
    app = create_app()
    if init_database(app):
        port = app.config['PORT']
        logger.info(f"Server started on port {port}")
        app.run(host=app.config['HOST'], port=port)


# Run the app after making sure the tables exist
if __name__ == '__main__':
    main()
