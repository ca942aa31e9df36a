import unittest
from datetime import datetime, timedelta

from board_case import BoardTestCase
from linkboard.errors import ErrorKind, PostNotFound, StoreError
from linkboard.models import db, Post, Comment
from linkboard.repositories import CommentRepository, PostRepository, link_host


class TestLinkHost(unittest.TestCase):
    def test_host_of_plain_url(self):
        self.assertEqual(link_host("http://example.com/x"), "example.com")

    def test_host_keeps_port_and_drops_user_info(self):
        self.assertEqual(link_host("https://user:pw@example.com:8443/a?b=c"), "example.com:8443")

    def test_empty_link_has_no_host(self):
        self.assertEqual(link_host(""), "")

    def test_link_without_authority_has_no_host(self):
        self.assertEqual(link_host("example.com/path"), "")

    def test_unparsable_link_has_no_host(self):
        self.assertEqual(link_host("http://[::1"), "")

    def test_bad_port_has_no_host(self):
        self.assertEqual(link_host("http://example.com:80x/"), "")
        self.assertEqual(link_host("http://example.com:99999/"), "")

    def test_whitespace_in_host_has_no_host(self):
        self.assertEqual(link_host("http://a b.com/"), "")


class TestPostRepository(BoardTestCase):
    def setUp(self):
        super().setUp()
        self.posts = PostRepository(db.session)
        self.comments = CommentRepository(db.session)

    def _add_post(self, title, created_at):
        post = Post(title=title, link="", content="body", created_at=created_at)
        db.session.add(post)
        db.session.commit()
        return post.id

    def test_list_posts_empty(self):
        self.assertEqual(self.posts.list_posts(), [])

    def test_list_posts_newest_first(self):
        base = datetime(2024, 1, 1, 12, 0, 0)
        self._add_post("middle", base + timedelta(minutes=5))
        self._add_post("oldest", base)
        self._add_post("newest", base + timedelta(minutes=10))

        titles = [post.title for post in self.posts.list_posts()]
        self.assertEqual(titles, ["newest", "middle", "oldest"])

    def test_same_timestamp_falls_back_to_id(self):
        stamp = datetime(2024, 1, 1, 12, 0, 0)
        first = self._add_post("first", stamp)
        second = self._add_post("second", stamp)

        ids = [post.id for post in self.posts.list_posts()]
        self.assertEqual(ids, [second, first])

    def test_comment_counts(self):
        busy = self.posts.create_post("busy", "", "body")
        quiet = self.posts.create_post("quiet", "", "body")
        for i in range(3):
            self.comments.create_comment(busy, f"comment {i}")

        counts = {post.id: post.comment_count for post in self.posts.list_posts()}
        self.assertEqual(counts, {busy: 3, quiet: 0})

    def test_round_trip(self):
        post_id = self.posts.create_post("T", "http://example.com/x", "C")

        post = self.posts.get_post(post_id)
        self.assertEqual(post.id, post_id)
        self.assertEqual(post.title, "T")
        self.assertEqual(post.link, "http://example.com/x")
        self.assertEqual(post.content, "C")
        self.assertEqual(post.host, "example.com")
        self.assertIsNotNone(post.created_at)
        self.assertEqual(post.comment_count, 0)

    def test_empty_link_and_title_accepted(self):
        post_id = self.posts.create_post("", "", "C")

        post = self.posts.get_post(post_id)
        self.assertEqual(post.title, "")
        self.assertEqual(post.link, "")
        self.assertEqual(post.host, "")

    def test_get_missing_post_is_not_found(self):
        with self.assertRaises(PostNotFound) as ctx:
            self.posts.get_post(404)
        self.assertEqual(ctx.exception.kind, ErrorKind.NOT_FOUND)
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.message, "Post not found")

    def test_store_failure_is_store_error(self):
        db.drop_all()
        with self.assertRaises(StoreError) as ctx:
            self.posts.list_posts()
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertIn("posts", ctx.exception.message)

    def test_get_post_store_failure_is_not_not_found(self):
        db.drop_all()
        with self.assertRaises(StoreError) as ctx:
            self.posts.get_post(1)
        self.assertNotIsInstance(ctx.exception, PostNotFound)
        self.assertEqual(ctx.exception.status_code, 500)


class TestCommentRepository(BoardTestCase):
    def setUp(self):
        super().setUp()
        self.posts = PostRepository(db.session)
        self.comments = CommentRepository(db.session)
        self.post_id = self.posts.create_post("T", "", "C")

    def test_list_comments_empty(self):
        self.assertEqual(self.comments.list_comments(self.post_id), [])

    def test_list_comments_newest_first(self):
        base = datetime(2024, 1, 1, 12, 0, 0)
        for content, offset in [("b", 1), ("a", 0), ("c", 2)]:
            db.session.add(Comment(post_id=self.post_id, content=content,
                                   created_at=base + timedelta(minutes=offset)))
        db.session.commit()

        contents = [c.content for c in self.comments.list_comments(self.post_id)]
        self.assertEqual(contents, ["c", "b", "a"])

    def test_list_comments_only_for_that_post(self):
        other = self.posts.create_post("other", "", "C")
        self.comments.create_comment(self.post_id, "mine")
        self.comments.create_comment(other, "theirs")

        comments = self.comments.list_comments(self.post_id)
        self.assertEqual([c.content for c in comments], ["mine"])
        self.assertEqual(comments[0].post_id, self.post_id)

    def test_comment_on_missing_post_is_rejected(self):
        with self.assertRaises(StoreError):
            self.comments.create_comment(9999, "orphan")

        self.assertEqual(db.session.query(Comment).count(), 0)

    def test_session_usable_after_rejected_comment(self):
        with self.assertRaises(StoreError):
            self.comments.create_comment(9999, "orphan")

        self.comments.create_comment(self.post_id, "fine")
        self.assertEqual(len(self.comments.list_comments(self.post_id)), 1)


if __name__ == "__main__":
    unittest.main()
