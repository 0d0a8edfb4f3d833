"""
Unit tests for feed services.
"""
from uuid import uuid4
from django.test import TestCase
from django.contrib.auth import get_user_model

from apps.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from apps.feed.models import Post, Comment
from apps.feed import services


User = get_user_model()


class FeedTestMixin:
    def setUp(self):
        self.alice = User.objects.create_user(
            username='alice', name='Alice', email='alice@example.com', password='secret1'
        )
        self.bob = User.objects.create_user(
            username='bob', email='bob@example.com', password='secret1'
        )


class CreatePostTest(FeedTestMixin, TestCase):
    def test_create_post_trims_and_defaults_category(self):
        post = services.create_post(self.alice.id, '  Looking for a plumber  ', title=' Help ')

        self.assertEqual(post.content, 'Looking for a plumber')
        self.assertEqual(post.title, 'Help')
        self.assertEqual(post.category, 'General')
        self.assertEqual(post.author, 'Alice')
        self.assertTrue(post.can_delete)
        self.assertEqual(post.likes_count, 0)

    def test_empty_content_rejected(self):
        for content in ('', '   ', None):
            with self.assertRaises(ValidationError) as ctx:
                services.create_post(self.alice.id, content)
            self.assertEqual(ctx.exception.message, "Post content is required")
        self.assertFalse(Post.objects.exists())

    def test_content_length_limit(self):
        services.create_post(self.alice.id, 'x' * 1500)
        with self.assertRaises(ValidationError):
            services.create_post(self.alice.id, 'x' * 1501)

    def test_title_length_limit(self):
        with self.assertRaises(ValidationError):
            services.create_post(self.alice.id, 'content', title='t' * 201)

    def test_image_validation(self):
        post = services.create_post(self.alice.id, 'with image', image='https://example.com/a.png')
        self.assertEqual(post.image, 'https://example.com/a.png')

        post = services.create_post(self.alice.id, 'inline', image='data:image/png;base64,iVBORw0KGgo=')
        self.assertTrue(post.image.startswith('data:image/png'))

        with self.assertRaises(ValidationError) as ctx:
            services.create_post(self.alice.id, 'bad image', image='ftp://example.com/a.png')
        self.assertEqual(ctx.exception.message, "Image must be a valid image URL or uploaded image data")


class LikeTest(FeedTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.post = services.create_post(self.alice.id, 'hello')

    def test_toggle_like_twice_restores_state(self):
        result = services.toggle_like(self.post.id, self.bob.id)
        self.assertTrue(result.liked)
        self.assertEqual(result.likes_count, 1)

        result = services.toggle_like(self.post.id, self.bob.id)
        self.assertFalse(result.liked)
        self.assertEqual(result.likes_count, 0)

    def test_like_unknown_post(self):
        with self.assertRaises(NotFoundError):
            services.toggle_like(uuid4(), self.bob.id)


class CommentTest(FeedTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.post = services.create_post(self.alice.id, 'hello')

    def test_add_comment(self):
        comment = services.add_comment(self.post.id, self.bob.id, '  Nice!  ')
        self.assertEqual(comment.text, 'Nice!')
        self.assertEqual(comment.author, 'bob')

    def test_empty_comment_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            services.add_comment(self.post.id, self.bob.id, '   ')
        self.assertEqual(ctx.exception.message, "Comment text is required")

    def test_comment_length_limit(self):
        services.add_comment(self.post.id, self.bob.id, 'c' * 400)
        with self.assertRaises(ValidationError):
            services.add_comment(self.post.id, self.bob.id, 'c' * 401)

    def test_comment_on_unknown_post(self):
        with self.assertRaises(NotFoundError):
            services.add_comment(uuid4(), self.bob.id, 'hi')


class DeletePostTest(FeedTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.post = services.create_post(self.alice.id, 'hello')
        services.add_comment(self.post.id, self.bob.id, 'hi')

    def test_owner_can_delete(self):
        services.delete_post(self.post.id, self.alice.id)
        self.assertFalse(Post.objects.exists())
        self.assertFalse(Comment.objects.exists())

    def test_non_owner_cannot_delete(self):
        with self.assertRaises(ForbiddenError) as ctx:
            services.delete_post(self.post.id, self.bob.id)
        self.assertEqual(ctx.exception.message, "Not authorized.")
        self.assertTrue(Post.objects.filter(id=self.post.id).exists())

    def test_delete_unknown_post(self):
        with self.assertRaises(NotFoundError) as ctx:
            services.delete_post(uuid4(), self.alice.id)
        self.assertEqual(ctx.exception.message, "Post not found.")


class ListFeedTest(FeedTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.post = services.create_post(self.alice.id, 'hello', category='Jobs')
        services.toggle_like(self.post.id, self.bob.id)
        services.add_comment(self.post.id, self.bob.id, 'first')
        services.add_comment(self.post.id, self.alice.id, 'second')

    def test_feed_for_viewer(self):
        post = services.list_feed(viewer_id=self.bob.id)[0]

        self.assertTrue(post.liked)
        self.assertFalse(post.can_delete)
        self.assertEqual(post.likes_count, 1)
        self.assertEqual(post.liked_by, ['bob'])
        self.assertEqual([c.text for c in post.comments], ['first', 'second'])
        self.assertEqual(post.comments[1].author, 'Alice')

    def test_feed_for_owner(self):
        post = services.list_feed(viewer_id=self.alice.id)[0]
        self.assertFalse(post.liked)
        self.assertTrue(post.can_delete)

    def test_feed_anonymous(self):
        post = services.list_feed()[0]
        self.assertFalse(post.liked)
        self.assertFalse(post.can_delete)

    def test_feed_category_filter(self):
        services.create_post(self.bob.id, 'other')
        self.assertEqual(len(services.list_feed(category='Jobs')), 1)
        self.assertEqual(len(services.list_feed()), 2)
