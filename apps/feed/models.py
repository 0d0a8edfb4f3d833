import uuid
from django.conf import settings
from django.db import models

MAX_TITLE_LENGTH = 200
MAX_CONTENT_LENGTH = 1500
MAX_COMMENT_LENGTH = 400
DEFAULT_CATEGORY = 'General'


class Post(models.Model):
    """
    A community post. Users can like it and comment on it; only the owner
    can delete it.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='posts',
    )

    title = models.CharField(max_length=MAX_TITLE_LENGTH, blank=True)
    content = models.TextField()
    category = models.CharField(max_length=50, default=DEFAULT_CATEGORY, db_index=True)
    image = models.TextField(blank=True)

    likes = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name='liked_posts',
        blank=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.title or self.content[:50]


class Comment(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name='comments')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='comments',
    )
    text = models.CharField(max_length=MAX_COMMENT_LENGTH)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at']

    def __str__(self):
        return f"{self.user}: {self.text[:50]}"
