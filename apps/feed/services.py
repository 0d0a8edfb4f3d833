"""
Services for Feed app.
Posts, likes and comments of the community feed.
"""
import logging
from typing import List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Prefetch

from apps.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from apps.core.validators import clean_image_reference, clean_text
from .models import (
    Post, Comment,
    MAX_TITLE_LENGTH, MAX_CONTENT_LENGTH, MAX_COMMENT_LENGTH, DEFAULT_CATEGORY,
)
from .dtos import PostDTO, CommentDTO, LikeResultDTO

logger = logging.getLogger(__name__)

FEED_LIMIT = 100


def to_comment_dto(comment: Comment) -> CommentDTO:
    return CommentDTO(
        id=comment.id,
        post_id=comment.post_id,
        user_id=comment.user_id,
        author=comment.user.display_name,
        text=comment.text,
        created_at=comment.created_at,
    )


def to_post_dto(post: Post, viewer_id: Optional[UUID] = None) -> PostDTO:
    likers = list(post.likes.all())
    return PostDTO(
        id=post.id,
        user_id=post.user_id,
        author=post.user.display_name,
        title=post.title,
        content=post.content,
        category=post.category,
        image=post.image,
        created_at=post.created_at,
        likes_count=len(likers),
        liked=viewer_id is not None and any(u.id == viewer_id for u in likers),
        can_delete=viewer_id is not None and post.user_id == viewer_id,
        liked_by=[u.display_name for u in likers],
        comments=[to_comment_dto(c) for c in post.comments.all()],
    )


def _get_post(post_id: UUID, for_update: bool = False) -> Post:
    queryset = Post.objects.select_for_update() if for_update else Post.objects.all()
    try:
        return queryset.get(id=post_id)
    except Post.DoesNotExist:
        raise NotFoundError("Post not found.")


# =============================================================================
# Posts
# =============================================================================

def create_post(
    user_id: UUID,
    content: Optional[str],
    title: Optional[str] = None,
    category: Optional[str] = None,
    image: Optional[str] = None,
) -> PostDTO:
    content = clean_text(
        content,
        max_length=MAX_CONTENT_LENGTH,
        required_message="Post content is required",
        too_long_message=f"Post content must be at most {MAX_CONTENT_LENGTH} characters",
    )

    title = (title or "").strip()
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(f"Title must be at most {MAX_TITLE_LENGTH} characters")

    post = Post.objects.create(
        user_id=user_id,
        title=title,
        content=content,
        category=(category or "").strip() or DEFAULT_CATEGORY,
        image=clean_image_reference(image),
    )
    logger.info(f"User {user_id} created post {post.id}")

    return to_post_dto(_get_post(post.id), viewer_id=user_id)


def delete_post(post_id: UUID, user_id: UUID) -> None:
    """Hard delete a post. Only its owner may do this."""
    post = _get_post(post_id)
    if post.user_id != user_id:
        raise ForbiddenError("Not authorized.")

    post.delete()
    logger.info(f"User {user_id} deleted post {post_id}")


def list_feed(viewer_id: Optional[UUID] = None, category: Optional[str] = None) -> List[PostDTO]:
    """
    The newest posts, with likes and comments resolved for the viewer.
    An anonymous viewer never sees liked or can_delete set.
    """
    queryset = Post.objects.select_related('user').prefetch_related(
        'likes',
        Prefetch('comments', queryset=Comment.objects.select_related('user').order_by('created_at')),
    )
    if category and category != 'All':
        queryset = queryset.filter(category=category)

    return [to_post_dto(p, viewer_id) for p in queryset.order_by('-created_at')[:FEED_LIMIT]]


# =============================================================================
# Likes & Comments
# =============================================================================

@transaction.atomic
def toggle_like(post_id: UUID, user_id: UUID) -> LikeResultDTO:
    """Like the post, or remove the like if the user already liked it."""
    post = _get_post(post_id, for_update=True)

    if post.likes.filter(id=user_id).exists():
        post.likes.remove(user_id)
        liked = False
    else:
        post.likes.add(user_id)
        liked = True

    return LikeResultDTO(liked=liked, likes_count=post.likes.count())


def add_comment(post_id: UUID, user_id: UUID, text: Optional[str]) -> CommentDTO:
    text = clean_text(
        text,
        max_length=MAX_COMMENT_LENGTH,
        required_message="Comment text is required",
        too_long_message=f"Comment must be at most {MAX_COMMENT_LENGTH} characters",
    )
    post = _get_post(post_id)

    comment = Comment.objects.create(post=post, user_id=user_id, text=text)
    comment = Comment.objects.select_related('user').get(id=comment.id)

    return to_comment_dto(comment)
