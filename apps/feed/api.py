"""
API Router for Feed app.
Reading the feed is public; an optional bearer token personalises it.
"""
from typing import List, Optional
from uuid import UUID
from ninja import Router
from django.http import HttpRequest

from apps.identity.api import get_current_user, require_auth
from apps.identity.jwt_auth import JWTAuth
from apps.identity.dtos import MessageOut
from .schemas import PostIn, CommentIn, PostOut, CommentOut, LikeOut
from . import services

router = Router(tags=["Posts"], auth=JWTAuth())


@router.get("", response=List[PostOut], auth=None)
def list_posts(request: HttpRequest, category: Optional[str] = None):
    """
    List the newest posts.
    With a valid token, liked and can_delete reflect the caller.
    """
    viewer = get_current_user(request)
    return services.list_feed(viewer_id=viewer.id if viewer else None, category=category)


@router.post("", response=PostOut)
def create_post(request: HttpRequest, payload: PostIn):
    user = require_auth(request)
    return services.create_post(
        user.id,
        payload.content,
        title=payload.title,
        category=payload.category,
        image=payload.image,
    )


@router.delete("/{post_id}", response=MessageOut)
def delete_post(request: HttpRequest, post_id: UUID):
    """Delete a post. Only the owner may delete it."""
    user = require_auth(request)
    services.delete_post(post_id, user.id)
    return {"message": "Post deleted."}


@router.patch("/{post_id}/like", response=LikeOut)
def toggle_like(request: HttpRequest, post_id: UUID):
    user = require_auth(request)
    return services.toggle_like(post_id, user.id)


@router.post("/{post_id}/comments", response=CommentOut)
def add_comment(request: HttpRequest, post_id: UUID, payload: CommentIn):
    user = require_auth(request)
    return services.add_comment(post_id, user.id, payload.text)
