"""API Schemas for Feed app."""
from typing import List, Optional
from uuid import UUID
from datetime import datetime
from ninja import Schema


class PostIn(Schema):
    content: Optional[str] = None
    title: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None


class CommentIn(Schema):
    text: Optional[str] = None


class CommentOut(Schema):
    id: UUID
    post_id: UUID
    user_id: UUID
    author: str
    text: str
    created_at: datetime


class PostOut(Schema):
    id: UUID
    user_id: UUID
    author: str
    title: str
    content: str
    category: str
    image: str
    created_at: datetime
    likes_count: int
    liked: bool
    can_delete: bool
    liked_by: List[str]
    comments: List[CommentOut]


class LikeOut(Schema):
    liked: bool
    likes_count: int
