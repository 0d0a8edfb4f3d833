"""DTOs for Feed app."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List
from uuid import UUID


@dataclass(frozen=True)
class CommentDTO:
    id: UUID
    post_id: UUID
    user_id: UUID
    author: str
    text: str
    created_at: datetime


@dataclass(frozen=True)
class PostDTO:
    """
    A post as seen by one viewer.
    ``liked`` and ``can_delete`` are relative to that viewer.
    """
    id: UUID
    user_id: UUID
    author: str
    title: str
    content: str
    category: str
    image: str
    created_at: datetime
    likes_count: int = 0
    liked: bool = False
    can_delete: bool = False
    liked_by: List[str] = field(default_factory=list)
    comments: List[CommentDTO] = field(default_factory=list)


@dataclass(frozen=True)
class LikeResultDTO:
    liked: bool
    likes_count: int
