"""
Persistence gateway for posts and comments.

Each repository wraps the request's ``AsyncSession`` and converts ORM rows
into frozen records before returning them, so nothing above this module ever
holds a live ORM instance.

Repositories flush but do not commit; the transaction boundary is owned by
the ``get_db`` dependency. Storage exceptions are not caught here.
"""
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from board.models import Post, PostComment
from board.schemas import PostCommentRecord, PostRecord


class PostRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _load(self, post_id: int) -> Post | None:
        result = await self.db.execute(select(Post).where(Post.id == post_id))
        return result.scalar_one_or_none()

    async def find_all(self) -> list[PostRecord]:
        result = await self.db.execute(select(Post).order_by(Post.id))
        return [PostRecord.model_validate(p) for p in result.scalars().all()]

    async def find_one(self, post_id: int) -> PostRecord | None:
        post = await self._load(post_id)
        return PostRecord.model_validate(post) if post is not None else None

    async def create(
        self,
        *,
        title: str,
        content: str | None,
        author_id: str,
        password: str,
    ) -> PostRecord:
        post = Post(title=title, content=content, author_id=author_id, password=password)
        self.db.add(post)
        await self.db.flush()
        # Pull the server-generated timestamps.
        await self.db.refresh(post)
        return PostRecord.model_validate(post)

    async def update(self, post_id: int, changes: dict[str, Any]) -> PostRecord | None:
        post = await self._load(post_id)
        if post is None:
            return None

        for field, value in changes.items():
            setattr(post, field, value)

        await self.db.flush()
        await self.db.refresh(post)
        return PostRecord.model_validate(post)

    async def delete(self, post_id: int) -> PostRecord | None:
        post = await self._load(post_id)
        if post is None:
            return None

        snapshot = PostRecord.model_validate(post)
        await self.db.delete(post)
        await self.db.flush()
        return snapshot


class PostCommentRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _load(self, comment_id: int) -> PostComment | None:
        result = await self.db.execute(select(PostComment).where(PostComment.id == comment_id))
        return result.scalar_one_or_none()

    async def find_by_post_id(self, post_id: int) -> list[PostCommentRecord]:
        q = select(PostComment).where(PostComment.post_id == post_id).order_by(PostComment.id)
        result = await self.db.execute(q)
        return [PostCommentRecord.model_validate(c) for c in result.scalars().all()]

    async def find_one(self, comment_id: int) -> PostCommentRecord | None:
        comment = await self._load(comment_id)
        return PostCommentRecord.model_validate(comment) if comment is not None else None

    async def create(
        self,
        *,
        content: str,
        author_id: str,
        password: str,
        post_id: int,
    ) -> PostCommentRecord:
        comment = PostComment(
            content=content,
            author_id=author_id,
            password=password,
            post_id=post_id,
        )
        self.db.add(comment)
        await self.db.flush()
        await self.db.refresh(comment)
        return PostCommentRecord.model_validate(comment)

    async def update(self, comment_id: int, changes: dict[str, Any]) -> PostCommentRecord | None:
        comment = await self._load(comment_id)
        if comment is None:
            return None

        for field, value in changes.items():
            setattr(comment, field, value)

        await self.db.flush()
        await self.db.refresh(comment)
        return PostCommentRecord.model_validate(comment)

    async def delete(self, comment_id: int) -> PostCommentRecord | None:
        comment = await self._load(comment_id)
        if comment is None:
            return None

        snapshot = PostCommentRecord.model_validate(comment)
        await self.db.delete(comment)
        await self.db.flush()
        return snapshot
