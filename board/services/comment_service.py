"""
Comment service: validation, ownership gate and parent-post assembly for
the PostComment entity.

Every comment leaving this service is a ``PostCommentWithPost``: the stored
comment fields plus the parent post, fetched at read time by ``post_id``.
The comment row itself never stores the post.
"""
import logging

from board.errors import NotFoundError
from board.repositories import PostCommentRepository, PostRepository
from board.schemas import (
    PostCommentCreate,
    PostCommentDelete,
    PostCommentRecord,
    PostCommentUpdate,
    PostCommentWithPost,
    PostRecord,
)
from board.security import PasswordHasher
from board.services.ownership import verify_ownership
from board.services.validation import reject_blank, require_fields

logger = logging.getLogger(__name__)

ENTITY = "comment"


def attach_post(comment: PostCommentRecord, post: PostRecord) -> PostCommentWithPost:
    """Join *comment* with its parent *post*."""
    return PostCommentWithPost(**comment.model_dump(), post=post)


class PostCommentService:
    def __init__(
        self,
        comments: PostCommentRepository,
        posts: PostRepository,
        hasher: PasswordHasher,
    ) -> None:
        self.comments = comments
        self.posts = posts
        self.hasher = hasher

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def _get_post(self, post_id: int) -> PostRecord:
        post = await self.posts.find_one(post_id)
        if post is None:
            raise NotFoundError("post", post_id)
        return post

    async def _get_comment(self, comment_id: int) -> PostCommentRecord:
        comment = await self.comments.find_one(comment_id)
        if comment is None:
            raise NotFoundError(ENTITY, comment_id)
        return comment

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def create_comment(self, data: PostCommentCreate) -> PostCommentWithPost:
        """
        Validate *data*, make sure the parent post exists, hash the password
        and persist the comment.
        """
        require_fields(data, "content", "author_id", "password")

        post = await self._get_post(data.post_id)
        hashed = await self.hasher.hash(data.password)
        comment = await self.comments.create(
            content=data.content,
            author_id=data.author_id,
            password=hashed,
            post_id=post.id,
        )
        logger.info("Created comment %s on post %s by %s", comment.id, post.id, comment.author_id)
        return attach_post(comment, post)

    async def list_by_post(self, post_id: int) -> list[PostCommentWithPost]:
        """
        Return every comment on *post_id*, each joined with the same post.

        Raises ``NotFoundError`` for an unknown post rather than returning
        an empty list.
        """
        post = await self._get_post(post_id)
        comments = await self.comments.find_by_post_id(post_id)
        return [attach_post(c, post) for c in comments]

    async def update_comment(self, comment_id: int, data: PostCommentUpdate) -> PostCommentWithPost:
        reject_blank(data, "content")

        existing = await self._get_comment(comment_id)
        await verify_ownership(self.hasher, ENTITY, existing, data.author_id, data.password)

        changes = {"content": data.content} if "content" in data.model_fields_set else {}
        updated = await self.comments.update(comment_id, changes)
        if updated is None:
            raise NotFoundError(ENTITY, comment_id)

        logger.info("Updated comment %s", comment_id)
        return attach_post(updated, await self._get_post(updated.post_id))

    async def delete_comment(self, comment_id: int, data: PostCommentDelete) -> PostCommentWithPost:
        existing = await self._get_comment(comment_id)
        await verify_ownership(self.hasher, ENTITY, existing, data.author_id, data.password)

        deleted = await self.comments.delete(comment_id)
        if deleted is None:
            raise NotFoundError(ENTITY, comment_id)

        logger.info("Deleted comment %s", comment_id)
        return attach_post(deleted, await self._get_post(deleted.post_id))
