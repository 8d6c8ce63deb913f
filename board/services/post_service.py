"""
Post service: validation and the ownership gate for the Post entity.

Design notes
------------
- Mutations run strictly in the order: existence check, author match,
  password match, write. Every rejection happens before the repository is
  asked to write anything, so a failed mutation leaves storage untouched.
- Only ``title`` and ``content`` can be changed after creation; the author
  identifier and password hash are fixed.
- The service flushes through the repository but never commits; the
  transaction boundary is owned by the ``get_db`` dependency.
"""
import logging

from board.errors import NotFoundError
from board.repositories import PostRepository
from board.schemas import PostCreate, PostDelete, PostRecord, PostUpdate
from board.security import PasswordHasher
from board.services.ownership import verify_ownership
from board.services.validation import reject_blank, require_fields

logger = logging.getLogger(__name__)

ENTITY = "post"

_MUTABLE_FIELDS = ("title", "content")


class PostService:
    def __init__(self, posts: PostRepository, hasher: PasswordHasher) -> None:
        self.posts = posts
        self.hasher = hasher

    async def list_posts(self) -> list[PostRecord]:
        return await self.posts.find_all()

    async def create_post(self, data: PostCreate) -> PostRecord:
        """
        Validate *data*, hash its password and persist a new post.

        Raises ``ValidationError`` naming the first missing field.
        """
        require_fields(data, "title", "password", "author_id")

        hashed = await self.hasher.hash(data.password)
        post = await self.posts.create(
            title=data.title,
            content=data.content,
            author_id=data.author_id,
            password=hashed,
        )
        logger.info("Created post %s by %s", post.id, post.author_id)
        return post

    async def get_post(self, post_id: int) -> PostRecord:
        post = await self.posts.find_one(post_id)
        if post is None:
            raise NotFoundError(ENTITY, post_id)
        return post

    async def update_post(self, post_id: int, data: PostUpdate) -> PostRecord:
        """
        Apply a partial update to *post_id* after the ownership gate.

        Only fields present in *data* are written.
        """
        reject_blank(data, "title")

        existing = await self.get_post(post_id)
        await verify_ownership(self.hasher, ENTITY, existing, data.author_id, data.password)

        changes = {
            field: getattr(data, field)
            for field in _MUTABLE_FIELDS
            if field in data.model_fields_set
        }
        updated = await self.posts.update(post_id, changes)
        if updated is None:
            # Deleted between the check and the write.
            raise NotFoundError(ENTITY, post_id)

        logger.info("Updated post %s (%s)", post_id, ", ".join(changes) or "no changes")
        return updated

    async def delete_post(self, post_id: int, data: PostDelete) -> PostRecord:
        """Delete *post_id* after the ownership gate and return its last state."""
        existing = await self.get_post(post_id)
        await verify_ownership(self.hasher, ENTITY, existing, data.author_id, data.password)

        deleted = await self.posts.delete(post_id)
        if deleted is None:
            raise NotFoundError(ENTITY, post_id)

        logger.info("Deleted post %s", post_id)
        return deleted
