from datetime import datetime

import strawberry

from board.schemas import PostCommentWithPost, PostRecord


# The password hash is deliberately absent from both object types.

@strawberry.type(name="Post")
class PostType:
    id: int
    title: str
    content: str | None
    author_id: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: PostRecord) -> "PostType":
        return cls(
            id=record.id,
            title=record.title,
            content=record.content,
            author_id=record.author_id,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


@strawberry.type(name="PostComment")
class PostCommentType:
    id: int
    content: str
    author_id: str
    post_id: int
    post: PostType
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: PostCommentWithPost) -> "PostCommentType":
        return cls(
            id=record.id,
            content=record.content,
            author_id=record.author_id,
            post_id=record.post_id,
            post=PostType.from_record(record.post),
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


def provided(data: object) -> dict:
    """Fields of a Strawberry input that the client actually sent."""
    return {k: v for k, v in vars(data).items() if v is not strawberry.UNSET}
