from typing import Annotated

import strawberry
from strawberry.types import Info

from board.routers.types import PostCommentType, provided
from board.schemas import PostCommentCreate, PostCommentDelete, PostCommentUpdate
from board.services.comment_service import PostCommentService


@strawberry.input
class CreatePostCommentInput:
    content: str
    author_id: str
    password: str
    post_id: int


@strawberry.input
class UpdatePostCommentInput:
    author_id: str
    password: str
    content: str | None = strawberry.UNSET


@strawberry.input
class DeletePostCommentInput:
    author_id: str
    password: str


def _service(info: Info) -> PostCommentService:
    return info.context["comment_service"]


@strawberry.type
class PostCommentQuery:
    @strawberry.field(name="post_comments")
    async def post_comments(self, info: Info, post_id: int) -> list[PostCommentType]:
        comments = await _service(info).list_by_post(post_id)
        return [PostCommentType.from_record(c) for c in comments]


@strawberry.type
class PostCommentMutation:
    @strawberry.mutation(name="create_post_comment")
    async def create_post_comment(
        self,
        info: Info,
        data: Annotated[CreatePostCommentInput, strawberry.argument(name="input")],
    ) -> PostCommentType:
        comment = await _service(info).create_comment(PostCommentCreate(**provided(data)))
        return PostCommentType.from_record(comment)

    @strawberry.mutation(name="update_post_comment")
    async def update_post_comment(
        self,
        info: Info,
        id: int,
        data: Annotated[UpdatePostCommentInput, strawberry.argument(name="input")],
    ) -> PostCommentType:
        comment = await _service(info).update_comment(id, PostCommentUpdate(**provided(data)))
        return PostCommentType.from_record(comment)

    @strawberry.mutation(name="delete_post_comment")
    async def delete_post_comment(
        self,
        info: Info,
        id: int,
        data: Annotated[DeletePostCommentInput, strawberry.argument(name="input")],
    ) -> PostCommentType:
        comment = await _service(info).delete_comment(id, PostCommentDelete(**provided(data)))
        return PostCommentType.from_record(comment)
