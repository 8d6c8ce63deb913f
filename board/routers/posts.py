from typing import Annotated

import strawberry
from strawberry.types import Info

from board.routers.types import PostType, provided
from board.schemas import PostCreate, PostDelete, PostUpdate
from board.services.post_service import PostService


@strawberry.input
class CreatePostInput:
    title: str
    author_id: str
    password: str
    content: str | None = None


@strawberry.input
class UpdatePostInput:
    author_id: str
    password: str
    title: str | None = strawberry.UNSET
    content: str | None = strawberry.UNSET


@strawberry.input
class DeletePostInput:
    author_id: str
    password: str


def _service(info: Info) -> PostService:
    return info.context["post_service"]


@strawberry.type
class PostQuery:
    @strawberry.field
    async def posts(self, info: Info) -> list[PostType]:
        records = await _service(info).list_posts()
        return [PostType.from_record(r) for r in records]

    @strawberry.field
    async def post(self, info: Info, id: int) -> PostType:
        return PostType.from_record(await _service(info).get_post(id))


@strawberry.type
class PostMutation:
    @strawberry.mutation(name="create_post")
    async def create_post(
        self,
        info: Info,
        data: Annotated[CreatePostInput, strawberry.argument(name="input")],
    ) -> PostType:
        post = await _service(info).create_post(PostCreate(**provided(data)))
        return PostType.from_record(post)

    @strawberry.mutation
    async def update_post(
        self,
        info: Info,
        id: int,
        data: Annotated[UpdatePostInput, strawberry.argument(name="input")],
    ) -> PostType:
        post = await _service(info).update_post(id, PostUpdate(**provided(data)))
        return PostType.from_record(post)

    @strawberry.mutation
    async def delete_post(
        self,
        info: Info,
        id: int,
        data: Annotated[DeletePostInput, strawberry.argument(name="input")],
    ) -> PostType:
        post = await _service(info).delete_post(id, PostDelete(**provided(data)))
        return PostType.from_record(post)
