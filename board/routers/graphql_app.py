"""
GraphQL endpoint: schema assembly, per-request context and the error boundary.

Every request gets its own ``AsyncSession`` through ``get_db`` and a fresh set
of repositories and services built on it. Errors raised by resolvers are
logged by ``BoardSchema.process_errors`` and converted to wire payloads by
``format_error`` in ``BoardGraphQLRouter.process_result``; nothing else in the
application formats errors.
"""
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
import strawberry
from strawberry.fastapi import GraphQLRouter
from strawberry.http import GraphQLHTTPResponse
from strawberry.types import ExecutionResult

from board.config import settings
from board.database import get_db
from board.errors import format_error, log_error
from board.repositories import PostCommentRepository, PostRepository
from board.routers.comments import PostCommentMutation, PostCommentQuery
from board.routers.posts import PostMutation, PostQuery
from board.security import hasher
from board.services.comment_service import PostCommentService
from board.services.post_service import PostService


@strawberry.type
class Query(PostQuery, PostCommentQuery):
    pass


@strawberry.type
class Mutation(PostMutation, PostCommentMutation):
    pass


class BoardSchema(strawberry.Schema):
    def process_errors(self, errors, execution_context=None) -> None:
        for error in errors:
            log_error(error)


schema = BoardSchema(query=Query, mutation=Mutation)


async def get_context(db: AsyncSession = Depends(get_db)) -> dict:
    posts = PostRepository(db)
    return {
        "post_service": PostService(posts, hasher),
        "comment_service": PostCommentService(PostCommentRepository(db), posts, hasher),
    }


class BoardGraphQLRouter(GraphQLRouter):
    async def process_result(self, request: Request, result: ExecutionResult) -> GraphQLHTTPResponse:
        data: GraphQLHTTPResponse = {"data": result.data}
        if result.errors:
            data["errors"] = [format_error(err) for err in result.errors]
        if result.extensions:
            data["extensions"] = result.extensions
        return data


router = BoardGraphQLRouter(
    schema,
    context_getter=get_context,
    graphql_ide="graphiql" if settings.DEBUG else None,
)
