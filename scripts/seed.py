"""Database seeder: demo posts and comments created through the services."""
import argparse
import asyncio
import random
import time

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from board.database import Base, async_session, engine
from board.repositories import PostCommentRepository, PostRepository
from board.schemas import PostCommentCreate, PostCreate
from board.security import hasher
from board.services.comment_service import PostCommentService
from board.services.post_service import PostService

TOPICS = ["python", "fastapi", "graphql", "postgresql", "sqlalchemy",
          "testing", "docker", "async", "alembic", "pydantic"]

AUTHORS = [f"author_{i:02d}" for i in range(5)]

# Every seeded record shares this password so that the demo data can be
# edited and deleted through the API.
SEED_PASSWORD = "seed-password"


async def seed(
    session_factory: async_sessionmaker[AsyncSession],
    posts: int = 10,
    comments_per_post: int = 3,
) -> tuple[int, int]:
    """Create *posts* posts with up to *comments_per_post* comments each.

    Returns ``(posts_created, comments_created)``.
    """
    total_comments = 0

    async with session_factory() as session:
        post_repo = PostRepository(session)
        post_service = PostService(post_repo, hasher)
        comment_service = PostCommentService(PostCommentRepository(session), post_repo, hasher)

        for i in range(posts):
            topic = random.choice(TOPICS)
            post = await post_service.create_post(PostCreate(
                title=f"Post {i}: notes on {topic}",
                content=f"Some thoughts about {topic}. " * 5,
                author_id=random.choice(AUTHORS),
                password=SEED_PASSWORD,
            ))
            for j in range(random.randint(1, comments_per_post) if comments_per_post else 0):
                await comment_service.create_comment(PostCommentCreate(
                    content=f"Comment {j} on post {post.id}",
                    author_id=random.choice(AUTHORS),
                    password=SEED_PASSWORD,
                    post_id=post.id,
                ))
                total_comments += 1

        await session.commit()

    return posts, total_comments


async def main_async(posts: int, comments: int, reset: bool) -> None:
    start = time.perf_counter()

    if reset:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)

    created_posts, created_comments = await seed(async_session, posts, comments)
    await engine.dispose()

    elapsed = time.perf_counter() - start
    print(f"Seeding complete in {elapsed:.1f}s")
    print(f"  Posts: {created_posts}")
    print(f"  Comments: {created_comments}")
    print(f"  Password for every record: {SEED_PASSWORD}")


def main():
    parser = argparse.ArgumentParser(description="Seed the post board database")
    parser.add_argument("--posts", type=int, default=10, help="Number of posts to create")
    parser.add_argument("--comments", type=int, default=3, help="Maximum comments per post")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate all tables first")
    args = parser.parse_args()
    asyncio.run(main_async(args.posts, args.comments, args.reset))


if __name__ == "__main__":
    main()
