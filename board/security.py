from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool

from board.config import settings


class PasswordHasher:
    """
    Salted one-way password hashing backed by a passlib ``CryptContext``.

    Hashing is deliberately slow, so both operations run in Starlette's
    thread pool and are awaited by the services.
    """

    def __init__(self, scheme: str | None = None) -> None:
        self._context = CryptContext(schemes=[scheme or settings.PASSWORD_SCHEME], deprecated="auto")

    async def hash(self, password: str) -> str:
        return await run_in_threadpool(self._context.hash, password)

    async def verify(self, password: str, hashed: str) -> bool:
        return await run_in_threadpool(self._context.verify, password, hashed)


# Module-level singleton shared across all request handlers.
hasher = PasswordHasher()
