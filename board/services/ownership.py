import logging

from board.errors import AuthorizationError
from board.schemas import PostCommentRecord, PostRecord
from board.security import PasswordHasher

logger = logging.getLogger(__name__)


async def verify_ownership(
    hasher: PasswordHasher,
    entity: str,
    record: PostRecord | PostCommentRecord,
    author_id: str,
    password: str,
) -> None:
    """
    Check that the caller owns *record*.

    The author identifier is compared first (exact, case-sensitive), then the
    password is verified against the stored hash. The first failing check
    raises ``AuthorizationError``; the password is never checked for a
    caller who is not the author.
    """
    if author_id != record.author_id:
        logger.warning("Author mismatch on %s %s", entity, record.id)
        raise AuthorizationError.author_mismatch(entity)

    if not await hasher.verify(password, record.password):
        logger.warning("Password mismatch on %s %s", entity, record.id)
        raise AuthorizationError.password_mismatch()
