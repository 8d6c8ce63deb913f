"""
Error taxonomy and its translation into GraphQL error payloads.

Services raise the ``BoardError`` subclasses below and never catch storage
exceptions: a ``SQLAlchemyError`` travels unchanged up to the GraphQL
boundary, where ``format_error`` reports it as an ``InfrastructureError``
without leaking driver details.

``format_error`` is the only place an internal error becomes a wire error;
the GraphQL router calls it once per error when building the response.
"""
import logging
from typing import Any

from graphql import GraphQLError
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
GRAPHQL_VALIDATION_FAILED = "GRAPHQL_VALIDATION_FAILED"


class BoardError(Exception):
    """Base class for caller-fixable errors raised by the service layer."""

    code: str = INTERNAL_SERVER_ERROR
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__

    def details(self) -> dict[str, Any]:
        """Extra, error-specific fields merged into the payload extensions."""
        return {}

    def to_extensions(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "kind": self.kind,
            "statusCode": self.status_code,
            **self.details(),
        }


class ValidationError(BoardError):
    code = "BAD_USER_INPUT"
    status_code = 400

    def __init__(self, field: str, message: str | None = None) -> None:
        super().__init__(message or f"{field} is required.")
        self.field = field

    def details(self) -> dict[str, Any]:
        return {"field": self.field}


class NotFoundError(BoardError):
    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, entity: str, entity_id: int) -> None:
        super().__init__(f"{entity} {entity_id} not found.")
        self.entity = entity
        self.entity_id = entity_id

    def details(self) -> dict[str, Any]:
        return {"entity": self.entity, "entityId": self.entity_id}


class AuthorizationError(BoardError):
    code = "FORBIDDEN"
    status_code = 403

    AUTHOR_MISMATCH = "AUTHOR_MISMATCH"
    PASSWORD_MISMATCH = "PASSWORD_MISMATCH"

    def __init__(self, reason: str, message: str) -> None:
        super().__init__(message)
        self.reason = reason

    @classmethod
    def author_mismatch(cls, entity: str) -> "AuthorizationError":
        return cls(cls.AUTHOR_MISMATCH, f"Author mismatch: only the author may modify this {entity}.")

    @classmethod
    def password_mismatch(cls) -> "AuthorizationError":
        return cls(cls.PASSWORD_MISMATCH, "Password mismatch: the password does not match.")

    def details(self) -> dict[str, Any]:
        return {"reason": self.reason}


# ---------------------------------------------------------------------------
# Boundary mapping
# ---------------------------------------------------------------------------

def format_error(error: GraphQLError) -> dict[str, Any]:
    """
    Translate *error* into the GraphQL wire format.

    - ``BoardError``: its own message plus code/kind/statusCode and details.
    - ``SQLAlchemyError``: masked, kind ``InfrastructureError``.
    - any other exception raised while resolving a field: masked, kind
      ``InternalError``.
    - errors raised before execution (parse, schema validation, variable
      coercion; they carry no path): the graphql-core message with code
      ``GRAPHQL_VALIDATION_FAILED``.
    """
    formatted: dict[str, Any] = dict(error.formatted)
    original = error.original_error

    if isinstance(original, BoardError):
        formatted["message"] = original.message
        formatted["extensions"] = original.to_extensions()
    elif error.path is not None:
        kind = "InfrastructureError" if isinstance(original, SQLAlchemyError) else "InternalError"
        formatted["message"] = "Internal Server Error"
        formatted["extensions"] = {
            "code": INTERNAL_SERVER_ERROR,
            "kind": kind,
            "statusCode": 500,
        }
    else:
        extensions = dict(formatted.get("extensions") or {})
        extensions.setdefault("code", GRAPHQL_VALIDATION_FAILED)
        extensions.setdefault("statusCode", 400)
        formatted["extensions"] = extensions

    return formatted


def log_error(error: GraphQLError) -> None:
    """Log *error* once, at a level matching how unexpected it is."""
    original = error.original_error
    path = ".".join(str(p) for p in error.path or ())

    if isinstance(original, BoardError):
        logger.info("%s at %s: %s", original.kind, path or "-", original.message)
    elif error.path is not None:
        logger.error(
            "Unexpected error at %s: %s",
            path or "-",
            original,
            exc_info=(type(original), original, original.__traceback__) if original else None,
        )
    else:
        logger.info("Rejected GraphQL document: %s", error.message)
