from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# --- Records (what the repositories hand back) ---

class PostRecord(BaseModel):
    id: int
    title: str
    content: str | None = None
    author_id: str
    password: str  # hash
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True, frozen=True)


class PostCommentRecord(BaseModel):
    id: int
    content: str
    author_id: str
    password: str  # hash
    post_id: int
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True, frozen=True)


class PostCommentWithPost(PostCommentRecord):
    """A comment joined with its parent post at read time."""
    post: PostRecord


# --- Inputs ---
#
# Required text fields default to "" so that an absent value and an empty one
# fail the same explicit check in the service layer. Aliases carry the
# external (camelCase) field names used in error messages.

class _Input(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Credentials(_Input):
    author_id: str = Field("", alias="authorId")
    password: str = ""


class PostCreate(Credentials):
    title: str = ""
    content: str | None = None


class PostUpdate(Credentials):
    title: str | None = None
    content: str | None = None


class PostDelete(Credentials):
    pass


class PostCommentCreate(Credentials):
    content: str = ""
    post_id: int = Field(alias="postId")


class PostCommentUpdate(Credentials):
    content: str | None = None


class PostCommentDelete(Credentials):
    pass
