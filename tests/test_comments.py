"""
Comment endpoint tests: creating, listing, updating and deleting comments,
with the parent post embedded in every comment returned.
"""
import pytest
from httpx import AsyncClient
from sqlalchemy import text

CREATE_POST = """
mutation ($input: CreatePostInput!) {
  create_post(input: $input) { id title content authorId createdAt updatedAt }
}
"""

COMMENT_FIELDS = "id content authorId postId createdAt updatedAt post { id title content authorId createdAt updatedAt }"

CREATE_COMMENT = f"""
mutation ($input: CreatePostCommentInput!) {{
  create_post_comment(input: $input) {{ {COMMENT_FIELDS} }}
}}
"""

LIST_COMMENTS = f"""
query ($postId: Int!) {{
  post_comments(postId: $postId) {{ {COMMENT_FIELDS} }}
}}
"""

UPDATE_COMMENT = f"""
mutation ($id: Int!, $input: UpdatePostCommentInput!) {{
  update_post_comment(id: $id, input: $input) {{ {COMMENT_FIELDS} }}
}}
"""

DELETE_COMMENT = f"""
mutation ($id: Int!, $input: DeletePostCommentInput!) {{
  delete_post_comment(id: $id, input: $input) {{ {COMMENT_FIELDS} }}
}}
"""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _create_post(gql, author_id: str = "u1") -> dict:
    body = await gql(CREATE_POST, {"input": {
        "title": "Parent",
        "content": "Parent content",
        "authorId": author_id,
        "password": "p1",
    }})
    return body["data"]["create_post"]


async def _create_comment(gql, post_id: int, content: str = "Nice post",
                          author_id: str = "c1", password: str = "cp1") -> dict:
    body = await gql(CREATE_COMMENT, {"input": {
        "content": content,
        "authorId": author_id,
        "password": password,
        "postId": post_id,
    }})
    assert "errors" not in body, body
    return body["data"]["create_post_comment"]


def _error(body: dict) -> dict:
    assert body["data"] is None
    return body["errors"][0]


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_comment_embeds_parent_post(gql):
    post = await _create_post(gql)
    comment = await _create_comment(gql, post["id"])
    assert comment["id"] is not None
    assert comment["content"] == "Nice post"
    assert comment["authorId"] == "c1"
    assert comment["postId"] == post["id"]
    assert comment["post"] == post


@pytest.mark.asyncio
async def test_create_comment_on_nonexistent_post(gql):
    error = _error(await gql(CREATE_COMMENT, {"input": {
        "content": "Ghost comment",
        "authorId": "c1",
        "password": "cp1",
        "postId": 999999,
    }}))
    assert error["extensions"]["code"] == "NOT_FOUND"
    assert error["extensions"]["entity"] == "post"


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["content", "authorId", "password"])
async def test_create_comment_empty_required_field(gql, field):
    post = await _create_post(gql)
    payload = {"content": "x", "authorId": "c1", "password": "cp1", "postId": post["id"]}
    payload[field] = ""
    error = _error(await gql(CREATE_COMMENT, {"input": payload}))
    assert error["extensions"]["code"] == "BAD_USER_INPUT"
    assert error["extensions"]["field"] == field


@pytest.mark.asyncio
async def test_create_comment_validation_runs_before_post_lookup(gql):
    error = _error(await gql(CREATE_COMMENT, {"input": {
        "content": "",
        "authorId": "c1",
        "password": "cp1",
        "postId": 999999,
    }}))
    assert error["extensions"]["code"] == "BAD_USER_INPUT"


# ---------------------------------------------------------------------------
# List by post
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_comments_by_post(gql):
    post = await _create_post(gql)
    other = await _create_post(gql, author_id="u2")
    for i in range(3):
        await _create_comment(gql, post["id"], content=f"Comment {i}")
    await _create_comment(gql, other["id"], content="Elsewhere")

    body = await gql(LIST_COMMENTS, {"postId": post["id"]})
    comments = body["data"]["post_comments"]
    assert [c["content"] for c in comments] == ["Comment 0", "Comment 1", "Comment 2"]
    assert all(c["postId"] == post["id"] for c in comments)
    assert all(c["post"] == post for c in comments)


@pytest.mark.asyncio
async def test_list_comments_empty_for_post_without_comments(gql):
    post = await _create_post(gql)
    body = await gql(LIST_COMMENTS, {"postId": post["id"]})
    assert body["data"]["post_comments"] == []


@pytest.mark.asyncio
async def test_list_comments_for_nonexistent_post_is_an_error(gql):
    error = _error(await gql(LIST_COMMENTS, {"postId": 999999}))
    assert error["extensions"]["code"] == "NOT_FOUND"


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_comment(gql):
    post = await _create_post(gql)
    comment = await _create_comment(gql, post["id"])
    body = await gql(UPDATE_COMMENT, {"id": comment["id"], "input": {
        "content": "Edited",
        "authorId": "c1",
        "password": "cp1",
    }})
    updated = body["data"]["update_post_comment"]
    assert updated["id"] == comment["id"]
    assert updated["content"] == "Edited"
    assert updated["postId"] == post["id"]
    assert updated["post"] == post


@pytest.mark.asyncio
async def test_update_comment_wrong_password(gql):
    post = await _create_post(gql)
    comment = await _create_comment(gql, post["id"])
    error = _error(await gql(UPDATE_COMMENT, {"id": comment["id"], "input": {
        "content": "Edited",
        "authorId": "c1",
        "password": "wrong-password",
    }}))
    assert error["extensions"]["reason"] == "PASSWORD_MISMATCH"

    listed = await gql(LIST_COMMENTS, {"postId": post["id"]})
    assert listed["data"]["post_comments"][0]["content"] == "Nice post"


@pytest.mark.asyncio
async def test_update_comment_post_author_is_not_comment_author(gql):
    post = await _create_post(gql, author_id="u1")
    comment = await _create_comment(gql, post["id"], author_id="c1")
    error = _error(await gql(UPDATE_COMMENT, {"id": comment["id"], "input": {
        "content": "Moderated",
        "authorId": "u1",
        "password": "p1",
    }}))
    assert error["extensions"]["reason"] == "AUTHOR_MISMATCH"


@pytest.mark.asyncio
async def test_update_comment_not_found(gql):
    error = _error(await gql(UPDATE_COMMENT, {"id": 99999, "input": {
        "content": "Ghost",
        "authorId": "c1",
        "password": "cp1",
    }}))
    assert error["extensions"]["code"] == "NOT_FOUND"
    assert error["extensions"]["entity"] == "comment"


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_delete_comment_returns_last_state_with_post(gql):
    post = await _create_post(gql)
    comment = await _create_comment(gql, post["id"])
    body = await gql(DELETE_COMMENT, {"id": comment["id"], "input": {"authorId": "c1", "password": "cp1"}})
    assert body["data"]["delete_post_comment"] == comment

    listed = await gql(LIST_COMMENTS, {"postId": post["id"]})
    assert listed["data"]["post_comments"] == []


@pytest.mark.asyncio
async def test_delete_comment_wrong_author(gql):
    post = await _create_post(gql)
    comment = await _create_comment(gql, post["id"])
    error = _error(await gql(DELETE_COMMENT, {"id": comment["id"], "input": {
        "authorId": "someone-else",
        "password": "wrong-password",
    }}))
    assert error["extensions"]["reason"] == "AUTHOR_MISMATCH"

    listed = await gql(LIST_COMMENTS, {"postId": post["id"]})
    assert len(listed["data"]["post_comments"]) == 1


@pytest.mark.asyncio
async def test_delete_comment_wrong_password(gql):
    post = await _create_post(gql)
    comment = await _create_comment(gql, post["id"])
    error = _error(await gql(DELETE_COMMENT, {"id": comment["id"], "input": {
        "authorId": "c1",
        "password": "wrong-password",
    }}))
    assert error["extensions"]["code"] == "FORBIDDEN"
    assert error["extensions"]["reason"] == "PASSWORD_MISMATCH"

    listed = await gql(LIST_COMMENTS, {"postId": post["id"]})
    assert listed["data"]["post_comments"] == [comment]


# ---------------------------------------------------------------------------
# Storage failures
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_storage_failure_during_write_keeps_the_envelope(gql, async_client: AsyncClient, db_engine):
    post = await _create_post(gql)
    async with db_engine.begin() as conn:
        await conn.execute(text("DROP TABLE post_comments"))

    resp = await async_client.post("/graphql", json={"query": CREATE_COMMENT, "variables": {"input": {
        "content": "Lost",
        "authorId": "c1",
        "password": "cp1",
        "postId": post["id"],
    }}})
    assert resp.status_code == 200, resp.text
    error = _error(resp.json())
    assert error["message"] == "Internal Server Error"
    assert error["extensions"]["code"] == "INTERNAL_SERVER_ERROR"
    assert error["extensions"]["kind"] == "InfrastructureError"
    assert error["path"] == ["create_post_comment"]

    # The session was rolled back, so later requests are served normally.
    body = await gql("query { posts { id } }")
    assert body["data"]["posts"] == [{"id": post["id"]}]
