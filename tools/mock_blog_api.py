#!/usr/bin/env python3
"""
Mock blog REST backend for developing the front-end without the real server.

Implements the auth, posts and users endpoints the front-end calls, with
in-memory test data. Errors use the {"message", "statusCode"} body shape of
the real backend.

Run directly: uvicorn tools.mock_blog_api:app --port 3000
"""

import math
import time
import uuid
from datetime import datetime, timezone
from typing import Optional

import jwt
from fastapi import FastAPI, Header, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

app = FastAPI(title="Mock Blog API", version="0.1.0")

# Allow CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

SIGNING_KEY = "mock-blog-api-signing-key-not-for-production"
TOKEN_LIFETIME = 3600


@app.exception_handler(HTTPException)
def http_error(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail, "statusCode": exc.status_code},
    )


# ==============================================================================
# Request bodies
# ==============================================================================


class LoginBody(BaseModel):
    email: str
    password: str


class RegisterBody(BaseModel):
    name: str
    email: str
    password: str


class PostBody(BaseModel):
    title: Optional[str] = None
    excerpt: Optional[str] = None
    body: Optional[str] = None
    published: Optional[bool] = None


class UserPatch(BaseModel):
    name: Optional[str] = None
    isBlocked: Optional[bool] = None


class RoleBody(BaseModel):
    role: str


class AuthorRequestBody(BaseModel):
    requestAuthor: bool = True


class DecisionBody(BaseModel):
    status: str


# ==============================================================================
# Test data
# ==============================================================================


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


USERS = {
    "1": {"id": "1", "email": "admin@example.com", "name": "Ada Admin", "role": "ADMIN", "password": "admin123"},
    "2": {"id": "2", "email": "author@example.com", "name": "Arthur Author", "role": "AUTHOR", "password": "author123"},
    "3": {"id": "3", "email": "user@example.com", "name": "Ursula User", "role": "USER", "password": "user123"},
    "4": {
        "id": "4",
        "email": "hopeful@example.com",
        "name": "Harry Hopeful",
        "role": "USER",
        "password": "user123",
        "authorRequestStatus": "PENDING",
    },
}
for _user in USERS.values():
    _user.setdefault("authorRequestStatus", None)
    _user.setdefault("isBlocked", False)
    _user.setdefault("createdAt", _now())
    _user.setdefault("updatedAt", _user["createdAt"])

POSTS = {}
for _i in range(1, 13):
    _author = USERS["2"] if _i % 3 else USERS["1"]
    POSTS[str(_i)] = {
        "id": str(_i),
        "title": f"Sample post {_i}",
        "excerpt": f"A short summary of sample post {_i}.",
        "body": f"<p>This is the body of <strong>sample post {_i}</strong>.</p>",
        "published": _i != 12,
        "authorId": _author["id"],
        "author": {"id": _author["id"], "name": _author["name"]},
        "createdAt": _now(),
        "updatedAt": _now(),
    }


def _public_user(user: dict) -> dict:
    return {k: v for k, v in user.items() if k != "password"}


def _identity(user: dict) -> dict:
    return {
        "id": user["id"],
        "email": user["email"],
        "name": user["name"],
        "role": user["role"],
        "authorRequestStatus": user["authorRequestStatus"],
    }


def _page(items: list, page: int, limit: int) -> dict:
    start = (page - 1) * limit
    return {
        "data": items[start:start + limit],
        "total": len(items),
        "page": page,
        "limit": limit,
        "lastPage": max(1, math.ceil(len(items) / limit)),
    }


# ==============================================================================
# Authentication helpers
# ==============================================================================


def _issue_token(user: dict) -> str:
    payload = {"sub": user["id"], "role": user["role"], "exp": int(time.time()) + TOKEN_LIFETIME}
    return jwt.encode(payload, SIGNING_KEY, algorithm="HS256")


def current_user(authorization: Optional[str]) -> dict:
    """Resolve the bearer token to a user, or raise 401."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Unauthorized")
    try:
        payload = jwt.decode(authorization[7:], SIGNING_KEY, algorithms=["HS256"])
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Unauthorized")
    user = USERS.get(payload.get("sub"))
    if user is None or user["isBlocked"]:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user


def require_role(user: dict, *roles: str) -> None:
    if user["role"] not in roles:
        raise HTTPException(status_code=403, detail="Forbidden resource")


def _get_user(user_id: str) -> dict:
    if user_id not in USERS:
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")
    return USERS[user_id]


def _get_post(post_id: str) -> dict:
    if post_id not in POSTS:
        raise HTTPException(status_code=404, detail=f"Post {post_id} not found")
    return POSTS[post_id]


# ==============================================================================
# Auth endpoints
# ==============================================================================


@app.post("/auth/login")
def login(body: LoginBody):
    for user in USERS.values():
        if user["email"] == body.email and user["password"] == body.password:
            if user["isBlocked"]:
                raise HTTPException(status_code=403, detail="Your account has been blocked")
            return {"accessToken": _issue_token(user), "user": _identity(user)}
    raise HTTPException(status_code=401, detail="Invalid credentials")


@app.post("/auth/register", status_code=201)
def register(body: RegisterBody):
    if any(u["email"] == body.email for u in USERS.values()):
        raise HTTPException(status_code=409, detail="Email already exists")
    user_id = uuid.uuid4().hex[:8]
    USERS[user_id] = {
        "id": user_id,
        "email": body.email,
        "name": body.name,
        "role": "USER",
        "password": body.password,
        "authorRequestStatus": None,
        "isBlocked": False,
        "createdAt": _now(),
        "updatedAt": _now(),
    }
    return {"accessToken": _issue_token(USERS[user_id]), "user": _identity(USERS[user_id])}


# ==============================================================================
# Post endpoints
# ==============================================================================


@app.get("/posts")
def list_published_posts(page: int = Query(1, ge=1), limit: int = Query(5, ge=1)):
    published = [p for p in POSTS.values() if p["published"]]
    return _page(published, page, limit)


@app.get("/posts/my-posts")
def list_my_posts(
    page: int = Query(1, ge=1),
    limit: int = Query(5, ge=1),
    authorization: Optional[str] = Header(None),
):
    user = current_user(authorization)
    require_role(user, "AUTHOR", "ADMIN")
    mine = [p for p in POSTS.values() if p["authorId"] == user["id"]]
    return _page(mine, page, limit)


@app.get("/posts/{post_id}")
def get_post(post_id: str, authorization: Optional[str] = Header(None)):
    post = _get_post(post_id)
    if not post["published"]:
        user = current_user(authorization)
        if user["role"] != "ADMIN" and user["id"] != post["authorId"]:
            raise HTTPException(status_code=404, detail=f"Post {post_id} not found")
    return post


@app.post("/posts", status_code=201)
def create_post(body: PostBody, authorization: Optional[str] = Header(None)):
    user = current_user(authorization)
    require_role(user, "AUTHOR", "ADMIN")
    if not body.title or not body.excerpt or not body.body:
        raise HTTPException(status_code=400, detail=["title should not be empty", "excerpt should not be empty"])
    post_id = uuid.uuid4().hex[:8]
    POSTS[post_id] = {
        "id": post_id,
        "title": body.title,
        "excerpt": body.excerpt,
        "body": body.body,
        "published": bool(body.published),
        "authorId": user["id"],
        "author": {"id": user["id"], "name": user["name"]},
        "createdAt": _now(),
        "updatedAt": _now(),
    }
    return POSTS[post_id]


@app.patch("/posts/{post_id}")
def update_post(post_id: str, body: PostBody, authorization: Optional[str] = Header(None)):
    user = current_user(authorization)
    post = _get_post(post_id)
    if user["role"] != "ADMIN" and user["id"] != post["authorId"]:
        raise HTTPException(status_code=403, detail="You can only edit your own posts")
    for field, value in body.model_dump(exclude_none=True).items():
        post[field] = value
    post["updatedAt"] = _now()
    return post


@app.delete("/posts/{post_id}")
def delete_post(post_id: str, authorization: Optional[str] = Header(None)):
    user = current_user(authorization)
    post = _get_post(post_id)
    if user["role"] != "ADMIN" and user["id"] != post["authorId"]:
        raise HTTPException(status_code=403, detail="You can only delete your own posts")
    del POSTS[post_id]
    return {"message": "Post deleted"}


# ==============================================================================
# User endpoints
# ==============================================================================


@app.get("/users")
def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    authorization: Optional[str] = Header(None),
):
    require_role(current_user(authorization), "ADMIN")
    return _page([_public_user(u) for u in USERS.values()], page, limit)


@app.post("/users/request-author-role")
def request_author_role(body: AuthorRequestBody, authorization: Optional[str] = Header(None)):
    user = current_user(authorization)
    if user["role"] != "USER":
        raise HTTPException(status_code=400, detail="Only users can request the author role")
    if user["authorRequestStatus"] in ("PENDING", "APPROVED"):
        raise HTTPException(status_code=400, detail="You already have an open author request")
    user["authorRequestStatus"] = "PENDING"
    return {"message": "Author role request submitted successfully"}


@app.get("/users/{user_id}")
def get_user(user_id: str, authorization: Optional[str] = Header(None)):
    require_role(current_user(authorization), "ADMIN")
    return {"message": "User found", "data": _public_user(_get_user(user_id))}


@app.patch("/users/{user_id}")
def update_user(user_id: str, body: UserPatch, authorization: Optional[str] = Header(None)):
    require_role(current_user(authorization), "ADMIN")
    user = _get_user(user_id)
    user.update(body.model_dump(exclude_none=True))
    user["updatedAt"] = _now()
    return {"message": "User updated", "data": _public_user(user)}


@app.patch("/users/{user_id}/role")
def update_user_role(user_id: str, body: RoleBody, authorization: Optional[str] = Header(None)):
    require_role(current_user(authorization), "ADMIN")
    if body.role not in ("USER", "AUTHOR", "ADMIN"):
        raise HTTPException(status_code=400, detail=f"Invalid role: {body.role}")
    user = _get_user(user_id)
    user["role"] = body.role
    return {"message": "Role updated", "data": _public_user(user)}


@app.patch("/users/{user_id}/process-author-request")
def process_author_request(user_id: str, body: DecisionBody, authorization: Optional[str] = Header(None)):
    require_role(current_user(authorization), "ADMIN")
    if body.status not in ("APPROVED", "REJECTED"):
        raise HTTPException(status_code=400, detail="Status must be APPROVED or REJECTED")
    user = _get_user(user_id)
    if user["authorRequestStatus"] != "PENDING":
        raise HTTPException(status_code=400, detail="User has no pending author request")
    user["authorRequestStatus"] = body.status
    if body.status == "APPROVED":
        user["role"] = "AUTHOR"
    return {"message": f"Author request {body.status.lower()}", "data": _public_user(user)}


@app.delete("/users/{user_id}")
def delete_user(user_id: str, authorization: Optional[str] = Header(None)):
    require_role(current_user(authorization), "ADMIN")
    _get_user(user_id)
    del USERS[user_id]
    return {"message": "User deleted"}


if __name__ == "__main__":
    import uvicorn

    print("Starting Mock Blog API server on http://localhost:3000")
    print("Test accounts:")
    print("  admin@example.com   / admin123   (ADMIN)")
    print("  author@example.com  / author123  (AUTHOR)")
    print("  user@example.com    / user123    (USER)")
    print("  hopeful@example.com / user123    (USER, pending author request)")
    uvicorn.run(app, host="0.0.0.0", port=3000)
