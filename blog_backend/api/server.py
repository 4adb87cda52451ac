from __future__ import annotations

import sqlite3
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from blog_backend import __version__
from blog_backend.auth import get_user_by_username, optional_user, require_user
from blog_backend.auth.security import create_access_token, verify_password
from blog_backend.config import Config, load_config
from blog_backend.context import AppContext, get_context
from blog_backend.db import connect, init_db
from blog_backend.images import derive_variants, list_images, save_original
from blog_backend.newsletter import add_signup
from blog_backend.posts import (
    create_post,
    get_post_by_slug,
    list_posts,
    soft_delete_post,
    update_post,
)


def _debug(msg: str) -> None:
    print(f"[api] {msg}")


_PROD_BANNER = r"""
  ::::::::   ::::::::     ::::::   ::::::::
  :+:    :+: :+:    :+: :+:    :+: :+:    :+:
  +:+    +:+ +:+    +:+ +:+    +:+ +:+    +:+
  +#++:++#   +#++:++#   +#+    +#+ +#+    +#+
  +#+        +#+    +#+ +#+    +#+ +#+    +#+
  #+#        #+#    #+# #+#    #+# #+#    #+#
  ###        ###    ###   ######   ########
"""


router = APIRouter()


# -----------------------------
# Health
# -----------------------------


@router.get("/health")
def health() -> Dict[str, Any]:
    return {"status": "ok"}


# -----------------------------
# Auth
# -----------------------------


class LoginRequest(BaseModel):
    # Missing fields fall through to the same 401s as wrong ones.
    username: Optional[str] = None
    password: Optional[str] = None


@router.post("/api/blog/login")
def blog_login(payload: LoginRequest, ctx: AppContext = Depends(get_context)) -> Dict[str, Any]:
    try:
        with connect(ctx.db_path) as conn:
            user_row = get_user_by_username(conn, payload.username)
    except sqlite3.Error as e:
        _debug(f"login lookup failed: {e}")
        raise HTTPException(status_code=500, detail="error reading from db")

    if user_row is None:
        raise HTTPException(status_code=401, detail="No user found")
    if not verify_password(payload.password or "", str(user_row["passwordHash"])):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token(
        secret=ctx.cfg.SECRET_KEY,
        user_id=int(user_row["id"]),
        expires_minutes=int(ctx.cfg.AUTH_TOKEN_EXPIRE_MINUTES),
    )
    return {"token": token}


@router.get("/protected", response_class=PlainTextResponse)
def protected(_user: Dict[str, Any] = Depends(require_user)) -> str:
    return "success"


# -----------------------------
# Posts
# -----------------------------


class PostRequest(BaseModel):
    title: str
    content: Optional[str] = None
    headerImage: Optional[str] = None
    thumbnailImage: Optional[str] = None
    date: Optional[int] = None  # epoch ms
    tags: Optional[str] = None
    byline: Optional[str] = None


class PostUpdateRequest(PostRequest):
    # Omitted -> 0, so a plain edit also restores a soft-deleted post.
    deleted: Optional[int] = None


@router.post("/api/blog/posts", status_code=201)
def blog_create_post(
    payload: PostRequest,
    _user: Dict[str, Any] = Depends(require_user),
    ctx: AppContext = Depends(get_context),
) -> Dict[str, Any]:
    try:
        with connect(ctx.db_path) as conn:
            slug = create_post(
                conn,
                title=payload.title,
                content=payload.content,
                header_image=payload.headerImage,
                thumbnail_image=payload.thumbnailImage,
                date=payload.date,
                tags=payload.tags,
                byline=payload.byline,
            )
    except sqlite3.Error as e:
        _debug(f"create post failed: {e}")
        raise HTTPException(status_code=500, detail="error writing to db")

    _debug(f"Created post slug={slug}")
    return {"success": True}


@router.get("/api/blog/posts")
def blog_list_posts(
    user: Optional[Dict[str, Any]] = Depends(optional_user),
    ctx: AppContext = Depends(get_context),
) -> List[Dict[str, Any]]:
    """All posts visible to the caller, oldest first.

    Anonymous: published and not deleted. Logged in: everything.
    """
    try:
        with connect(ctx.db_path) as conn:
            return list_posts(conn, authenticated=user is not None)
    except sqlite3.Error as e:
        _debug(f"list posts failed: {e}")
        raise HTTPException(status_code=500, detail="error reading from db")


@router.get("/api/blog/posts/{slug}")
def blog_get_post(slug: str, ctx: AppContext = Depends(get_context)) -> Optional[Dict[str, Any]]:
    # Not auth-aware on purpose: deleted posts stay hidden even for the admin.
    try:
        with connect(ctx.db_path) as conn:
            return get_post_by_slug(conn, slug)
    except sqlite3.Error as e:
        _debug(f"get post slug={slug} failed: {e}")
        raise HTTPException(status_code=500, detail="error reading from db")


@router.delete("/api/blog/posts/{slug}", status_code=201, response_class=PlainTextResponse)
def blog_delete_post(
    slug: str,
    _user: Dict[str, Any] = Depends(require_user),
    ctx: AppContext = Depends(get_context),
) -> str:
    try:
        with connect(ctx.db_path) as conn:
            n = soft_delete_post(conn, slug)
    except sqlite3.Error as e:
        _debug(f"delete post slug={slug} failed: {e}")
        raise HTTPException(status_code=500, detail="error deleting from db")

    _debug(f"Soft-deleted slug={slug} rows={n}")
    return "success"


@router.put("/api/blog/posts/{slug}", status_code=201, response_class=PlainTextResponse)
def blog_edit_post(
    slug: str,
    payload: PostUpdateRequest,
    _user: Dict[str, Any] = Depends(require_user),
    ctx: AppContext = Depends(get_context),
) -> str:
    try:
        with connect(ctx.db_path) as conn:
            new_slug = update_post(
                conn,
                slug,
                title=payload.title,
                content=payload.content,
                header_image=payload.headerImage,
                thumbnail_image=payload.thumbnailImage,
                date=payload.date,
                tags=payload.tags,
                byline=payload.byline,
                deleted=payload.deleted,
            )
    except sqlite3.Error as e:
        _debug(f"edit post slug={slug} failed: {e}")
        raise HTTPException(status_code=500, detail="error writing to db")

    if new_slug != slug:
        _debug(f"Post slug changed {slug} -> {new_slug}")
    return "success"


# -----------------------------
# Images
# -----------------------------


@router.post("/api/blog/images", status_code=201, response_class=PlainTextResponse)
def blog_upload_image(
    background_tasks: BackgroundTasks,
    file: Optional[UploadFile] = File(None),
    _user: Dict[str, Any] = Depends(require_user),
    ctx: AppContext = Depends(get_context),
) -> str:
    """Store the original now; resized variants are derived after the response."""
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded.")

    try:
        filename = save_original(ctx.image_dir, file.file)
    except OSError as e:
        _debug(f"upload failed: {e}")
        raise HTTPException(status_code=500, detail="error uploading file")

    background_tasks.add_task(derive_variants, ctx.image_dir, filename)
    return "File uploaded successfully"


@router.get("/api/blog/images")
def blog_list_images(ctx: AppContext = Depends(get_context)) -> List[str]:
    return list_images(ctx.image_dir)


# -----------------------------
# Newsletter
# -----------------------------


class NewsletterRequest(BaseModel):
    email: Optional[str] = None


@router.post("/api/sign-up-for-newsletter", status_code=201, response_class=PlainTextResponse)
def sign_up_for_newsletter(payload: NewsletterRequest, ctx: AppContext = Depends(get_context)) -> str:
    try:
        with connect(ctx.db_path) as conn:
            add_signup(conn, payload.email)
    except sqlite3.Error as e:
        _debug(f"newsletter signup failed: {e}")
        raise HTTPException(status_code=500)
    return "success"


# -----------------------------
# App
# -----------------------------


def _announce(cfg: Config) -> None:
    if cfg.is_production:
        _debug(_PROD_BANNER)
        _debug("running in production mode")
    else:
        _debug("running in development mode")


def create_app(cfg: Optional[Config] = None) -> FastAPI:
    """Build the application around an explicit context (config + image dir)."""
    cfg = cfg or load_config()
    ctx = AppContext.from_config(cfg)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        _announce(cfg)
        init_db(ctx.db_path)
        ctx.image_dir.mkdir(parents=True, exist_ok=True)
        _debug(f"db={ctx.db_path} images={ctx.image_dir}")
        yield
        _debug("shutting down")

    app = FastAPI(title="Blog Backend", version=__version__, lifespan=lifespan)
    app.state.ctx = ctx

    # CORS is only needed when the frontend is served from another origin.
    cors_origins = [o.strip() for o in (cfg.CORS_ALLOW_ORIGINS or "").split(",") if o.strip()]
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=cfg.CORS_ALLOW_CREDENTIALS,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(router)
    return app


app = create_app()
