from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fastapi import HTTPException, Request

from blog_backend.config import Config


@dataclass(frozen=True)
class AppContext:
    """Everything a request handler needs, built once per application.

    Handlers receive it through `Depends(get_context)` instead of reaching
    for module-level globals.
    """

    cfg: Config
    image_dir: Path

    @property
    def db_path(self) -> str:
        return self.cfg.DB_PATH

    @classmethod
    def from_config(cls, cfg: Config) -> "AppContext":
        return cls(cfg=cfg, image_dir=Path(cfg.IMAGE_DIR).resolve())


def get_context(request: Request) -> AppContext:
    ctx = getattr(request.app.state, "ctx", None)
    if ctx is None:
        raise HTTPException(status_code=500, detail="server_context_missing")
    return ctx
