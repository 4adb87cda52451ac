import os
from dataclasses import dataclass
from typing import Optional

# Optional: load a local .env file if present.
try:
    from dotenv import load_dotenv

    load_dotenv()
except ImportError:
    # python-dotenv is optional; plain environment variables still work.
    pass


_TRUTHY = ("1", "true", "yes", "y", "on")
_FALSY = ("0", "false", "no", "n", "off")


def _env_bool(name: str, default: Optional[bool] = None) -> Optional[bool]:
    """Read an on/off flag such as CORS_ALLOW_CREDENTIALS=yes.

    Anything unset or not spelled like a boolean yields `default`.
    """
    value = (os.environ.get(name) or "").strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    return default


def _env_name() -> str:
    raw = os.environ.get("BLOG_ENV") or os.environ.get("NODE_ENV") or "development"
    return raw.strip().lower()


_ENV = _env_name()
_IS_PROD = _ENV == "production"


@dataclass(frozen=True)
class Config:
    """Runtime configuration.

    Production and development use different database files and image
    directories so that the test suite never touches real content.
    Provide the signing secret via BLOG_SECRET_KEY (or SECRET_KEY) or a .env file.
    """

    # -----------------
    # Core
    # -----------------
    ENV: str = _ENV

    DB_PATH: str = os.environ.get(
        "BLOG_DB_PATH",
        "./db.sqlite" if _IS_PROD else "./db.test.sqlite",
    )

    # Originals and their resized variants live side by side in one flat directory.
    IMAGE_DIR: str = os.environ.get(
        "BLOG_IMAGE_DIR",
        "public/images" if _IS_PROD else "test/images",
    )

    # -----------------
    # Auth (JWT)
    # -----------------
    # NOTE: The dev default is only for local work; production MUST override it.
    SECRET_KEY: str = (
        os.environ.get("BLOG_SECRET_KEY")
        or os.environ.get("SECRET_KEY")
        or "dev_change_me"
    )
    AUTH_TOKEN_EXPIRE_MINUTES: int = int(os.environ.get("AUTH_TOKEN_EXPIRE_MINUTES", "360"))  # 6 hours

    # -----------------
    # HTTP
    # -----------------
    # Comma-separated list; empty disables the CORS middleware.
    CORS_ALLOW_ORIGINS: str = os.environ.get("CORS_ALLOW_ORIGINS", "")
    CORS_ALLOW_CREDENTIALS: bool = _env_bool("CORS_ALLOW_CREDENTIALS", False) is True

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"


def load_config() -> Config:
    return Config()
