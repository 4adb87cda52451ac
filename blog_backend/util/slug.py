from __future__ import annotations

import re
import unicodedata


_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(title: str | None) -> str:
    """Turn a post title into a URL-safe slug.

    "Hello, World!" -> "hello-world"

    Accented characters are folded to ASCII first; anything else that is not
    a letter or digit collapses into a single "-". Applying it twice gives the
    same result as applying it once.
    """
    s = unicodedata.normalize("NFKD", str(title or ""))
    s = s.encode("ascii", "ignore").decode("ascii").lower()
    return _NON_ALNUM.sub("-", s).strip("-")
