"""Image uploads for blog posts.

Originals are written to a flat directory under a random name (no
extension). Two square variants are derived next to each original:

    <name>-thumbnail   100x100
    <name>-medium      200x200

Variants are produced after the HTTP response has been sent, so a failure
there is only logged.
"""

from __future__ import annotations

import shutil
import uuid
from pathlib import Path
from typing import BinaryIO, List, Sequence, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError


THUMBNAIL_SUFFIX = "-thumbnail"

VARIANT_SIZES: Sequence[Tuple[str, int]] = (
    ("thumbnail", 100),
    ("medium", 200),
)


def _debug(msg: str) -> None:
    print(f"[images] {msg}")


def new_image_name() -> str:
    return uuid.uuid4().hex


def save_original(image_dir: Path, stream: BinaryIO) -> str:
    """Copy an uploaded stream into `image_dir`; returns the generated filename."""
    image_dir.mkdir(parents=True, exist_ok=True)
    filename = new_image_name()
    with open(image_dir / filename, "wb") as out:
        shutil.copyfileobj(stream, out)
    return filename


def variant_name(filename: str, size: str) -> str:
    return f"{filename}-{size}"


def _save_format(fmt: str | None) -> str:
    """Pillow reads some formats (SUN, PSD, FLI...) it cannot write; use PNG for those."""
    Image.init()
    if fmt and fmt in Image.SAVE:
        return fmt
    return "PNG"


def _write_variant(src: Path, dest: Path, width: int) -> None:
    with Image.open(src) as img:
        fmt = _save_format(img.format)
        # Scale and centre-crop to fill the square.
        resized = ImageOps.fit(img, (width, width), method=Image.LANCZOS)
        if fmt == "JPEG" and resized.mode not in ("RGB", "L"):
            resized = resized.convert("RGB")
        resized.save(dest, format=fmt)


def derive_variants(image_dir: Path, filename: str) -> List[str]:
    """Write every resized variant of `filename`; returns the names written.

    Best effort: never raises. Each variant is attempted independently.
    """
    src = image_dir / filename
    written: List[str] = []
    for size, width in VARIANT_SIZES:
        name = variant_name(filename, size)
        try:
            _write_variant(src, image_dir / name, width)
        except (OSError, UnidentifiedImageError, ValueError, KeyError) as e:
            _debug(f"Error saving {size} for {filename}: {e}")
            continue
        written.append(name)
    if written:
        _debug(f"Derived {len(written)} variants for {filename}")
    return written


def list_images(image_dir: Path) -> List[str]:
    """Public filenames: originals and medium variants, never thumbnails."""
    if not image_dir.is_dir():
        return []
    return sorted(
        p.name
        for p in image_dir.iterdir()
        if p.is_file() and THUMBNAIL_SUFFIX not in p.name
    )
