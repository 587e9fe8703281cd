"""
Disk storage for uploaded images.

Files live under ``settings.UPLOAD_ROOT/<category dir>/`` and are served by
the StaticFiles mount at ``settings.UPLOAD_URL_PREFIX``.
"""

import mimetypes
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import filetype
from fastapi import HTTPException, UploadFile, status
from PIL import Image, UnidentifiedImageError
from starlette.concurrency import run_in_threadpool

from shared.core.config import settings
from shared.core.logging_config import get_logger
from shared.utils.secure_filename import secure_filename

logger = get_logger(__name__)

SVG_MIME = "image/svg+xml"


@dataclass(frozen=True)
class StoredFile:
    filename: str
    original_name: str
    relative_path: str
    url: str
    size: int
    mime_type: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filename": self.filename,
            "original_name": self.original_name,
            "path": self.relative_path,
            "url": self.url,
            "size": self.size,
            "mime_type": self.mime_type,
        }


def upload_root() -> Path:
    return Path(settings.UPLOAD_ROOT).resolve()


def resolve_category_dir(category: Optional[str]) -> str:
    """Map an upload category to its directory; unknown ones go to general."""
    if not category:
        return settings.DEFAULT_UPLOAD_DIR
    return settings.UPLOAD_CATEGORY_DIRS.get(
        category.lower().strip(), settings.DEFAULT_UPLOAD_DIR
    )


def resolve_upload_path(directory: str, filename: str) -> Path:
    """
    Resolve ``directory/filename`` inside the upload root.

    Raises:
        ValueError: If the result would escape the upload root.
    """
    root = upload_root()
    candidate = (root / directory / filename).resolve()
    if root not in candidate.parents:
        raise ValueError("Path escapes upload root")
    return candidate


def get_media_url(relative_path: Optional[str]) -> Optional[str]:
    """Public URL for a stored file's relative path."""
    if not relative_path or not isinstance(relative_path, str):
        return None

    if relative_path.startswith(("http://", "https://", "/")):
        return relative_path

    relative_path = relative_path.strip().lstrip("/\\")
    if not relative_path:
        return None

    return f"{settings.UPLOAD_URL_PREFIX.rstrip('/')}/{relative_path}"


def get_mime_type_from_bytes(
    file_content: bytes, filename: Optional[str] = None
) -> str:
    """
    Guess the MIME type from the file's magic bytes, falling back to the
    filename for text formats such as SVG that carry no signature.
    """
    kind = filetype.guess(file_content)
    if kind:
        return kind.mime
    if filename:
        guessed = mimetypes.guess_type(filename)[0]
        if guessed == SVG_MIME and b"<svg" not in file_content[:2048]:
            return "application/octet-stream"
        if guessed:
            return guessed
    return "application/octet-stream"


def _write_bytes(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


async def save_uploaded_file(file: UploadFile, category_dir: str) -> StoredFile:
    """
    Validate and store one uploaded image.

    Raises:
        HTTPException: 400 for a missing name, a disallowed type or an
            oversized file.
    """
    if not file or not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file provided.",
        )

    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"File size exceeds the limit of "
                f"{settings.MAX_UPLOAD_SIZE // (1024 * 1024)} MB."
            ),
        )
    if not content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file is empty.",
        )

    mime_type = get_mime_type_from_bytes(content, file.filename)
    if mime_type not in settings.ALLOWED_MEDIA_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                "Unsupported file type. Allowed types: "
                + ", ".join(settings.ALLOWED_MEDIA_TYPES)
            ),
        )

    cleaned = secure_filename(file.filename)
    stem, dot, ext = cleaned.rpartition(".")
    if not dot:
        stem, ext = cleaned, (mimetypes.guess_extension(mime_type) or "").lstrip(".")
    safe_filename = f"{stem}-{uuid.uuid4().hex[:12]}"
    if ext:
        safe_filename = f"{safe_filename}.{ext}"

    category_dir = category_dir.strip("/\\")
    target = resolve_upload_path(category_dir, safe_filename)
    await run_in_threadpool(_write_bytes, target, content)

    relative_path = f"{category_dir}/{safe_filename}"
    logger.info("Stored upload %s (%d bytes)", relative_path, len(content))

    return StoredFile(
        filename=safe_filename,
        original_name=file.filename,
        relative_path=relative_path,
        url=get_media_url(relative_path) or "",
        size=len(content),
        mime_type=mime_type,
    )


def _make_thumbnail(source: Path, target: Path, size: int) -> None:
    with Image.open(source) as img:
        img.thumbnail((size, size))
        if img.mode not in ("RGB", "RGBA", "L"):
            img = img.convert("RGBA")
        img.save(target)


async def create_thumbnail(stored: StoredFile) -> Optional[str]:
    """
    Write a bounded-size copy next to the original and return its URL.

    SVG files and images Pillow cannot read get no thumbnail.
    """
    if stored.mime_type == SVG_MIME:
        return None

    directory, _, filename = stored.relative_path.rpartition("/")
    thumb_name = f"thumb-{filename}"
    try:
        source = resolve_upload_path(directory, filename)
        target = resolve_upload_path(directory, thumb_name)
        await run_in_threadpool(
            _make_thumbnail, source, target, settings.THUMBNAIL_SIZE
        )
    except (OSError, UnidentifiedImageError, ValueError) as e:
        logger.warning("Thumbnail generation failed for %s: %s", filename, e)
        return None

    return get_media_url(f"{directory}/{thumb_name}")


def relative_path_from_url(url: Optional[str]) -> Optional[str]:
    """Inverse of ``get_media_url`` for files we host ourselves."""
    if not url:
        return None
    prefix = settings.UPLOAD_URL_PREFIX.rstrip("/") + "/"
    if not url.startswith(prefix):
        return None
    return url[len(prefix):]


async def remove_file_if_exists(relative_path: Optional[str]) -> bool:
    """Delete a stored file; returns False when there was nothing to delete."""
    if not relative_path:
        return False

    directory, _, filename = relative_path.strip("/").rpartition("/")
    try:
        path = resolve_upload_path(directory, filename)
    except ValueError:
        logger.warning("Refusing to delete outside upload root: %s", relative_path)
        return False

    if not path.is_file():
        return False

    try:
        await run_in_threadpool(path.unlink)
        logger.info("Successfully deleted file: %s", relative_path)
        return True
    except OSError as e:
        logger.warning("Failed to delete file '%s': %s", relative_path, e)
        return False


def collect_upload_stats() -> Dict[str, Any]:
    """Per-directory file counts and sizes under the upload root."""
    root = upload_root()
    directories: Dict[str, Dict[str, int]] = {}
    total_files = 0
    total_size = 0

    if root.is_dir():
        for entry in sorted(root.iterdir()):
            if not entry.is_dir():
                continue
            files = [f for f in entry.iterdir() if f.is_file()]
            size = sum(f.stat().st_size for f in files)
            directories[entry.name] = {"files": len(files), "size": size}
            total_files += len(files)
            total_size += size

    return {
        "directories": directories,
        "total_files": total_files,
        "total_size": total_size,
    }
