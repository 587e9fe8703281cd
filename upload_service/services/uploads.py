from typing import Any, Dict, List, Optional, Sequence, Tuple

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from shared.core.config import settings
from shared.core.exceptions import NotFoundError, ValidationError
from shared.core.logging_config import get_logger
from shared.utils.file_uploads import (
    StoredFile,
    collect_upload_stats,
    create_thumbnail,
    remove_file_if_exists,
    resolve_category_dir,
    resolve_upload_path,
    save_uploaded_file,
)

logger = get_logger(__name__)

# Form field of the mixed upload -> upload category
MIXED_UPLOAD_FIELDS = {
    "profileImage": "profile",
    "courseImages": "course",
    "marketplaceImages": "marketplace",
    "eventImages": "event",
    "heroImage": "hero",
}


async def _store(file: UploadFile, directory: str) -> Dict[str, Any]:
    stored: StoredFile = await save_uploaded_file(file, directory)
    data = stored.to_dict()
    data["thumbnail_url"] = await create_thumbnail(stored)
    return data


async def _discard(items: Sequence[Dict[str, Any]]) -> None:
    for item in items:
        directory = item["path"].rpartition("/")[0]
        await remove_file_if_exists(item["path"])
        await remove_file_if_exists(f"{directory}/thumb-{item['filename']}")


def category_file_limit(category: Optional[str]) -> int:
    """Files one request may store for ``category``."""
    limit = settings.UPLOAD_CATEGORY_LIMITS.get(
        (category or "").lower().strip(), settings.MAX_UPLOAD_FILES
    )
    return min(limit, settings.MAX_UPLOAD_FILES)


def _check_count(count: int, limit: int) -> None:
    if count == 0:
        raise ValidationError("No files uploaded")
    if count > limit:
        raise ValidationError(
            f"Maximum {limit} files allowed per upload",
            details={"limit": limit, "received": count},
        )


async def store_single(file: UploadFile, category: Optional[str]) -> Dict[str, Any]:
    directory = resolve_category_dir(category)
    return await _store(file, directory)


async def store_many(
    files: List[UploadFile],
    category: Optional[str],
    max_files: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Store several files in one category directory.

    Either every file is stored or none is: files written before a failing
    one are removed again.
    """
    files = files or []
    _check_count(len(files), max_files or settings.MAX_UPLOAD_FILES)

    directory = resolve_category_dir(category)
    results: List[Dict[str, Any]] = []
    try:
        for file in files:
            results.append(await _store(file, directory))
    except Exception:
        await _discard(results)
        raise
    return results


async def store_mixed(
    fields: Dict[str, Optional[List[UploadFile]]]
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Store files sent under several form fields, each into its own category.

    Every field has its own count limit and the request as a whole is
    capped at ``MAX_UPLOAD_FILES``. Nothing is kept if any file fails.
    """
    batches: List[Tuple[str, str, List[UploadFile]]] = []
    for field, files in fields.items():
        if not files:
            continue
        category = MIXED_UPLOAD_FIELDS[field]
        limit = category_file_limit(category)
        if len(files) > limit:
            raise ValidationError(
                f"At most {limit} file(s) allowed for {field}",
                details={"field": field, "limit": limit, "received": len(files)},
            )
        batches.append((field, category, files))

    _check_count(
        sum(len(files) for _, _, files in batches), settings.MAX_UPLOAD_FILES
    )

    result: Dict[str, List[Dict[str, Any]]] = {}
    stored: List[Dict[str, Any]] = []
    try:
        for field, category, files in batches:
            directory = resolve_category_dir(category)
            for file in files:
                item = await _store(file, directory)
                stored.append(item)
                result.setdefault(field, []).append(item)
    except Exception:
        await _discard(stored)
        raise

    logger.info("Stored %d files across %s", len(stored), ", ".join(result))
    return result


async def delete_stored_file(directory: str, filename: str) -> str:
    try:
        path = resolve_upload_path(directory, filename)
    except ValueError:
        logger.warning(
            "Rejected upload delete outside root: %s/%s", directory, filename
        )
        raise ValidationError("Invalid file path") from None

    if not await run_in_threadpool(path.is_file):
        raise NotFoundError("File not found")

    relative_path = f"{directory.strip('/')}/{filename}"
    await remove_file_if_exists(relative_path)
    # Thumbnails follow their original
    await remove_file_if_exists(f"{directory.strip('/')}/thumb-{filename}")
    return relative_path


async def fetch_upload_stats() -> Dict[str, Any]:
    return await run_in_threadpool(collect_upload_stats)
