from typing import List, Optional

from fastapi import APIRouter, File, Query, UploadFile, status
from starlette.responses import JSONResponse

from shared.core.api_response import api_response
from shared.dependencies.auth import CurrentPrincipal
from shared.utils.exception_handlers import exception_handler
from upload_service.services.uploads import (
    category_file_limit,
    delete_stored_file,
    fetch_upload_stats,
    store_many,
    store_mixed,
    store_single,
)

router = APIRouter()


async def _single_upload(file: UploadFile, category: Optional[str]) -> JSONResponse:
    data = await store_single(file, category)
    return api_response(
        status_code=status.HTTP_201_CREATED,
        message="File uploaded successfully",
        data=data,
    )


@router.post("/single", status_code=status.HTTP_201_CREATED)
@exception_handler
async def upload_single(
    _: CurrentPrincipal,
    file: UploadFile = File(...),
    category: Optional[str] = Query(None),
) -> JSONResponse:
    return await _single_upload(file, category)


@router.post("/multiple", status_code=status.HTTP_201_CREATED)
@exception_handler
async def upload_multiple(
    _: CurrentPrincipal,
    files: List[UploadFile] = File(...),
    category: Optional[str] = Query(None),
) -> JSONResponse:
    data = await store_many(files, category)
    return api_response(
        status_code=status.HTTP_201_CREATED,
        message=f"{len(data)} files uploaded successfully",
        data=data,
    )


async def _category_upload(files: List[UploadFile], category: str) -> JSONResponse:
    data = await store_many(files, category, category_file_limit(category))
    return api_response(
        status_code=status.HTTP_201_CREATED,
        message=f"{len(data)} {category} images uploaded successfully",
        data=data,
    )


@router.post("/mixed", status_code=status.HTTP_201_CREATED)
@exception_handler
async def upload_mixed(
    _: CurrentPrincipal,
    profile_image: Optional[List[UploadFile]] = File(None, alias="profileImage"),
    course_images: Optional[List[UploadFile]] = File(None, alias="courseImages"),
    marketplace_images: Optional[List[UploadFile]] = File(
        None, alias="marketplaceImages"
    ),
    event_images: Optional[List[UploadFile]] = File(None, alias="eventImages"),
    hero_image: Optional[List[UploadFile]] = File(None, alias="heroImage"),
) -> JSONResponse:
    data = await store_mixed(
        {
            "profileImage": profile_image,
            "courseImages": course_images,
            "marketplaceImages": marketplace_images,
            "eventImages": event_images,
            "heroImage": hero_image,
        }
    )
    return api_response(
        status_code=status.HTTP_201_CREATED,
        message="Files uploaded successfully",
        data=data,
    )


@router.post("/profile", status_code=status.HTTP_201_CREATED)
@exception_handler
async def upload_profile_image(
    _: CurrentPrincipal, file: UploadFile = File(...)
) -> JSONResponse:
    return await _single_upload(file, "profile")


@router.post("/course", status_code=status.HTTP_201_CREATED)
@exception_handler
async def upload_course_images(
    _: CurrentPrincipal, files: List[UploadFile] = File(...)
) -> JSONResponse:
    return await _category_upload(files, "course")


@router.post("/marketplace", status_code=status.HTTP_201_CREATED)
@exception_handler
async def upload_marketplace_images(
    _: CurrentPrincipal, files: List[UploadFile] = File(...)
) -> JSONResponse:
    return await _category_upload(files, "marketplace")


@router.post("/event", status_code=status.HTTP_201_CREATED)
@exception_handler
async def upload_event_images(
    _: CurrentPrincipal, files: List[UploadFile] = File(...)
) -> JSONResponse:
    return await _category_upload(files, "event")


@router.post("/hero", status_code=status.HTTP_201_CREATED)
@exception_handler
async def upload_hero_image(
    _: CurrentPrincipal, file: UploadFile = File(...)
) -> JSONResponse:
    return await _single_upload(file, "hero")


@router.get("/stats")
@exception_handler
async def get_upload_stats(_: CurrentPrincipal) -> JSONResponse:
    stats = await fetch_upload_stats()
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Upload statistics retrieved successfully",
        data=stats,
    )


@router.delete("/{directory}/{filename}")
@exception_handler
async def delete_upload(
    directory: str, filename: str, _: CurrentPrincipal
) -> JSONResponse:
    path = await delete_stored_file(directory, filename)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="File deleted successfully",
        data={"path": path},
    )
