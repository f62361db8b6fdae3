"""
Media Handler

Media endpoints: upload, binary retrieval, deletion, links and present-media
selection, plus the generic list/search/paged routes.

ENDPOINTS:
==========
    GET    /api/media/links/{media_id}   - Link targets of any media item
    POST   /api/media/links              - Link two of the caller's items
    GET    /api/media/request            - Draw one present-era item
    POST   /api/media                    - Multipart upload (era/locket headers)
    GET    /api/media                    - List (query string = filters)
    GET    /api/media/search/{f}/{t}     - Substring search
    GET    /api/media/get/{page}/{limit} - Paged list
    GET    /api/media/{media_id}         - Binary payload
    POST   /api/media/{media_id}         - Not implemented (501)
    DELETE /api/media/{media_id}         - Delete payload then record

Fixed paths are registered before /{media_id} so that /request and /links
are never parsed as a media id.
"""

import asyncio
import os
import shutil
import tempfile
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence, TypeVar
from uuid import UUID

from fastapi import APIRouter, Depends, File, Header, Query, Response, UploadFile

from locket.api.dependencies import CurrentUser
from locket.api.dependencies.services import get_media_service
from locket.api.handlers.resource_handler import Operation, build_resource_router
from locket.config.settings import settings
from locket.shared.core.exceptions import NotImplementedFeatureError, ValidationError
from locket.shared.models.enums import Era, Locket
from locket.shared.models.media import Media
from locket.shared.repositories.media_repository import MediaRepository
from locket.shared.schemas.common import Reply
from locket.shared.schemas.media import LinkRequest, MediaResponse, MediaUpdate
from locket.shared.services.media_service import MediaService, file_extension


router = APIRouter()

DEFAULT_MIMETYPE = "application/octet-stream"

HeaderEnum = TypeVar("HeaderEnum", bound=Enum)


def _parse_header_enum(
    enum_cls: type[HeaderEnum],
    raw: Optional[str],
    default: HeaderEnum,
    header: str,
) -> HeaderEnum:
    """
    Read an enum value from a request header.

    A missing or empty header yields the default; matching ignores case and
    surrounding whitespace.

    Raises:
        ValidationError: If the value is not a member of the enum
    """
    if raw is None or raw == "":
        return default
    try:
        return enum_cls(raw.strip().lower())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(
            f"Invalid {header} header",
            details={"header": header, "value": raw, "allowed": allowed},
        ) from None


def _spool_upload(upload: UploadFile) -> str:
    """Copy an upload to a temporary file under UPLOAD_TMP_DIR."""
    tmp_dir = Path(settings.UPLOAD_TMP_DIR)
    tmp_dir.mkdir(parents=True, exist_ok=True)

    extension = file_extension(upload.filename or "")
    fd, tmp_path = tempfile.mkstemp(
        dir=tmp_dir,
        suffix=f".{extension}" if extension else "",
    )
    with os.fdopen(fd, "wb") as tmp:
        upload.file.seek(0)
        shutil.copyfileobj(upload.file, tmp)
    return tmp_path


async def present_media(repo: MediaRepository, records: Sequence[Media]) -> list[MediaResponse]:
    """Render media rows with their outgoing links."""
    link_map = await repo.get_link_map(record.id for record in records)
    return [MediaResponse.from_media(record, link_map.get(record.id)) for record in records]


# ═══════════════════════════════════════════════════════════════════════════════
# LINKS
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("/links/{media_id}", response_model=Reply[list[UUID]])
async def get_links(
    media_id: UUID,
    current_user: CurrentUser,
    media_service: MediaService = Depends(get_media_service),
):
    """
    List the link targets of a media item.

    Any authenticated user may read any item's links.
    """
    return Reply.success(await media_service.get_links(media_id))


@router.post("/links", response_model=Reply)
async def store_link(
    link: LinkRequest,
    current_user: CurrentUser,
    media_service: MediaService = Depends(get_media_service),
):
    """
    Link one of the caller's items to another of the opposite era.

    Answers success whether the link was created, already existed or was
    rejected for sharing an era. The reverse link is not created.
    """
    await media_service.store_link(current_user.user_id, link.media_id, link.link_id)
    return Reply.success()


# ═══════════════════════════════════════════════════════════════════════════════
# PRESENT-MEDIA SELECTION
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("/request", response_model=Reply[UUID])
async def request_present(
    current_user: CurrentUser,
    media_service: MediaService = Depends(get_media_service),
):
    """
    Draw one of the caller's present-era items at random.

    Every successful draw is recorded as a media session.
    """
    media = await media_service.get_present(current_user.user_id)
    return Reply.success(media.id)


# ═══════════════════════════════════════════════════════════════════════════════
# UPLOAD
# ═══════════════════════════════════════════════════════════════════════════════


@router.post("", response_model=Reply[MediaResponse])
async def store(
    current_user: CurrentUser,
    file: Optional[UploadFile] = File(None),
    era: Optional[str] = Header(None),
    locket: Optional[str] = Header(None),
    media_service: MediaService = Depends(get_media_service),
):
    """
    Upload a media payload.

    The era header defaults to past and the locket header to none.
    """
    if file is None or not file.filename:
        raise ValidationError("No file uploaded", details={"field": "file"})

    era_value = _parse_header_enum(Era, era, Era.PAST, "era")
    locket_value = _parse_header_enum(Locket, locket, Locket.NONE, "locket")

    tmp_path = await asyncio.to_thread(_spool_upload, file)
    try:
        media = await media_service.store_upload(
            owner_id=current_user.user_id,
            local_path=tmp_path,
            original_name=file.filename,
            mimetype=file.content_type or DEFAULT_MIMETYPE,
            era=era_value,
            locket=locket_value,
        )
    finally:
        await file.close()
        Path(tmp_path).unlink(missing_ok=True)

    return Reply.success(MediaResponse.from_media(media))


# ═══════════════════════════════════════════════════════════════════════════════
# GENERIC COLLECTION ROUTES
# ═══════════════════════════════════════════════════════════════════════════════

build_resource_router(
    repository=MediaRepository,
    resource_name="Media",
    response_schema=MediaResponse,
    operations=(Operation.INDEX, Operation.SEARCH, Operation.PAGED),
    presenter=present_media,
    router=router,
)


# ═══════════════════════════════════════════════════════════════════════════════
# SINGLE MEDIA ROUTES
# ═══════════════════════════════════════════════════════════════════════════════


@router.get(
    "/{media_id}",
    response_class=Response,
    responses={200: {"content": {"application/octet-stream": {}}}},
)
async def show(
    media_id: UUID,
    current_user: CurrentUser,
    size: Optional[int] = Query(None, ge=100, le=1024, description="Requested edge length"),
    media_service: MediaService = Depends(get_media_service),
):
    """Return the binary payload of one of the caller's items."""
    media, content = await media_service.get_payload(current_user.user_id, media_id)
    return Response(content=content, media_type=media.mimetype)


@router.post("/{media_id}", response_model=Reply)
async def update(
    media_id: UUID,
    current_user: CurrentUser,
    payload: Optional[MediaUpdate] = None,
):
    """Media metadata cannot be changed."""
    raise NotImplementedFeatureError("Media cannot be updated")


@router.delete("/{media_id}", response_model=Reply)
async def destroy(
    media_id: UUID,
    current_user: CurrentUser,
    media_service: MediaService = Depends(get_media_service),
):
    """Delete the payload, then the record."""
    await media_service.destroy(current_user.user_id, media_id)
    return Reply.success()
