"""
Resource Handler

Builds the generic CRUD router for any resource backed by a BaseRepository.

Route Contract:
===============
    GET    ""                        index   (query string = exact-match filters)
    POST   ""                        store
    GET    /search/{field}/{term}    search  (substring)
    GET    /get/{page}/{limit}       paged   (0-indexed)
    GET    /{record_id}              show
    POST   /{record_id}              update
    DELETE /{record_id}              destroy

Every route depends on CurrentUser, so authentication runs before the
handler body. Ownership follows the repository:

    OWNED     queries scoped to the caller; owner column set from the token
    SELF      queries scoped to the caller's own row
    UNOWNED   no scoping

A record that exists but belongs to someone else is reported exactly like a
missing one.

Composition:
============
A resource with its own behaviour (media) builds its own APIRouter, adds
its custom routes, and passes that router plus the subset of generic
operations it wants to build_resource_router().

Usage:
======
    router = build_resource_router(
        repository=DeviceRepository,
        resource_name="Device",
        response_schema=DeviceResponse,
        create_schema=DeviceCreate,
        update_schema=DeviceUpdate,
    )
"""

from enum import Enum
from typing import Any, Awaitable, Callable, Iterable, Optional, Sequence, Type
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Request
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from locket.api.dependencies import CurrentUser, AuthenticatedUser
from locket.api.dependencies.database import get_db
from locket.config.settings import settings
from locket.shared.core.exceptions import NotFoundError, ValidationError
from locket.shared.models.enums import Ownership
from locket.shared.repositories.base import BaseRepository
from locket.shared.schemas.common import Reply


# Query parameters that are never treated as filters
RESERVED_QUERY_PARAMS = frozenset({"token"})


class Operation(str, Enum):
    """Generic operations a resource router can expose."""

    INDEX = "index"
    STORE = "store"
    SHOW = "show"
    UPDATE = "update"
    DESTROY = "destroy"
    SEARCH = "search"
    PAGED = "paged"


ALL_OPERATIONS = frozenset(Operation)

Presenter = Callable[[BaseRepository, Sequence[Any]], Awaitable[list[Any]]]


def owner_scope(repo: BaseRepository, user: AuthenticatedUser) -> Optional[UUID]:
    """Owner id to scope queries with, None for unowned resources."""
    return user.user_id if repo.is_owned else None


def build_resource_router(
    repository: Callable[[AsyncSession], BaseRepository],
    resource_name: str,
    response_schema: Type[BaseModel],
    create_schema: Optional[Type[BaseModel]] = None,
    update_schema: Optional[Type[BaseModel]] = None,
    operations: Iterable[Operation] = ALL_OPERATIONS,
    presenter: Optional[Presenter] = None,
    router: Optional[APIRouter] = None,
) -> APIRouter:
    """
    Build (or extend) a router exposing the generic resource operations.

    Args:
        repository: Repository class or factory taking a session
        resource_name: Name used in not-found messages
        response_schema: Pydantic model each record is rendered as
        create_schema: Body model for store (required if STORE is exposed)
        update_schema: Body model for update (required if UPDATE is exposed)
        operations: Which generic operations to register
        presenter: Async callable turning records into response objects;
            defaults to response_schema.model_validate per record
        router: Existing router to add the routes to

    Returns:
        The router with the requested routes registered
    """
    operations = frozenset(operations)
    router = router or APIRouter()

    if Operation.STORE in operations and create_schema is None:
        raise ValueError(f"{resource_name}: STORE requires a create_schema")
    if Operation.UPDATE in operations and update_schema is None:
        raise ValueError(f"{resource_name}: UPDATE requires an update_schema")

    async def get_repository(db: AsyncSession = Depends(get_db)) -> BaseRepository:
        return repository(db)

    async def present(repo: BaseRepository, records: Sequence[Any]) -> list[Any]:
        if presenter is not None:
            return await presenter(repo, records)
        return [response_schema.model_validate(record) for record in records]

    async def present_one(repo: BaseRepository, record: Any) -> Any:
        return (await present(repo, [record]))[0]

    def not_found(record_id: UUID) -> NotFoundError:
        return NotFoundError(resource_name, str(record_id))

    # ═══════════════════════════════════════════════════════════════════════════
    # COLLECTION ROUTES
    # ═══════════════════════════════════════════════════════════════════════════

    if Operation.INDEX in operations:

        @router.get("", response_model=Reply[list[response_schema]])
        async def index(
            request: Request,
            current_user: CurrentUser,
            repo: BaseRepository = Depends(get_repository),
        ):
            """List records; any query parameter is an exact-match filter."""
            filters = {
                key: value
                for key, value in request.query_params.items()
                if key not in RESERVED_QUERY_PARAMS
            }
            owner_id = owner_scope(repo, current_user)
            if filters:
                records = await repo.filter_by_exact_fields(filters, owner_id=owner_id)
            else:
                records = await repo.list(owner_id=owner_id)
            return Reply.success(await present(repo, records))

    if Operation.STORE in operations:

        @router.post("", response_model=Reply[response_schema])
        async def store(
            payload: create_schema,
            current_user: CurrentUser,
            repo: BaseRepository = Depends(get_repository),
        ):
            """Create a record owned by the caller."""
            fields = payload.model_dump()
            if repo.ownership is Ownership.OWNED:
                fields[repo.owner_field] = current_user.user_id
            record = await repo.store(fields)
            return Reply.success(await present_one(repo, record))

    if Operation.SEARCH in operations:

        @router.get("/search/{field}/{term}", response_model=Reply[list[response_schema]])
        async def search(
            field: str,
            term: str,
            current_user: CurrentUser,
            repo: BaseRepository = Depends(get_repository),
        ):
            """Substring search on one field."""
            records = await repo.search_by_field(
                field,
                term,
                owner_id=owner_scope(repo, current_user),
            )
            return Reply.success(await present(repo, records))

    if Operation.PAGED in operations:

        @router.get("/get/{page}/{limit}", response_model=Reply[list[response_schema]])
        async def paged(
            current_user: CurrentUser,
            page: int = Path(ge=0, description="Page number (0-indexed)"),
            limit: int = Path(ge=1, le=settings.MAX_PAGE_SIZE, description="Records per page"),
            repo: BaseRepository = Depends(get_repository),
        ):
            """One page of records."""
            records = await repo.paginate(page, limit, owner_id=owner_scope(repo, current_user))
            return Reply.success(await present(repo, records))

    # ═══════════════════════════════════════════════════════════════════════════
    # SINGLE RECORD ROUTES
    # ═══════════════════════════════════════════════════════════════════════════

    if Operation.SHOW in operations:

        @router.get("/{record_id}", response_model=Reply[response_schema])
        async def show(
            record_id: UUID,
            current_user: CurrentUser,
            repo: BaseRepository = Depends(get_repository),
        ):
            """Get one record."""
            record = await repo.get(record_id, owner_id=owner_scope(repo, current_user))
            if record is None:
                raise not_found(record_id)
            return Reply.success(await present_one(repo, record))

    if Operation.UPDATE in operations:

        @router.post("/{record_id}", response_model=Reply[response_schema])
        async def update(
            record_id: UUID,
            payload: update_schema,
            current_user: CurrentUser,
            repo: BaseRepository = Depends(get_repository),
        ):
            """Partially update one record."""
            fields = payload.model_dump(exclude_unset=True)
            if not fields:
                raise ValidationError("No fields to update")
            record = await repo.update(
                record_id,
                fields,
                owner_id=owner_scope(repo, current_user),
            )
            if record is None:
                raise not_found(record_id)
            return Reply.success(await present_one(repo, record))

    if Operation.DESTROY in operations:

        @router.delete("/{record_id}", response_model=Reply)
        async def destroy(
            record_id: UUID,
            current_user: CurrentUser,
            repo: BaseRepository = Depends(get_repository),
        ):
            """Delete one record."""
            deleted = await repo.destroy(record_id, owner_id=owner_scope(repo, current_user))
            if not deleted:
                raise not_found(record_id)
            return Reply.success()

    return router
