"""
Base Repository

Generic data access for one resource type. Every resource served by the
generic router is backed by a subclass of BaseRepository; the router needs
nothing else to expose list, get, create, update, delete, search, filter and
pagination for it.

What This Provides:
===================
- get(id)                        → Fetch single record by UUID
- store(fields)                  → Create a record
- update(id, fields)             → Apply a partial update
- destroy(id)                    → Hard delete
- search_by_field(field, term)   → Case-insensitive substring match
- filter_by_exact_fields(map)    → Every field must match exactly (AND)
- paginate(page, limit)          → 0-indexed page of records
- list() / count()               → Lower-level helpers used by the above

Ownership:
==========
Each repository declares how its records relate to users:

    ownership = Ownership.OWNED     owner_field = "user_id"   (devices, media)
    ownership = Ownership.SELF      owner_field = "id"        (users)
    ownership = Ownership.UNOWNED   owner_field = None        (global lookups)

Read operations accept an optional owner_id. When it is given and the
repository is not UNOWNED, results are restricted to records whose
owner_field equals it. The repository never decides who the owner is; the
router passes the authenticated user's id.

Field Whitelists:
=================
    searchable_fields  - string columns allowed in search_by_field()
    filterable_fields  - columns allowed in filter_by_exact_fields()

Anything else raises ValidationError, which keeps columns such as
password_hash out of reach of query strings.

flush() vs commit():
====================
Repository methods flush so the request's session sees their effects; the
get_db() dependency commits once the handler returns.
"""

from typing import Any, ClassVar, Generic, List, Mapping, Optional, Type, TypeVar
from uuid import UUID

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import Select, String, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from locket.shared.core.exceptions import ValidationError
from locket.shared.models.base import Base
from locket.shared.models.enums import Ownership


# TypeVar bound to Base ensures we only work with SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing the resource operations.

    Type Parameter:
        ModelType: The SQLAlchemy model class this repository manages

    Class Attributes:
        ownership: How records relate to users
        owner_field: Column holding the owner id (None when UNOWNED)
        searchable_fields: Columns allowed in substring search
        filterable_fields: Columns allowed in exact-match filters

    Example:
        class DeviceRepository(BaseRepository[Device]):
            ownership = Ownership.OWNED
            owner_field = "user_id"
            searchable_fields = ("name", "identifier")

            def __init__(self, session: AsyncSession):
                super().__init__(Device, session)
    """

    ownership: ClassVar[Ownership] = Ownership.UNOWNED
    owner_field: ClassVar[Optional[str]] = None
    searchable_fields: ClassVar[tuple[str, ...]] = ()
    filterable_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        """
        Initialize the repository.

        Args:
            model: SQLAlchemy model class (e.g., User, Device, Media)
            session: Async database session from get_db()
        """
        self.model = model
        self.session = session

    @property
    def is_owned(self) -> bool:
        """True when records are scoped to a user."""
        return self.ownership is not Ownership.UNOWNED

    # ═══════════════════════════════════════════════════════════════════════════
    # QUERY HELPERS
    # ═══════════════════════════════════════════════════════════════════════════

    def _scoped(self, query: Select, owner_id: Optional[UUID]) -> Select:
        """Restrict a query to one owner when the resource is owned."""
        if owner_id is None or not self.is_owned:
            return query
        return query.where(getattr(self.model, self.owner_field) == owner_id)

    def _ordered(self, query: Select) -> Select:
        """Stable order for listings: oldest first, ties broken by id."""
        order = []
        if hasattr(self.model, "created_at"):
            order.append(self.model.created_at)
        order.append(self.model.id)
        return query.order_by(*order)

    def _coerce(self, field: str, value: Any) -> Any:
        """
        Convert a query-string value to the Python type of a column.

        Raises:
            ValidationError: If the value does not fit the column type
        """
        column = self.model.__table__.columns[field]
        try:
            python_type = column.type.python_type
        except NotImplementedError:
            return value
        try:
            return TypeAdapter(python_type).validate_python(value)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid value for field '{field}'",
                details={"field": field, "errors": e.errors()},
            ) from e

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: UUID, owner_id: Optional[UUID] = None) -> Optional[ModelType]:
        """
        Get a single record by its UUID.

        Args:
            record_id: The UUID of the record to fetch
            owner_id: When given, the record must also belong to this owner

        Returns:
            The model instance if found (and owned), None otherwise

        SQL Generated:
            SELECT * FROM devices WHERE id = '...' AND user_id = '...'
        """
        query = self._scoped(select(self.model).where(self.model.id == record_id), owner_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def list(
        self,
        *,
        owner_id: Optional[UUID] = None,
        filters: Optional[Mapping[str, Any]] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[ModelType]:
        """
        List records, optionally owner-scoped and filtered by equality.

        Filters are applied as given; callers validate field names first.

        Args:
            owner_id: Restrict to one owner
            filters: Dict of field=value for WHERE clauses
            offset: Number of records to skip
            limit: Maximum records to return (None for all)

        Returns:
            List of model instances in stable order
        """
        query = self._scoped(select(self.model), owner_id)

        for field, value in (filters or {}).items():
            query = query.where(getattr(self.model, field) == value)

        query = self._ordered(query).offset(offset)
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self, owner_id: Optional[UUID] = None) -> int:
        """
        Count records, optionally for a single owner.

        SQL Generated:
            SELECT COUNT(*) FROM media WHERE user_id = '...'
        """
        query = self._scoped(select(sql_count()).select_from(self.model), owner_id)
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def search_by_field(
        self,
        field: str,
        term: str,
        owner_id: Optional[UUID] = None,
    ) -> List[ModelType]:
        """
        Case-insensitive substring search on one whitelisted string column.

        Args:
            field: Column name, must be in searchable_fields
            term: Substring to look for; % and _ are matched literally
            owner_id: Restrict to one owner

        Returns:
            Matching records

        Raises:
            ValidationError: If field is not searchable

        SQL Generated:
            SELECT * FROM devices
            WHERE lower(name) LIKE '%' || lower('kitch') || '%' ESCAPE '/'
        """
        if field not in self.searchable_fields:
            raise ValidationError(f"Field '{field}' is not searchable", details={"field": field})

        column = getattr(self.model, field)
        if not isinstance(column.type, String):
            raise ValidationError(f"Field '{field}' is not searchable", details={"field": field})

        query = self._scoped(select(self.model), owner_id)
        query = self._ordered(query.where(column.icontains(term, autoescape=True)))

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def filter_by_exact_fields(
        self,
        fields: Mapping[str, Any],
        owner_id: Optional[UUID] = None,
    ) -> List[ModelType]:
        """
        Records whose every given field equals the given value.

        Values may arrive as strings from a query string; each is coerced to
        its column's Python type before comparison.

        Args:
            fields: Mapping of column name to expected value
            owner_id: Restrict to one owner

        Returns:
            Matching records (all records when fields is empty)

        Raises:
            ValidationError: On a non-filterable field or uncoercible value
        """
        filters: dict[str, Any] = {}
        for field, value in fields.items():
            if field not in self.filterable_fields:
                raise ValidationError(
                    f"Field '{field}' cannot be filtered on",
                    details={"field": field},
                )
            filters[field] = self._coerce(field, value)

        return await self.list(owner_id=owner_id, filters=filters)

    async def paginate(
        self,
        page: int,
        limit: int,
        owner_id: Optional[UUID] = None,
    ) -> List[ModelType]:
        """
        One page of records, 0-indexed.

        With 25 records and limit=10, pages 0, 1, 2 hold 10, 10 and 5 records
        and page 3 is empty. A page that starts past the last record returns []
        without running the page query, so huge page numbers never reach
        OFFSET.

        Raises:
            ValidationError: If page is negative or limit is below 1
        """
        if page < 0:
            raise ValidationError("Page must be zero or greater", details={"page": page})
        if limit < 1:
            raise ValidationError("Limit must be at least 1", details={"limit": limit})

        offset = page * limit
        if offset >= await self.count(owner_id=owner_id):
            return []

        return await self.list(owner_id=owner_id, offset=offset, limit=limit)

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def store(self, fields: Mapping[str, Any]) -> ModelType:
        """
        Create a new record.

        Args:
            fields: Column values for the new record

        Returns:
            The created instance with DB-generated values loaded

        Raises:
            ValidationError: If a field does not exist on the model

        SQL Generated:
            INSERT INTO devices (id, user_id, name, ...) VALUES (...)
        """
        unknown = [field for field in fields if field not in self.model.__table__.columns]
        if unknown:
            raise ValidationError("Unknown fields", details={"fields": unknown})

        instance = self.model(**fields)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(
        self,
        record_id: UUID,
        fields: Mapping[str, Any],
        owner_id: Optional[UUID] = None,
    ) -> Optional[ModelType]:
        """
        Apply a partial update.

        None values are skipped, as are the id and owner columns.

        Returns:
            Updated instance, or None if not found (or not owned)
        """
        instance = await self.get(record_id, owner_id=owner_id)
        if not instance:
            return None

        protected = {"id", self.owner_field}
        for field, value in fields.items():
            if field in protected or value is None:
                continue
            if field not in self.model.__table__.columns:
                raise ValidationError("Unknown fields", details={"fields": [field]})
            setattr(instance, field, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def destroy(self, record_id: UUID, owner_id: Optional[UUID] = None) -> bool:
        """
        Hard delete a record.

        Returns:
            True if deleted, False if not found (or not owned)

        SQL Generated:
            DELETE FROM devices WHERE id = '...'
        """
        instance = await self.get(record_id, owner_id=owner_id)
        if not instance:
            return False

        await self.session.delete(instance)
        await self.session.flush()
        return True
