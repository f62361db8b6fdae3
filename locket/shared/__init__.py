"""
Shared Module

Everything below the HTTP layer:
- Models: SQLAlchemy ORM models
- Repositories: Data access layer with owner scoping
- Services: Business logic layer (auth, media, linking)
- Schemas: Pydantic request/response models and the reply envelope
- Core: Logging, exceptions
- Adapters: Payload storage backends

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── db/             ← Database session management
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── services/       ← Business logic
    ├── schemas/        ← Pydantic schemas
    ├── adapters/       ← Storage backends
    └── utils/          ← Password hashing and tokens

Usage:
======
    from locket.shared.models import Media, MediaLink
    from locket.shared.repositories import MediaRepository
    from locket.shared.services import MediaService
    from locket.shared.schemas import Reply, MediaResponse
    from locket.shared.core import logger, LocketException
"""
