"""
Business Logic Services

Services encapsulate business logic and coordinate between repositories,
external services, and domain rules.

Service Pattern:
================
    Handler → Service → Repository → Database
                ↘ Storage adapter

Available Services:
===================
- AuthService: User registration and authentication
- LinkingService: Era-aware, idempotent media linking
- MediaService: Upload, retrieval, deletion, links, present-media selection

Generic resources (users, devices) need no service: the resource router
talks to their repositories directly.
"""

from locket.shared.services.auth_service import AuthService
from locket.shared.services.linking_service import LinkingService
from locket.shared.services.media_service import MediaService

__all__ = [
    "AuthService",
    "LinkingService",
    "MediaService",
]
