"""
Utilities Package

Contents:
=========
- security: Password hashing and JWT management

Usage:
======
    from locket.shared.utils.security import SecurityUtils
"""

from locket.shared.utils.security import SecurityUtils

__all__ = [
    "SecurityUtils",
]
