"""
API Module

FastAPI application and route handlers.

Package Structure:
==================
    api/
    ├── main.py           ← Application entry point
    ├── routes.py         ← Route registration
    ├── dependencies/     ← FastAPI dependencies
    ├── handlers/         ← Route handlers and the generic resource router
    └── middleware/       ← Exception handlers and request context

Usage:
======
    # Run the API
    uvicorn locket.api.main:app --reload

    # Import the app
    from locket.api.main import app, create_application
"""
