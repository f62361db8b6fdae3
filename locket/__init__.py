"""
Locket Backend

REST API for media lockets: users upload photos tagged past or present,
link items across eras and draw a present item at random.

Package Structure:
==================
    locket/
    ├── api/        ← FastAPI application
    ├── shared/     ← Shared code (models, repositories, services, etc.)
    └── config/     ← Configuration

Running the Application:
========================
    uvicorn locket.api.main:app --reload
"""
