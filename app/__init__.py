"""
Reading Tracker API Application Package

A personal reading tracker: readers register, log in, and keep a shelf of
books with page progress, dates, notes and a 0-5 star rating.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy database connection and session management
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- models/: SQLAlchemy ORM models (User, Book)
- schemas/: Pydantic request/response schemas
- routers/: API route handlers (auth, books)
- services/: Business logic (auth, books, reading progress, security)
- utils/: Helper functions
"""

__version__ = "0.1.0"
