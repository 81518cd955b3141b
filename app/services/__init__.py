"""
Services Package

This package contains business logic services that are:
- Separate from HTTP handling (routers)
- Reusable across different parts of the application (API, seed script)
- Easier to test in isolation

Current services:
- auth.py: Registration, login, profile and token verification
- base.py: Shared session handling and storage error translation
- books.py: Book ownership, validation, progress and rating
- exceptions.py: Error taxonomy mapped to HTTP status codes in main.py
- progress.py: Reading status and percentage calculations
- security.py: Password hashing and JWT utilities
"""
