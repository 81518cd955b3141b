"""
Test Suite for the Reading Tracker API

Test Organization:
- conftest.py: Shared fixtures (test database, client, users, tokens, books)
- test_progress.py / test_dates.py: Pure helpers (status, percentage, dates)
- test_security.py: Password hashing and JWT tokens
- test_config.py: Settings validation
- test_auth_service.py / test_book_service.py: Service rules without HTTP
- test_auth.py: /api/auth endpoints
- test_books.py: /api/books endpoints
- test_main.py: Root, health and error handling

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""
