"""
Test Suite for the Online Bookstore

Test Organization:
- conftest.py: Shared fixtures (test database, clients, sample data)
- test_books.py: Tests for /api/Books endpoints
- test_catalog.py: Catalog paging/sorting/filtering rules (database and in-memory)
- test_cart.py: Shopping cart and local storage
- test_resolver.py: API endpoint resolution
- test_client.py: BookstoreClient against the in-process API and in sample-data mode
- test_catalog_view.py: Catalog view state and stale-response handling
- test_config.py: Settings parsing and validation

Running Tests:
    # Install with test dependencies
    pip install -e ".[test]"

    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_cart.py

    # Run with verbose output
    pytest -v
"""
