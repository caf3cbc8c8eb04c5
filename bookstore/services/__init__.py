"""
Services Package

Business logic kept separate from HTTP handling:

- books.py: Create, read, update and delete single books
- catalog.py: Paginated, sorted, filtered catalog queries
- rate_limiter.py: Rate limiting with slowapi
"""
