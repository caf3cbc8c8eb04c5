"""
Online Bookstore Package

Backend API and client library for the bookstore catalog, admin pages
and shopping cart.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy database connection and session management
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- exceptions.py: Domain errors shared by server and client
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Business logic (catalog queries, book CRUD, rate limiting)
- client/: API client, catalog view state and shopping cart
"""

__version__ = "1.0.0"
