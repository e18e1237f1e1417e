"""
FastAPI RESTful API for the Books catalog.

This package provides:
- CRUD endpoints for the books resource
- Request body validation against create and update schemas
- A data access object issuing parameterized SQL
- Uniform JSON error responses
"""
