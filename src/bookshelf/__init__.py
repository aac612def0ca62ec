"""Bookshelf API.

A small FastAPI service exposing CRUD endpoints for book records stored
through SQLModel.
"""

__version__ = "0.1.0"
