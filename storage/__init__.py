"""
MongoDB storage for the books service.
"""

from .database import AuthorStore, BookStore, DuplicateUserError, MongoDatabase, UserStore

__all__ = ["AuthorStore", "BookStore", "DuplicateUserError", "MongoDatabase", "UserStore"]
