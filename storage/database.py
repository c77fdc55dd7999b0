"""
MongoDB persistence for authors, books and users using async motor.
Handles connection, indexing, id sequences and the per-entity stores.
"""

from typing import Dict, Iterable, List, Optional

import structlog
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import ConnectionFailure, DuplicateKeyError

from .models import Author, AuthorCreate, Book, BookCreate, User, from_document

logger = structlog.get_logger(__name__)


class DuplicateUserError(Exception):
    """Raised when a username is already taken."""


class MongoDatabase:
    """
    Async MongoDB manager.
    Owns the motor client and hands out the database the stores work on.
    """

    def __init__(self, connection_url: str, database_name: str):
        """
        Initialize MongoDB manager.

        Args:
            connection_url: MongoDB connection URL
            database_name: Name of the database
        """
        self.connection_url = connection_url
        self.database_name = database_name
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> AsyncIOMotorDatabase:
        """Establish connection to MongoDB and make sure indexes exist."""
        try:
            self.client = AsyncIOMotorClient(self.connection_url)
            self.database = self.client[self.database_name]

            await self.client.admin.command('ping')
            logger.info("Successfully connected to MongoDB", database=self.database_name)

            await self.create_indexes()
            return self.database

        except ConnectionFailure as e:
            logger.error("Failed to connect to MongoDB", error=str(e))
            raise

    async def disconnect(self) -> None:
        """Close MongoDB connection."""
        if self.client:
            self.client.close()
            logger.info("Disconnected from MongoDB")

    async def create_indexes(self) -> None:
        """Create indexes for lookups and uniqueness."""
        try:
            await self.database.users.create_index("username", unique=True)
            await self.database.books.create_index("author_id")
            logger.info("Successfully created MongoDB indexes")
        except Exception as e:
            logger.error("Failed to create indexes", error=str(e))
            raise

    async def health_check(self) -> Dict:
        """
        Perform database health check.

        Returns:
            Dictionary with health status
        """
        try:
            await self.database.command("ping")
            return {
                "status": "healthy",
                "books_count": await self.database.books.count_documents({}),
                "authors_count": await self.database.authors.count_documents({}),
            }
        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            return {
                "status": "unhealthy",
                "error": str(e)
            }


async def next_sequence_value(database: AsyncIOMotorDatabase, name: str) -> int:
    """
    Atomically allocate the next integer id for an entity.

    Sequences start at 1 and only grow, so ids never get reused and
    sorting by id gives insertion order.
    """
    counter = await database.counters.find_one_and_update(
        {"_id": name},
        {"$inc": {"seq": 1}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return counter["seq"]


class AuthorStore:
    """Create-only persistence of authors."""

    def __init__(self, database: AsyncIOMotorDatabase):
        self.database = database
        self.collection = database.authors

    async def create(self, author: AuthorCreate) -> Author:
        author_id = await next_sequence_value(self.database, "authors")
        document = {"_id": author_id, **author.model_dump()}
        await self.collection.insert_one(document)
        logger.debug("Author created", author_id=author_id)
        return from_document(Author, document)

    async def get_many(self, author_ids: Iterable[int]) -> Dict[int, Author]:
        """Fetch several authors at once, keyed by id."""
        ids = list(set(author_ids))
        if not ids:
            return {}
        cursor = self.collection.find({"_id": {"$in": ids}})
        documents = await cursor.to_list(length=len(ids))
        return {document["_id"]: from_document(Author, document) for document in documents}

    async def count(self) -> int:
        return await self.collection.count_documents({})


class BookStore:
    """Persistence of books, each linked to one author."""

    def __init__(self, database: AsyncIOMotorDatabase):
        self.database = database
        self.collection = database.books

    async def create(self, book: BookCreate) -> Book:
        book_id = await next_sequence_value(self.database, "books")
        document = {"_id": book_id, **book.model_dump()}
        await self.collection.insert_one(document)
        logger.debug("Book created", book_id=book_id, author_id=book.author_id)
        return from_document(Book, document)

    async def list(self, limit: int, offset: int = 0) -> List[Book]:
        """
        List books in insertion order.

        Args:
            limit: Maximum number of books to return; 0 returns nothing
            offset: Number of books to skip

        Returns:
            List of books
        """
        # MongoDB treats limit(0) as "no limit"
        if limit <= 0:
            return []
        cursor = self.collection.find({}).sort("_id", 1).skip(offset).limit(limit)
        documents = await cursor.to_list(length=limit)
        return [from_document(Book, document) for document in documents]

    async def delete(self, book_id: int) -> bool:
        """
        Delete a book.

        Returns:
            True if a book was deleted, False if none had that id
        """
        result = await self.collection.delete_one({"_id": book_id})
        deleted = result.deleted_count == 1
        if deleted:
            logger.debug("Book deleted", book_id=book_id)
        return deleted

    async def count(self) -> int:
        return await self.collection.count_documents({})


class UserStore:
    """Lookup of the users allowed to mutate books."""

    def __init__(self, database: AsyncIOMotorDatabase):
        self.database = database
        self.collection = database.users

    async def create(self, username: str) -> User:
        user_id = await next_sequence_value(self.database, "users")
        user = User(id=user_id, username=username)
        document = user.model_dump()
        document["_id"] = document.pop("id")
        try:
            await self.collection.insert_one(document)
        except DuplicateKeyError:
            logger.warning("Username already exists", username=username)
            raise DuplicateUserError(username)
        logger.info("User created", user_id=user_id, username=username)
        return user

    async def get(self, user_id: int) -> Optional[User]:
        document = await self.collection.find_one({"_id": user_id})
        if document is None:
            return None
        return from_document(User, document)

    async def list(self) -> List[User]:
        cursor = self.collection.find({}).sort("_id", 1)
        documents = await cursor.to_list(length=None)
        return [from_document(User, document) for document in documents]
