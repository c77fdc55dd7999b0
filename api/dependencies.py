"""
FastAPI dependencies exposing the services created in the application lifespan.
"""

from fastapi import Request

from api.tokens import TokenService
from jobs.dispatcher import JobDispatcher
from storage.database import AuthorStore, BookStore, UserStore


def get_author_store(request: Request) -> AuthorStore:
    return request.app.state.author_store


def get_book_store(request: Request) -> BookStore:
    return request.app.state.book_store


def get_user_store(request: Request) -> UserStore:
    return request.app.state.user_store


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_job_dispatcher(request: Request) -> JobDispatcher:
    return request.app.state.job_dispatcher
