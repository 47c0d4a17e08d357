"""
FastAPI dependencies.

The adapter is created once by the application lifespan and stored on
app.state; handlers receive it (and services built on it) by injection.
"""

from typing import Annotated

from fastapi import Depends, Request

from postr.config import PostrConfig
from postr.db import DatabaseAdapter
from postr.services import CategoryService, CommentService, PostService, UserService


def get_adapter(request: Request) -> DatabaseAdapter:
    """The application's database adapter."""
    return request.app.state.adapter


def get_config(request: Request) -> PostrConfig:
    """The configuration the application was created with."""
    return request.app.state.config


AdapterDep = Annotated[DatabaseAdapter, Depends(get_adapter)]
ConfigDep = Annotated[PostrConfig, Depends(get_config)]


def get_user_service(adapter: AdapterDep) -> UserService:
    return UserService(adapter)


def get_category_service(adapter: AdapterDep) -> CategoryService:
    return CategoryService(adapter)


def get_post_service(adapter: AdapterDep) -> PostService:
    return PostService(adapter)


def get_comment_service(adapter: AdapterDep) -> CommentService:
    return CommentService(adapter)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
PostServiceDep = Annotated[PostService, Depends(get_post_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
