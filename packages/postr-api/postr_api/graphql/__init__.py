"""
GraphQL API (Strawberry), mounted at /graphql.
"""

from typing import Optional

from strawberry.fastapi import GraphQLRouter

from postr.config import PostrConfig
from postr_api.graphql.context import GraphQLContext, get_context
from postr_api.graphql.schema import create_schema


def create_graphql_router(config: Optional[PostrConfig] = None) -> GraphQLRouter:
    """Router serving queries, mutations and GraphiQL at its root."""
    return GraphQLRouter(create_schema(config), context_getter=get_context)


__all__ = ["GraphQLContext", "create_graphql_router", "create_schema"]
