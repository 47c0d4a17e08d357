"""
GraphQL request context.
"""

from strawberry.fastapi import BaseContext

from postr.db import DatabaseAdapter
from postr_api.dependencies import AdapterDep
from postr_api.graphql.loaders import Loaders


class GraphQLContext(BaseContext):
    """
    Context passed to every resolver as info.context.

    Carries the services (through the loaders) and the DataLoaders for one
    request.
    """

    def __init__(self, adapter: DatabaseAdapter):
        super().__init__()
        self.adapter = adapter
        self.loaders = Loaders(adapter)
        self.users = self.loaders.users
        self.categories = self.loaders.categories
        self.posts = self.loaders.posts
        self.comments = self.loaders.comments


async def get_context(adapter: AdapterDep) -> GraphQLContext:
    """FastAPI dependency building the context from the app's adapter."""
    return GraphQLContext(adapter)
