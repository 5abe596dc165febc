"""
GraphQL Router
Integración de strawberry con FastAPI.
"""
from strawberry.fastapi import GraphQLRouter

from agrogestion.graphql.context import get_context
from agrogestion.graphql.schema import schema

graphql_router = GraphQLRouter(
    schema,
    context_getter=get_context,
    graphql_ide="graphiql",
)
