"""
GitHub GraphQL Search Client

Runs one search query against the GitHub GraphQL API and returns the
result nodes as typed variants.
"""

import logging
from typing import Any

import httpx

from ..errors import SearchError
from ..types import SearchType
from .nodes import RawResultNode, parse_node

logger = logging.getLogger(__name__)

GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"

SEARCH_QUERY = """
query($QUERY: String!, $TYPE: SearchType!, $SIZE: Int!) {
    search(query: $QUERY, type: $TYPE, first: $SIZE) {
        edges {
            node {
                __typename
                ... on Repository {
                    url
                    name
                    nameWithOwner
                    createdAt
                    updatedAt
                    owner {
                        avatarUrl
                        login
                        url
                    }
                    description
                    descriptionHTML
                    repositoryTopics(first: 10) {
                        edges {
                            node {
                                topic {
                                    name
                                }
                            }
                        }
                    }
                }
                ... on PullRequest {
                    url
                    title
                    createdAt
                    updatedAt
                    author {
                        avatarUrl
                        login
                        url
                    }
                    bodyHTML
                    labels(first: 10) {
                        edges {
                            node {
                                name
                            }
                        }
                    }
                }
                ... on Issue {
                    url
                    title
                    createdAt
                    updatedAt
                    author {
                        avatarUrl
                        login
                        url
                    }
                    bodyHTML
                    labels(first: 10) {
                        edges {
                            node {
                                name
                            }
                        }
                    }
                }
            }
        }
    }
}
"""


class GitHubSearchClient:
    """Async client for the GitHub GraphQL search endpoint."""

    def __init__(
        self,
        url: str = GITHUB_GRAPHQL_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def search(
        self,
        query: str,
        result_type: SearchType,
        limit: int,
        token: str,
    ) -> list[RawResultNode]:
        """
        Search GitHub and return the matching nodes in relevance order.

        Args:
            query: GitHub search syntax, e.g. "repo:owner/name is:issue"
            result_type: GraphQL SearchType to search for
            limit: Maximum number of results to return
            token: GitHub token, sent as the Authorization header only

        Returns:
            Typed result nodes. An empty list when nothing matched.

        Raises:
            SearchError: If the request fails, GitHub reports errors, or the
                response carries no search result set
            UnsupportedNodeError: If GitHub returns a node type the search
                query does not request
        """
        payload = {
            "query": SEARCH_QUERY,
            "variables": {
                "QUERY": query,
                "TYPE": SearchType(result_type).value,
                "SIZE": limit,
            },
        }
        headers = {
            "Accept": "application/json",
            "Authorization": f"token {token}",
        }

        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self.transport
        ) as client:
            try:
                response = await client.post(self.url, json=payload, headers=headers)
                response.raise_for_status()
            except httpx.TimeoutException as e:
                raise SearchError(f"Search request timed out: {query}") from e
            except httpx.HTTPStatusError as e:
                raise SearchError(
                    f"Search API returned status {e.response.status_code}: {e.response.text}"
                ) from e
            except httpx.HTTPError as e:
                raise SearchError(f"Search request failed: {e}") from e

        try:
            data: dict[str, Any] = response.json()
        except ValueError as e:
            raise SearchError(f"Search API returned invalid JSON for: {query}") from e

        if data.get("errors"):
            messages = "; ".join(
                str(error.get("message", error)) for error in data["errors"]
            )
            raise SearchError(f"Search API returned errors: {messages}")

        search = (data.get("data") or {}).get("search")
        if search is None:
            raise SearchError(f"Can not search: {query}")

        edges = search.get("edges") or []
        nodes = [
            parse_node(edge["node"]) for edge in edges if edge and edge.get("node")
        ]

        logger.debug(f"Search returned {len(nodes)} nodes for: {query}")
        return nodes
