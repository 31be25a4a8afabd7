"""
Tests for the GitHub GraphQL search client and node parsing.

Uses httpx.MockTransport so no request leaves the test process.
"""

import json

import httpx
import pytest

from github_search_feeds.errors import SearchError, UnsupportedNodeError
from github_search_feeds.search.graphql_client import GitHubSearchClient
from github_search_feeds.search.nodes import (
    IssueNode,
    PullRequestNode,
    RepositoryNode,
    parse_node,
)
from github_search_feeds.types import SearchType

ISSUE_NODE = {
    "__typename": "Issue",
    "url": "https://github.com/octo/repo/issues/1",
    "title": "Crash on startup",
    "createdAt": "2024-01-02T03:04:05Z",
    "updatedAt": "2024-01-03T03:04:05Z",
    "author": {
        "avatarUrl": "https://avatars.githubusercontent.com/u/1",
        "login": "octocat",
        "url": "https://github.com/octocat",
    },
    "bodyHTML": "<p>It crashes</p>",
    "labels": {"edges": [{"node": {"name": "bug"}}, {"node": {"name": "p1"}}]},
}

REPOSITORY_NODE = {
    "__typename": "Repository",
    "url": "https://github.com/oxc-project/oxc",
    "name": "oxc",
    "nameWithOwner": "oxc-project/oxc",
    "createdAt": "2023-02-01T00:00:00Z",
    "updatedAt": "2024-02-01T00:00:00Z",
    "owner": {
        "avatarUrl": "https://avatars.githubusercontent.com/u/2",
        "login": "oxc-project",
        "url": "https://github.com/oxc-project",
    },
    "description": "JavaScript tools",
    "descriptionHTML": "<div>JavaScript tools</div>",
    "repositoryTopics": {
        "edges": [
            {"node": {"topic": {"name": "javascript"}}},
            {"node": {"topic": {"name": "linter"}}},
        ]
    },
}


def search_response(*nodes) -> dict:
    return {"data": {"search": {"edges": [{"node": node} for node in nodes]}}}


def client_for(handler) -> GitHubSearchClient:
    return GitHubSearchClient(transport=httpx.MockTransport(handler))


class TestParseNode:
    """Test cases for parse_node."""

    def test_parse_issue(self):
        """Test parsing an Issue node with author and labels."""
        node = parse_node(ISSUE_NODE)

        assert isinstance(node, IssueNode)
        assert node.title == "Crash on startup"
        assert node.author is not None
        assert node.author.login == "octocat"
        assert node.labels == ["bug", "p1"]

    def test_parse_pull_request(self):
        """Test that PullRequest nodes get their own variant."""
        node = parse_node({**ISSUE_NODE, "__typename": "PullRequest"})

        assert isinstance(node, PullRequestNode)

    def test_parse_repository(self):
        """Test parsing a Repository node with topics."""
        node = parse_node(REPOSITORY_NODE)

        assert isinstance(node, RepositoryNode)
        assert node.name_with_owner == "oxc-project/oxc"
        assert node.owner is not None
        assert node.owner.login == "oxc-project"
        assert node.topics == ["javascript", "linter"]

    def test_missing_fields_are_not_errors(self):
        """Test that absent fields parse to None or empty lists."""
        node = parse_node({"__typename": "Issue"})

        assert isinstance(node, IssueNode)
        assert node.title is None
        assert node.author is None
        assert node.labels == []

    def test_null_edges_are_dropped(self):
        """Test that null edges and nodes inside connections are ignored."""
        node = parse_node(
            {
                "__typename": "Issue",
                "labels": {"edges": [None, {"node": None}, {"node": {"name": "ok"}}]},
            }
        )

        assert node.labels == ["ok"]

    def test_unknown_typename(self):
        """Test that an unsupported __typename raises UnsupportedNodeError."""
        with pytest.raises(UnsupportedNodeError, match="Discussion"):
            parse_node({"__typename": "Discussion", "title": "Q&A"})


class TestGitHubSearchClient:
    """Test cases for GitHubSearchClient.search."""

    @pytest.mark.asyncio
    async def test_search_sends_query_and_token(self):
        """Test the request payload and Authorization header."""
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["authorization"] = request.headers["Authorization"]
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=search_response(ISSUE_NODE))

        nodes = await client_for(handler).search(
            "repo:octo/repo is:issue", SearchType.ISSUE, 5, "secret-token"
        )

        assert captured["authorization"] == "token secret-token"
        assert captured["body"]["variables"] == {
            "QUERY": "repo:octo/repo is:issue",
            "TYPE": "ISSUE",
            "SIZE": 5,
        }
        assert "search(query: $QUERY, type: $TYPE, first: $SIZE)" in (
            captured["body"]["query"]
        )
        assert len(nodes) == 1
        assert isinstance(nodes[0], IssueNode)

    @pytest.mark.asyncio
    async def test_search_keeps_relevance_order(self):
        """Test that nodes are returned in response order."""

        def handler(request):
            return httpx.Response(
                200, json=search_response(REPOSITORY_NODE, ISSUE_NODE)
            )

        nodes = await client_for(handler).search("q", SearchType.ISSUE, 20, "t")

        assert [type(node) for node in nodes] == [RepositoryNode, IssueNode]

    @pytest.mark.asyncio
    async def test_empty_result_set_is_valid(self):
        """Test that a search with no matches returns an empty list."""

        def handler(request):
            return httpx.Response(200, json={"data": {"search": {"edges": []}}})

        nodes = await client_for(handler).search("q", SearchType.ISSUE, 20, "t")

        assert nodes == []

    @pytest.mark.asyncio
    async def test_http_error_raises_search_error(self):
        """Test that an HTTP error status becomes a SearchError."""

        def handler(request):
            return httpx.Response(401, json={"message": "Bad credentials"})

        with pytest.raises(SearchError, match="401"):
            await client_for(handler).search("q", SearchType.ISSUE, 20, "bad")

    @pytest.mark.asyncio
    async def test_graphql_errors_raise_search_error(self):
        """Test that GraphQL errors in a 200 response become a SearchError."""

        def handler(request):
            return httpx.Response(
                200,
                json={"data": None, "errors": [{"message": "Invalid search type"}]},
            )

        with pytest.raises(SearchError, match="Invalid search type"):
            await client_for(handler).search("q", SearchType.ISSUE, 20, "t")

    @pytest.mark.asyncio
    async def test_missing_search_result_raises(self):
        """Test that a response without a search result set is a failure."""

        def handler(request):
            return httpx.Response(200, json={"data": {"search": None}})

        with pytest.raises(SearchError, match="Can not search"):
            await client_for(handler).search("q", SearchType.ISSUE, 20, "t")

    @pytest.mark.asyncio
    async def test_transport_error_raises_search_error(self):
        """Test that connection failures become a SearchError."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(SearchError, match="Search request failed"):
            await client_for(handler).search("q", SearchType.ISSUE, 20, "t")

    @pytest.mark.asyncio
    async def test_timeout_raises_search_error(self):
        """Test that a timeout becomes a SearchError."""

        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(SearchError, match="timed out"):
            await client_for(handler).search("q", SearchType.ISSUE, 20, "t")

    @pytest.mark.asyncio
    async def test_unsupported_node_type_propagates(self):
        """Test that an unrequested node type fails the search."""

        def handler(request):
            return httpx.Response(
                200, json=search_response({"__typename": "Discussion"})
            )

        with pytest.raises(UnsupportedNodeError):
            await client_for(handler).search("q", SearchType.DISCUSSION, 20, "t")
