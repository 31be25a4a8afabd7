"""
Tests for the command line entry point and settings.
"""

from unittest.mock import AsyncMock, patch

import pytest

from github_search_feeds import cli
from github_search_feeds.errors import ConfigurationError, SearchError
from github_search_feeds.orchestrator import RunSummary
from github_search_feeds.settings import Settings


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        github_token="secret-token",
        output_dir=tmp_path / "dist",
        log_dir=tmp_path / "logs",
    )


class TestSettings:
    """Test cases for Settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        settings = Settings(_env_file=None)

        assert settings.default_result_limit == 20
        assert settings.github_graphql_url == "https://api.github.com/graphql"
        assert settings.noreply_host == "github.com"

    def test_token_from_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")

        assert Settings(_env_file=None).require_token() == "env-token"

    def test_missing_token_raises(self, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)

        with pytest.raises(ConfigurationError, match="GITHUB_TOKEN"):
            Settings(_env_file=None).require_token()


class TestMain:
    """Test cases for cli.main exit status."""

    @pytest.fixture(autouse=True)
    def quiet_logging(self):
        """Keep cli.main from attaching handlers to the package logger."""
        with (
            patch.object(cli, "setup_logging") as mock_setup_logging,
            patch.object(cli, "load_dotenv"),
        ):
            yield mock_setup_logging

    def test_success_returns_zero(self, settings):
        """Test that a completed run exits 0."""
        with (
            patch.object(cli, "get_settings", return_value=settings),
            patch.object(
                cli, "generate_feeds", new=AsyncMock(return_value=RunSummary())
            ) as mock_generate,
        ):
            assert cli.main([]) == 0

        mock_generate.assert_awaited_once_with(settings, cli.SEARCH_QUERIES, None)

    def test_skipped_searches_still_exit_zero(self, settings):
        """Test that failing searches are skipped without failing the run."""
        with (
            patch.object(cli, "get_settings", return_value=settings),
            patch.object(cli, "GitHubSearchClient") as mock_client,
        ):
            mock_client.return_value.search = AsyncMock(
                side_effect=SearchError("Bad credentials")
            )

            assert cli.main([]) == 0

        assert mock_client.return_value.search.await_count == len(cli.SEARCH_QUERIES)
        assert (settings.output_dir / "index.html").exists()
        assert (settings.output_dir / "index.opml").exists()
        assert not (settings.output_dir / "oxc-issues.json").exists()
        assert not (settings.output_dir / "oxc-issues.rss").exists()

    def test_output_dir_argument(self, settings, tmp_path):
        """Test that --output-dir is passed through."""
        with (
            patch.object(cli, "get_settings", return_value=settings),
            patch.object(
                cli, "generate_feeds", new=AsyncMock(return_value=RunSummary())
            ) as mock_generate,
        ):
            cli.main(["--output-dir", str(tmp_path / "public")])

        assert mock_generate.await_args.args[2] == tmp_path / "public"

    def test_missing_token_exits_non_zero(self, tmp_path):
        """Test that a missing token aborts the whole run with status 1."""
        no_token = Settings(_env_file=None, github_token="", output_dir=tmp_path)

        with (
            patch.object(cli, "get_settings", return_value=no_token),
            patch.object(cli, "GitHubSearchClient") as mock_client,
        ):
            assert cli.main([]) == 1

        mock_client.assert_not_called()

    def test_unexpected_error_exits_non_zero(self, settings):
        """Test that errors escaping the orchestrator give status 1."""
        with (
            patch.object(cli, "get_settings", return_value=settings),
            patch.object(
                cli, "generate_feeds", new=AsyncMock(side_effect=OSError("boom"))
            ),
        ):
            assert cli.main([]) == 1


class TestGenerateFeeds:
    """Test cases for generate_feeds wiring."""

    @pytest.mark.asyncio
    async def test_orchestrator_configured_from_settings(self, settings):
        """Test that settings flow into the client, writer and orchestrator."""
        with patch.object(cli, "FeedOrchestrator") as mock_orchestrator:
            mock_orchestrator.return_value.run = AsyncMock(return_value=RunSummary())

            await cli.generate_feeds(settings, [])

        kwargs = mock_orchestrator.call_args.kwargs
        assert kwargs["token"] == "secret-token"
        assert kwargs["default_result_limit"] == 20
        assert kwargs["writer"].output_dir == settings.output_dir
        assert kwargs["search_client"].url == "https://api.github.com/graphql"
        mock_orchestrator.return_value.run.assert_awaited_once_with([])
