"""Unit tests for the command line."""

import argparse
import json
from unittest.mock import AsyncMock, patch

import pytest

from .cli import build_parser, list_filters, main, parse_filter_args
from .errors import AuthRequiredError


def describe_parse_filter_args():

    def it_builds_single_key_mappings():
        assert parse_filter_args(["language=Python", "content=a=b"]) == [
            {"language": "Python"},
            {"content": "a=b"},
        ]

    def it_rejects_missing_equals():
        with pytest.raises(argparse.ArgumentTypeError):
            parse_filter_args(["language"])


def describe_list_filters():

    def it_combines_scope_and_file_filters():
        args = build_parser().parse_args(
            ["list", "--user", "octocat", "--since", "2017-07-01T00:00:00Z", "--filter", "type=text"]
        )
        assert list_filters(args) == [
            {"userName": "octocat"},
            {"since": "2017-07-01T00:00:00Z"},
            {"type": "text"},
        ]

    def it_rejects_two_scopes_at_parse_time():
        with pytest.raises(SystemExit):
            build_parser().parse_args(["list", "--starred", "--public"])


def describe_main():

    def it_prints_results_as_json(capsys):
        with patch("gist_client.cli.run", new=AsyncMock(return_value=[{"id": "1"}])):
            assert main(["list", "--public"]) == 0
        assert json.loads(capsys.readouterr().out) == [{"id": "1"}]

    def it_reports_client_errors(capsys):
        error = AuthRequiredError("GET /gists")
        with patch("gist_client.cli.run", new=AsyncMock(side_effect=error)):
            assert main(["list"]) == 1
        assert "token is required" in capsys.readouterr().err

    def it_prints_help_without_command(capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out

    def it_reports_unreadable_files_before_any_request(tmp_path, capsys):
        run = AsyncMock()
        with patch("gist_client.cli.run", new=run):
            assert main(["--token", "t", "create", str(tmp_path / "missing.py")]) == 1
        run.assert_not_called()
        assert "missing.py" in capsys.readouterr().err

    def it_passes_file_contents_to_create(tmp_path, capsys):
        source = tmp_path / "hello.py"
        source.write_text("print('hi')\n")
        run = AsyncMock(return_value={"id": "new"})
        with patch("gist_client.cli.run", new=run):
            assert main(["--token", "t", "create", str(source)]) == 0
        args = run.call_args.args[0]
        assert args.file_contents == {"hello.py": "print('hi')\n"}
        assert json.loads(capsys.readouterr().out) == {"id": "new"}
