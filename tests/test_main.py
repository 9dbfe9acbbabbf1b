"""
Tests for the neweden CLI entry point.
"""

from __future__ import annotations

import json

import pytest


class TestMain:
    """Test main() dispatch and exit codes."""

    def test_route_success(self, sample_cache, capsys):
        from neweden.__main__ import main

        code = main(["route", "Jita", "Amarr", "--cache", str(sample_cache)])

        assert code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["total_jumps"] == 2
        assert output["route_mode"] == "shortest"

    def test_route_error_exit_code(self, sample_cache, capsys):
        from neweden.__main__ import main

        code = main(["route", "Jita", "Nowhere", "--cache", str(sample_cache)])

        assert code == 1
        output = json.loads(capsys.readouterr().out)
        assert output["error"] == "system_not_found"

    def test_range(self, sample_cache, capsys):
        from neweden.__main__ import main

        code = main(["range", "Jita", "1", "--cache", str(sample_cache)])

        assert code == 0
        output = json.loads(capsys.readouterr().out)
        assert [s["name"] for s in output["systems"]] == ["Jita", "Perimeter"]

    def test_no_command_shows_help(self, capsys):
        from neweden.__main__ import main

        assert main([]) == 0
        assert "Navigation Commands" in capsys.readouterr().out

    def test_version(self, capsys):
        from neweden import __version__
        from neweden.__main__ import main

        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestOutputError:
    def test_exits_with_code(self, capsys):
        from neweden.__main__ import output_error

        with pytest.raises(SystemExit) as exc_info:
            output_error("boom", error_type="command_error", command="route")

        assert exc_info.value.code == 1
        output = json.loads(capsys.readouterr().out)
        assert output["error"] == "command_error"
        assert output["command"] == "route"
        assert "query_timestamp" in output
