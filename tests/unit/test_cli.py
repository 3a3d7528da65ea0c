"""
Tests for the blockvars CLI.
"""

import json

import pytest
from click.testing import CliRunner
from loguru import logger

from blockvars.cli import cli


@pytest.fixture
def runner():
    yield CliRunner()
    # The CLI reconfigures loguru sinks
    logger.remove()


def write_json(path, data):
    path.write_text(json.dumps(data))
    return str(path)


class TestReconcileCommand:
    """Test `blockvars reconcile`."""

    def test_reconcile(self, runner, tmp_path):
        """Types are reconciled and printed as JSON."""
        document = write_json(
            tmp_path / "doc.json",
            {
                "sites": [
                    {"types": {"x": ["Number"], "list": ["Array"]}},
                    {"types": {"x": ["Number"], "list": ["Array:String"]}},
                ]
            },
        )

        result = runner.invoke(cli, ["reconcile", document])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"x": ["Number"], "list": ["Array:String"]}

    def test_equivalences_option(self, runner, tmp_path):
        """An equivalence file lets equivalent types agree."""
        document = write_json(
            tmp_path / "doc.json",
            {"sites": [{"types": {"n": ["Int"]}}, {"types": {"n": ["Number"]}}]},
        )
        table = write_json(tmp_path / "types.json", {"Int": ["Number"]})

        result = runner.invoke(cli, ["reconcile", document, "--equivalences", table])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"n": ["Number"]}

    def test_conflicts_reported(self, runner, tmp_path):
        """Conflicts and untyped variables are reported on stderr."""
        document = write_json(
            tmp_path / "doc.json",
            {
                "sites": [
                    {"types": {"x": ["Number"]}, "variables": [{"name": "y", "type": ""}]},
                    {"types": {"x": ["String"]}},
                ]
            },
        )

        result = runner.invoke(cli, ["reconcile", document])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"x": ["Var"]}
        assert "No type information: y" in result.stderr
        assert "Conflicts: 1" in result.stderr

    def test_missing_file(self, runner, tmp_path):
        """A missing document is a usage error."""
        result = runner.invoke(cli, ["reconcile", str(tmp_path / "missing.json")])
        assert result.exit_code != 0


class TestUniqueNameCommand:
    """Test `blockvars unique-name`."""

    def test_empty(self, runner):
        """No names in use gives 'i'."""
        result = runner.invoke(cli, ["unique-name"])
        assert result.output.strip() == "i"

    def test_used_names(self, runner):
        """Used names are skipped."""
        result = runner.invoke(cli, ["unique-name", "i", "J", "k"])
        assert result.output.strip() == "m"
