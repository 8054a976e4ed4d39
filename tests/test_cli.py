import json

import pytest
from click.testing import CliRunner

from dmk.cli import cli


@pytest.fixture()
def runner():
    return CliRunner()


@pytest.fixture()
def spec_file(tmp_path):
    path = tmp_path / "update.yml"
    path.write_text(
        "$set:\n"
        "  owner: alice\n"
        "  notes: hello\n"
        "$inc:\n"
        "  shapes.0.radius: 2\n",
        encoding="utf-8",
    )
    return path


def test_map_update(runner, spec_file):
    result = runner.invoke(cli, ["map", "-u", str(spec_file), "-e", "tests.models:Drawing"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {
        "$set": {"owner_id": "alice", "n": "hello"},
        "$inc": {"shapes.0.radius": 2},
    }


def test_map_without_entity_keeps_paths(runner, spec_file):
    result = runner.invoke(cli, ["map", "-u", str(spec_file)])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["$set"] == {"owner": "alice", "notes": "hello"}


def test_map_query(runner, tmp_path):
    path = tmp_path / "query.json"
    path.write_text('{"owner": "alice", "$or": [{"notes": "a"}]}', encoding="utf-8")

    result = runner.invoke(cli, ["map", "--query", "-u", str(path), "-e", "tests.models:Drawing"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"owner_id": "alice", "$or": [{"n": "a"}]}


def test_map_rejects_non_mapping_specification(runner, tmp_path):
    path = tmp_path / "update.yml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    result = runner.invoke(cli, ["map", "-u", str(path)])

    assert result.exit_code == 1


def test_map_requires_existing_specification(runner, tmp_path):
    result = runner.invoke(cli, ["map", "-u", str(tmp_path / "missing.yml")])

    assert result.exit_code == 2


def test_describe(runner):
    result = runner.invoke(cli, ["describe", "-e", "tests.models:Drawing"])

    assert result.exit_code == 0, result.output
    assert "owner_id" in result.output
    assert "_class" in result.output


def test_describe_unknown_entity(runner):
    result = runner.invoke(cli, ["describe", "-e", "tests.models:Missing"])

    assert result.exit_code == 1
