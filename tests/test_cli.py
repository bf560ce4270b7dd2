"""
CLI integration tests

Uses Typer's CliRunner for isolated command testing.
"""

import json

import pytest
from typer.testing import CliRunner

from snowflake_ids.cli.main import app
from snowflake_ids.generator import Snowflake

EPOCH = 1_680_000_000_000


@pytest.fixture
def runner():
    """Typer CLI test runner"""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("SNOWFLAKE_NODE_ID", raising=False)
    monkeypatch.delenv("SNOWFLAKE_CUSTOM_EPOCH", raising=False)


def output_ids(result) -> list[int]:
    return [int(line) for line in result.stdout.split() if line.isdigit()]


def test_next_single(runner):
    result = runner.invoke(app, ["next", "--node-id", "7"])

    assert result.exit_code == 0
    ids = output_ids(result)
    assert len(ids) == 1
    assert Snowflake(0).parse(ids[0]).node_id == 7


def test_next_count(runner):
    result = runner.invoke(app, ["next", "--node-id", "7", "--count", "50"])

    assert result.exit_code == 0
    ids = output_ids(result)
    assert len(ids) == 50
    assert len(set(ids)) == 50
    assert ids == sorted(ids)


def test_next_json(runner):
    result = runner.invoke(app, ["next", "--node-id", "3", "-n", "2", "--json"])

    assert result.exit_code == 0
    records = json.loads(result.stdout)
    assert len(records) == 2
    assert all(r["node_id"] == 3 for r in records)
    assert [r["sequence"] for r in records] in ([0, 1], [0, 0])


def test_next_invalid_node_id(runner):
    result = runner.invoke(app, ["next", "--node-id", "1024"])

    assert result.exit_code == 1
    assert "between 0 and 1023" in result.output


def test_next_uses_environment(runner):
    result = runner.invoke(app, ["next"], env={"SNOWFLAKE_NODE_ID": "11"})

    assert result.exit_code == 0
    assert Snowflake(0).parse(output_ids(result)[0]).node_id == 11


def test_next_bad_environment(runner):
    result = runner.invoke(app, ["next"], env={"SNOWFLAKE_NODE_ID": "eleven"})

    assert result.exit_code == 1
    assert "SNOWFLAKE_NODE_ID" in result.output


def test_parse(runner):
    snowflake_id = (5 << 22) | (7 << 12) | 1
    result = runner.invoke(app, ["parse", str(snowflake_id), "--epoch", str(EPOCH)])

    assert result.exit_code == 0
    assert "Timestamp: 1680000000005" in result.stdout
    assert "2023-03-28T10:40:00.005000+00:00" in result.stdout
    assert "Node ID: 7" in result.stdout
    assert "Sequence: 1" in result.stdout


def test_parse_json(runner):
    snowflake_id = (5 << 22) | (7 << 12)
    result = runner.invoke(app, ["parse", str(snowflake_id), "--json"])

    assert result.exit_code == 0
    record = json.loads(result.stdout)
    assert record == {
        "id": snowflake_id,
        "timestamp": EPOCH + 5,
        "created_at": "2023-03-28T10:40:00.005000+00:00",
        "node_id": 7,
        "sequence": 0,
    }


def test_info(runner):
    result = runner.invoke(app, ["info", "--node-id", "7", "--epoch", "1000"])

    assert result.exit_code == 0
    assert "NodeId=7" in result.stdout
    assert "CUSTOM_EPOCH=1000" in result.stdout


def test_node_id(runner):
    result = runner.invoke(app, ["node-id", "--json"])

    assert result.exit_code == 0
    record = json.loads(result.stdout)
    assert 0 <= record["node_id"] <= 1023
    assert record["source"] in ("hardware", "random")


def test_bench(runner):
    result = runner.invoke(
        app, ["bench", "--count", "2000", "--threads", "4", "--node-id", "1"]
    )

    assert result.exit_code == 0
    assert "Generated 2000 ids on 4 thread(s)" in result.stdout
    assert "Unique: 2000/2000" in result.stdout


def test_parse_ignores_bad_node_id_environment(runner):
    snowflake_id = (5 << 22) | (7 << 12)
    result = runner.invoke(
        app, ["parse", str(snowflake_id)], env={"SNOWFLAKE_NODE_ID": "eleven"}
    )

    assert result.exit_code == 0
    assert "Node ID: 7" in result.stdout


def test_parse_uses_epoch_environment(runner):
    snowflake_id = (5 << 22) | (7 << 12)
    result = runner.invoke(
        app, ["parse", str(snowflake_id)], env={"SNOWFLAKE_CUSTOM_EPOCH": "1000"}
    )

    assert result.exit_code == 0
    assert "Timestamp: 1005" in result.stdout


def test_parse_bad_epoch_environment(runner):
    result = runner.invoke(app, ["parse", "123"], env={"SNOWFLAKE_CUSTOM_EPOCH": "soon"})

    assert result.exit_code == 1
    assert "SNOWFLAKE_CUSTOM_EPOCH" in result.output
