"""Tests for the command line interface, served from a local file:// maven."""

import json

import pytest
from click.testing import CliRunner

from conftest import MANIFEST, MCMOD_INFO, MODS_TOML, make_jar
from modversion.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def maven(tmp_path):
    """A directory laid out like CurseMaven."""
    root = tmp_path / "maven"

    def publish(project_id: int, file_id: int, jar: bytes) -> None:
        folder = root / f"O-{project_id}" / str(file_id)
        folder.mkdir(parents=True)
        (folder / f"O-{project_id}-{file_id}.jar").write_bytes(jar)

    publish(1, 10, make_jar({"META-INF/mods.toml": MODS_TOML}))
    publish(2, 20, make_jar({"mcmod.info": MCMOD_INFO.replace(b"1.2.3", b"0.9")}))
    publish(3, 30, make_jar({"assets/readme.txt": b"hello"}))
    return f"file://{root}"


def test_resolve(runner, maven):
    result = runner.invoke(main, ["resolve", "1", "10", "--base-url", maven])
    assert result.exit_code == 0
    assert result.output.strip().splitlines()[-1] == "1.2.3"


def test_resolve_not_found(runner, maven):
    result = runner.invoke(main, ["resolve", "3", "30", "--base-url", maven])
    assert result.exit_code == 1


def test_resolve_writes_cache(runner, maven, tmp_path):
    cache = tmp_path / "versions.json"
    result = runner.invoke(
        main,
        ["resolve", "2", "20", "--base-url", maven, "--cache", str(cache)],
    )
    assert result.exit_code == 0
    assert json.loads(cache.read_text())["files"] == {"2/20": "0.9"}


def test_check_json(runner, maven, tmp_path):
    config = tmp_path / "modversion.json"
    config.write_text(
        json.dumps(
            {
                "base_url": maven,
                "max_retries": 0,
                "files": [
                    {"project": 1, "file": 10, "name": "toml.jar"},
                    {"project": 2, "file": 20, "name": "legacy.jar"},
                    {"project": 3, "file": 30, "name": "empty.jar"},
                ],
            }
        )
    )
    result = runner.invoke(main, ["check", str(config), "--json"])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    start = len(lines) - 1 - lines[::-1].index("{")
    assert json.loads("\n".join(lines[start:])) == {
        "toml.jar": "1.2.3",
        "legacy.jar": "0.9",
        "empty.jar": None,
    }


def test_check_invalid_config(runner, tmp_path):
    config = tmp_path / "modversion.json"
    config.write_text(json.dumps({"files": [{"project": "x"}]}))
    result = runner.invoke(main, ["check", str(config)])
    assert result.exit_code == 1
    assert "E102" in result.output


def test_inspect(runner, tmp_path):
    jar = tmp_path / "mod.jar"
    jar.write_bytes(
        make_jar({"mcmod.info": b"[]", "META-INF/MANIFEST.MF": MANIFEST})
    )
    result = runner.invoke(main, ["inspect", str(jar)])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == "META-INF/mods.toml: -"
    assert lines[1].startswith("mcmod.info: 错误")
    assert lines[2] == "META-INF/MANIFEST.MF: 1.2.3"
    assert lines[3] == "module-info.class: -"


def test_inspect_not_a_jar(runner, tmp_path):
    jar = tmp_path / "mod.jar"
    jar.write_bytes(b"nope")
    result = runner.invoke(main, ["inspect", str(jar)])
    assert result.exit_code == 1
    assert "E400" in result.output
