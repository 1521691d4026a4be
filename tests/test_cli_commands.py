from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from sigkit import default_registry
from sigkit_cli import main as cli_main
import sigkit_signature


@pytest.fixture(autouse=True)
def clean_default_registry():
    default_registry().reset()
    yield
    default_registry().reset()


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


def test_list_types(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli_main.app, ["list-types"])
    assert result.exit_code == 0
    lines = [line for line in result.output.splitlines() if line.startswith("- ")]
    assert len(lines) == 8
    assert lines[0].startswith("- type.sigkit.dev/sigkit.EcdsaPrivateKey")
    assert all("new keys: yes" in line for line in lines)


def test_list_types_is_repeatable(cli_runner: CliRunner) -> None:
    assert cli_runner.invoke(cli_main.app, ["list-types"]).exit_code == 0
    assert cli_runner.invoke(cli_main.app, ["list-types"]).exit_code == 0


def test_config_json(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli_main.app, ["config", "--json"])
    assert result.exit_code == 0
    doc = json.loads(result.output)
    assert doc["config_name"] == "SIGNATURE"
    assert [e["type_url"] for e in doc["entries"]] == [e.type_url for e in sigkit_signature.latest().entries]


def test_config_text(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli_main.app, ["config"])
    assert result.exit_code == 0
    assert "config: SIGNATURE" in result.output
    assert result.output.count("new_key_allowed=True") == 8


def test_templates(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli_main.app, ["templates"])
    assert result.exit_code == 0
    assert "- ed25519" in result.output
    assert "- rsa-pss" in result.output


@pytest.mark.parametrize("name", ["ed25519", "ecdsa-p256", "ecdsa-p256-ieee", "ed25519-raw"])
def test_demo(cli_runner: CliRunner, name: str) -> None:
    result = cli_runner.invoke(cli_main.app, ["demo", name, "--message", "hi"])
    assert result.exit_code == 0
    assert f"[SIG] {name}: verify=True" in result.output


def test_demo_rsa_honours_bits_override(cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIGKIT_RSA_BITS", "2048")
    result = cli_runner.invoke(cli_main.app, ["demo", "rsa-pkcs1"])
    assert result.exit_code == 0
    # 5-byte prefix + 256-byte RSA-2048 signature
    assert "261 byte signature" in result.output


def test_demo_unknown_template(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli_main.app, ["demo", "nope"])
    assert result.exit_code == 1
