# tests/test_cli.py
"""Tests for the skillstake-pow command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from nacl.signing import SigningKey

from skillstake_pow.scripts import pow_cli

TASK_ID = "1700000000"


def _solve(capsys: pytest.CaptureFixture[str], *args: str) -> dict[str, str]:
    code = pow_cli.main(["solve", *args])
    assert code == pow_cli.EXIT_OK
    out = capsys.readouterr().out
    fields = {}
    for line in out.splitlines():
        key, _, value = line.partition(":")
        fields[key.strip()] = value.strip()
    return fields


def test_new_task(capsys: pytest.CaptureFixture[str]) -> None:
    assert pow_cli.main(["new-task"]) == pow_cli.EXIT_OK
    assert capsys.readouterr().out.strip().isdigit()


def test_solve_and_verify(capsys: pytest.CaptureFixture[str], wallet_b58: str) -> None:
    fields = _solve(capsys, "--wallet", wallet_b58, "--task-id", TASK_ID, "--difficulty", "6")
    assert len(fields["hash"]) == 64

    code = pow_cli.main(
        [
            "verify",
            "--wallet", wallet_b58,
            "--task-id", TASK_ID,
            "--nonce", fields["nonce"],
            "--difficulty", "6",
        ]
    )
    out = capsys.readouterr().out
    assert code == pow_cli.EXIT_OK
    assert "valid: yes" in out
    assert fields["hash"] in out


def test_solve_with_keypair(
    capsys: pytest.CaptureFixture[str], tmp_path: Path, signing_key: SigningKey, wallet_b58: str
) -> None:
    keypair = tmp_path / "id.json"
    keypair.write_text(
        json.dumps(list(bytes(signing_key) + bytes(signing_key.verify_key))), encoding="utf-8"
    )
    by_keypair = _solve(
        capsys, "--keypair", str(keypair), "--task-id", TASK_ID, "--difficulty", "4"
    )
    by_wallet = _solve(capsys, "--wallet", wallet_b58, "--task-id", TASK_ID, "--difficulty", "4")
    assert by_keypair["nonce"] == by_wallet["nonce"]


def test_verify_rejects_wrong_nonce(capsys: pytest.CaptureFixture[str], wallet_b58: str) -> None:
    code = pow_cli.main(
        [
            "verify",
            "--wallet", wallet_b58,
            "--task-id", TASK_ID,
            "--nonce", "1",
            "--difficulty", "248",
        ]
    )
    assert code == pow_cli.EXIT_FAILED
    assert "valid: no" in capsys.readouterr().out


def test_missing_wallet(capsys: pytest.CaptureFixture[str]) -> None:
    code = pow_cli.main(["solve", "--task-id", TASK_ID, "--difficulty", "1"])
    assert code == pow_cli.EXIT_USAGE
    assert "error:" in capsys.readouterr().out


def test_invalid_task_id(capsys: pytest.CaptureFixture[str], wallet_b58: str) -> None:
    code = pow_cli.main(["solve", "--wallet", wallet_b58, "--task-id", "abc"])
    assert code == pow_cli.EXIT_USAGE
    assert "positive integer" in capsys.readouterr().out
