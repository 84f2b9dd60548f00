from __future__ import annotations

import json
from pathlib import Path

import msgspec
from typer.testing import CliRunner

from hellwire.cli import app
from hellwire.replay import dump_replay_file, load_replay_file
from hellwire.wire import generate


def test_generate_prints_control_points_as_json() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["generate", "--profile", "mobile", "--seed", "5", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["profile"] == "mobile"
    assert payload["seed"] == 5
    assert payload["points"] == generate(5, "mobile").to_pairs(ndigits=4)


def test_generate_defaults_to_the_profile_seed() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["generate"])

    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines()[0] == "Wire desktop seed=1337 (170 points)"


def test_generate_rejects_unknown_profile() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["generate", "--profile", "tablet"])

    assert result.exit_code != 0


def test_simulate_records_a_replay_that_verifies(tmp_path: Path) -> None:
    replay_path = tmp_path / "run.hwreplay.gz"
    runner = CliRunner()

    result = runner.invoke(
        app,
        [
            "simulate",
            "--max-steps",
            "600",
            "--record",
            str(replay_path),
            "--base-dir",
            str(tmp_path),
        ],
    )

    assert result.exit_code == 0, result.output
    assert replay_path.is_file()
    lines = result.stdout.splitlines()
    fingerprint = next(line for line in lines if line.startswith("fingerprint="))
    assert fingerprint == f"fingerprint={load_replay_file(replay_path).fingerprint}"

    verify = runner.invoke(app, ["replay", "verify", str(replay_path)])
    assert verify.exit_code == 0, verify.output
    assert f"ok {fingerprint}" in verify.stdout


def test_simulate_trace_writes_a_log(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["simulate", "--profile", "mobile", "--max-steps", "120", "--trace", "--base-dir", str(tmp_path)],
    )

    assert result.exit_code == 0, result.output
    logs = list((tmp_path / "logs").glob("hellwire-pid*.log"))
    assert len(logs) == 1
    text = logs[0].read_text(encoding="utf-8")
    assert "event=init" in text
    assert "source=simulate" in text


def test_replay_verify_fails_on_mismatch(tmp_path: Path) -> None:
    replay_path = tmp_path / "run.hwreplay.gz"
    runner = CliRunner()
    recorded = runner.invoke(app, ["simulate", "--max-steps", "400", "--record", str(replay_path), "--base-dir", str(tmp_path)])
    assert recorded.exit_code == 0, recorded.output

    replay = load_replay_file(replay_path)
    dump_replay_file(replay_path, msgspec.structs.replace(replay, fingerprint="f" * 16))

    result = runner.invoke(app, ["replay", "verify", str(replay_path)])
    assert result.exit_code == 1

    partial = runner.invoke(app, ["replay", "verify", str(replay_path), "--max-steps", "10"])
    assert partial.exit_code == 0, partial.output
    assert partial.stdout.startswith("steps=10 ")


def test_replay_verify_reports_missing_and_corrupt_files(tmp_path: Path) -> None:
    runner = CliRunner()

    missing = runner.invoke(app, ["replay", "verify", str(tmp_path / "nope.hwreplay.gz")])
    assert missing.exit_code == 1

    corrupt = tmp_path / "corrupt.hwreplay.gz"
    corrupt.write_bytes(b"garbage")
    result = runner.invoke(app, ["replay", "verify", str(corrupt)])
    assert result.exit_code == 1


def test_simulate_puts_bare_record_names_under_the_replay_dir(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["simulate", "--profile", "mobile", "--max-steps", "60", "--record", "quick", "--base-dir", str(tmp_path)],
    )

    assert result.exit_code == 0, result.output
    expected = tmp_path / "replays" / "quick.hwreplay.gz"
    assert expected.is_file()
    assert f"replay: {expected}" in result.stdout


def test_replay_verify_warns_about_other_builds_but_still_verifies(tmp_path: Path) -> None:
    replay_path = tmp_path / "run.hwreplay.gz"
    runner = CliRunner()
    recorded = runner.invoke(app, ["simulate", "--max-steps", "120", "--record", str(replay_path), "--base-dir", str(tmp_path)])
    assert recorded.exit_code == 0, recorded.output

    replay = load_replay_file(replay_path)
    header = msgspec.structs.replace(replay.header, game_version="0.0.1")
    dump_replay_file(replay_path, msgspec.structs.replace(replay, header=header))

    result = runner.invoke(app, ["replay", "verify", str(replay_path)])
    assert result.exit_code == 0, result.output
    assert "warning: replay recorded by hellwire '0.0.1'" in result.output
    assert "ok fingerprint=" in result.output
