from __future__ import annotations

import json
from pathlib import Path

import typer

from .geom import Rect
from .paths import REPLAY_SUFFIX, default_runtime_dir, resolve_replay_path

app = typer.Typer(add_completion=False)
replay_app = typer.Typer(add_completion=False)
app.add_typer(replay_app, name="replay")


def _resolve_profile_option(value: str):
    from .profiles import device_profile_from_value

    profile = device_profile_from_value(value)
    if profile is None:
        raise typer.BadParameter(f"unknown profile {value!r} (desktop|mobile)", param_hint="--profile")
    return profile


@app.command("generate")
def cmd_generate(
    profile: str = typer.Option("desktop", "--profile", help="desktop|mobile"),
    seed: int | None = typer.Option(None, help="wire seed (default: the profile's seed)"),
    ndigits: int = typer.Option(4, help="round coordinates to N digits"),
    as_json: bool = typer.Option(False, "--json", help="print control points as JSON"),
) -> None:
    """Print the normalized control points of a generated wire."""
    from .profiles import profile_tuning
    from .wire import generate

    resolved = _resolve_profile_option(profile)
    if seed is None:
        seed = int(profile_tuning(resolved).default_seed)
    path = generate(int(seed), resolved)
    pairs = path.to_pairs(ndigits=ndigits)
    if as_json:
        typer.echo(json.dumps({"profile": resolved.label, "seed": int(seed), "points": pairs}))
        return
    typer.echo(f"Wire {resolved.label} seed={seed} ({len(pairs)} points)")
    for idx, (x, y) in enumerate(pairs):
        typer.echo(f"{idx:02d}  x={x:.{ndigits}f}  y={y:.{ndigits}f}")


@app.command("simulate")
def cmd_simulate(
    profile: str = typer.Option("desktop", "--profile", help="desktop|mobile"),
    seed: int | None = typer.Option(None, help="wire seed (default: the profile's seed)"),
    runtime_seed: int = typer.Option(0xBEEF, help="seed for sabotage, morph and jitter draws"),
    width: float = typer.Option(1280.0, min=1.0, help="playfield width in pixels"),
    height: float = typer.Option(720.0, min=1.0, help="playfield height in pixels"),
    tick_rate: int = typer.Option(60, min=1, help="fixed steps per second"),
    max_steps: int = typer.Option(60 * 90, min=1, help="stop after N steps"),
    lookahead: float = typer.Option(24.0, help="autopilot lookahead along the wire, in pixels"),
    record: Path | None = typer.Option(None, "--record", help=f"write a replay ({REPLAY_SUFFIX})"),
    trace: bool = typer.Option(False, "--trace", help="write a trace log under the runtime dir"),
    base_dir: Path = typer.Option(
        default_runtime_dir(),
        "--runtime-dir",
        "--base-dir",
        help="base path for runtime files (default: per-user data dir; override with HELLWIRE_RUNTIME_DIR)",
    ),
) -> None:
    """Run a headless session driven by the autopilot and print the outcome."""
    from .autopilot import Autopilot
    from .debug_log import close_debug_log, init_debug_log
    from .replay import RecordingSession, dump_replay_file
    from .sim import FixedStepClock, WireSession
    from .sim.events import StepEventKind
    from .sim.phase import PhaseKind

    resolved = _resolve_profile_option(profile)
    try:
        pilot = Autopilot(lookahead=lookahead)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--lookahead") from exc

    trace_path = None
    if trace:
        trace_path = init_debug_log(base_dir=Path(base_dir), seed=int(seed or 0), profile=resolved.label, source="simulate")
    try:
        session = WireSession.build(
            bounds=Rect(0.0, 0.0, float(width), float(height)),
            profile=resolved,
            seed=seed,
            runtime_seed=int(runtime_seed),
        )
        run = RecordingSession.wrap(session, runtime_seed=int(runtime_seed))
        clock = FixedStepClock(tick_rate=int(tick_rate))
        run.start(clock.now)
        for _ in range(int(max_steps)):
            dt, now = clock.advance()
            run.step(dt, now, pilot.snapshot(session))
            if session.phase.kind in (PhaseKind.OVER, PhaseKind.WON):
                break
        replay = run.finish()
    finally:
        if trace_path is not None:
            close_debug_log()

    strike_count = sum(1 for kind in run.outcomes if kind in (StepEventKind.STRIKE, StepEventKind.RECATCH_FAILED))
    sabotage_count = sum(1 for kind in run.outcomes if kind is StepEventKind.SABOTAGE)
    morph_count = sum(1 for kind in run.outcomes if kind is StepEventKind.MORPH)
    total = float(session.polyline.total_length)
    fraction = float(session.best_progress) / total if total > 0.0 else 0.0

    typer.echo(f"phase={session.phase.kind.name.lower()} steps={clock.tick} elapsed={session.elapsed:.2f}s")
    typer.echo(f"strikes={session.strikes}/{session.config.max_strikes} (charged={strike_count})")
    typer.echo(f"progress={fraction * 100.0:.1f}% best={session.best_progress:.1f}px total={total:.1f}px")
    typer.echo(f"sabotage={sabotage_count} morph={morph_count}")
    typer.echo(f"fingerprint={replay.fingerprint}")
    if record is not None:
        record_path = resolve_replay_path(Path(record), base_dir=Path(base_dir))
        dump_replay_file(record_path, replay)
        typer.echo(f"replay: {record_path}")
    if trace_path is not None:
        typer.echo(f"trace: {trace_path}")


@replay_app.command("verify")
def cmd_replay_verify(
    replay_file: Path = typer.Argument(..., help=f"replay file path ({REPLAY_SUFFIX})"),
    max_steps: int | None = typer.Option(None, help="only report progress after N steps (skips the fingerprint check)"),
) -> None:
    """Re-run a replay headlessly and compare its final fingerprint."""
    from .replay import (
        ReplayCodecError,
        ReplayRunnerError,
        header_version_note,
        load_replay_file,
        run_replay,
        verify_replay,
    )

    path = Path(replay_file)
    if not path.is_file():
        typer.echo(f"replay file not found: {path}", err=True)
        raise typer.Exit(code=1)
    try:
        replay = load_replay_file(path)
    except ReplayCodecError as exc:
        typer.echo(f"invalid replay: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    note = header_version_note(replay.header)
    if note is not None:
        typer.echo(f"warning: {note}", err=True)

    try:
        if max_steps is not None:
            _session, run = run_replay(replay, max_steps=max_steps)
            typer.echo(
                f"steps={run.steps} phase={run.phase.name.lower()} strikes={run.strikes} "
                f"progress={run.progress_fraction * 100.0:.1f}% fingerprint={run.fingerprint}"
            )
            return
        result = verify_replay(replay)
    except ReplayRunnerError as exc:
        typer.echo(f"replay failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    run = result.run
    typer.echo(
        f"steps={run.steps} phase={run.phase.name.lower()} strikes={run.strikes} "
        f"progress={run.progress_fraction * 100.0:.1f}%"
    )
    if not result.ok:
        typer.echo(f"fingerprint mismatch: expected={result.expected} actual={result.actual}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"ok fingerprint={result.actual}")


def main(argv: list[str] | None = None) -> None:
    app(prog_name="hellwire", args=argv)


if __name__ == "__main__":
    main()
