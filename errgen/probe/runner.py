"""Compile probe snippets with the active Rust toolchain.

Every failure path (missing environment, unwritable scratch directory,
compiler that cannot be launched or rejects the snippet) collapses to
"gate absent". Nothing here raises for a failed probe.
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Mapping, Optional, Sequence, Set

from ..logging import get_logger
from .snippets import DEFAULT_PROBES, Probe

FLAG_SEPARATOR = "\x1f"

CommandRunner = Callable[[Sequence[str]], int]

_logger = get_logger("probe")


@dataclass(frozen=True)
class ProbeOptions:
    """Fixed parts of the probe compiler invocation."""

    edition: str = "2018"
    crate_name: str = "errgen_build"


@dataclass(frozen=True)
class ProbeEnvironment:
    """Snapshot of the build-script environment variables a probe reads."""

    rustc: Optional[str] = None
    out_dir: Optional[str] = None
    wrapper: Optional[str] = None
    target: Optional[str] = None
    encoded_rustflags: Optional[str] = None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "ProbeEnvironment":
        source = os.environ if environ is None else environ
        return cls(
            rustc=source.get("RUSTC") or None,
            out_dir=source.get("OUT_DIR") or None,
            wrapper=source.get("RUSTC_WRAPPER") or None,
            # Empty TARGET is treated as unset, unlike cargo's var_os passthrough.
            target=source.get("TARGET") or None,
            encoded_rustflags=source.get("CARGO_ENCODED_RUSTFLAGS"),
        )

    def rustflags(self) -> List[str]:
        if not self.encoded_rustflags:
            return []
        return self.encoded_rustflags.split(FLAG_SEPARATOR)


def build_command(
    env: ProbeEnvironment,
    probe_file: Path,
    options: ProbeOptions | None = None,
) -> List[str]:
    """Return the argv that type-checks ``probe_file`` as a library crate."""
    if env.rustc is None or env.out_dir is None:
        raise ValueError("RUSTC and OUT_DIR are required to build a probe command")
    options = options or ProbeOptions()

    # A wrapper receives the real compiler path as its first argument.
    args = [env.wrapper, env.rustc] if env.wrapper else [env.rustc]
    args.extend(
        [
            f"--edition={options.edition}",
            f"--crate-name={options.crate_name}",
            "--crate-type=lib",
            "--emit=metadata",
            "--out-dir",
            env.out_dir,
            str(probe_file),
        ]
    )
    if env.target:
        args.extend(["--target", env.target])
    args.extend(env.rustflags())
    return args


def compile_probe(
    snippet: str,
    env: ProbeEnvironment,
    *,
    filename: str = "probe.rs",
    options: ProbeOptions | None = None,
    runner: CommandRunner | None = None,
) -> Optional[int]:
    """Compile ``snippet`` and return the compiler's exit status.

    Returns ``None`` when the probe could not be attempted at all.
    """
    if env.rustc is None or env.out_dir is None:
        return None
    probe_file = Path(env.out_dir) / filename
    try:
        probe_file.write_text(snippet, encoding="utf-8")
    except OSError:
        return None

    args = build_command(env, probe_file, options)
    run = runner or _call_quietly
    try:
        return run(args)
    except OSError:
        return None


def validate_probe(
    probe: Probe,
    env: ProbeEnvironment,
    *,
    options: ProbeOptions | None = None,
    runner: CommandRunner | None = None,
) -> bool:
    """Return True when the toolchain accepts the probe's snippet."""
    status = compile_probe(
        probe.snippet,
        env,
        filename=f"probe_{probe.name}.rs",
        options=options,
        runner=runner,
    )
    if status is None:
        _logger.debug("Probe %s skipped: toolchain unavailable", probe.name)
        return False
    _logger.debug("Probe %s exited with status %d", probe.name, status)
    return status == 0


def run_probes(
    probes: Iterable[Probe] = DEFAULT_PROBES,
    env: ProbeEnvironment | None = None,
    *,
    options: ProbeOptions | None = None,
    emit: Callable[[str], object] = print,
    runner: CommandRunner | None = None,
) -> List[str]:
    """Run each probe in turn and emit a cargo cfg directive for each success."""
    env = env or ProbeEnvironment.from_environ()
    enabled: List[str] = []
    attempted: Set[str] = set()
    for probe in probes:
        if probe.name in attempted:
            _logger.warning("Skipping duplicate probe %s", probe.name)
            continue
        attempted.add(probe.name)
        if validate_probe(probe, env, options=options, runner=runner):
            emit(f"cargo:rustc-cfg={probe.name}")
            enabled.append(probe.name)
    _logger.info("Enabled gates: %s", ", ".join(enabled) if enabled else "(none)")
    return enabled


def _call_quietly(args: Sequence[str]) -> int:
    return subprocess.call(list(args), stderr=subprocess.DEVNULL)


__all__ = [
    "FLAG_SEPARATOR",
    "ProbeEnvironment",
    "ProbeOptions",
    "build_command",
    "compile_probe",
    "run_probes",
    "validate_probe",
]
