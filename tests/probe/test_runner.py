"""Tests for toolchain capability probing."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from errgen.probe import (
    BACKTRACE_PROBE,
    DEFAULT_PROBES,
    Probe,
    ProbeEnvironment,
    ProbeOptions,
    build_command,
    compile_probe,
    run_probes,
    validate_probe,
)


class FakeCompiler:
    """Records invocations and exits with a status chosen per snippet file."""

    def __init__(self, statuses: dict[str, int] | None = None, default: int = 0) -> None:
        self.statuses = statuses or {}
        self.default = default
        self.calls: list[list[str]] = []

    def __call__(self, args):  # type: ignore[no-untyped-def]
        self.calls.append(list(args))
        probe_file = Path(next(arg for arg in args if arg.endswith(".rs")))
        return self.statuses.get(probe_file.name, self.default)


def _env(tmp_path: Path, **overrides: str) -> ProbeEnvironment:
    values = {"rustc": "/toolchain/bin/rustc", "out_dir": str(tmp_path)}
    values.update(overrides)
    return ProbeEnvironment(**values)


def test_environment_snapshot_reads_cargo_variables() -> None:
    env = ProbeEnvironment.from_environ(
        {
            "RUSTC": "rustc",
            "OUT_DIR": "/out",
            "RUSTC_WRAPPER": "sccache",
            "TARGET": "x86_64-unknown-linux-gnu",
            "CARGO_ENCODED_RUSTFLAGS": "-Dwarnings\x1f--cap-lints=warn",
            "UNRELATED": "1",
        }
    )
    assert env == ProbeEnvironment(
        rustc="rustc",
        out_dir="/out",
        wrapper="sccache",
        target="x86_64-unknown-linux-gnu",
        encoded_rustflags="-Dwarnings\x1f--cap-lints=warn",
    )
    assert env.rustflags() == ["-Dwarnings", "--cap-lints=warn"]


def test_environment_snapshot_treats_empty_values_as_unset() -> None:
    env = ProbeEnvironment.from_environ({"RUSTC": "", "OUT_DIR": "/out", "RUSTC_WRAPPER": ""})
    assert env.rustc is None
    assert env.wrapper is None


def test_build_command_plain_invocation(tmp_path: Path) -> None:
    probe_file = tmp_path / "probe.rs"
    args = build_command(_env(tmp_path), probe_file)
    assert args == [
        "/toolchain/bin/rustc",
        "--edition=2018",
        "--crate-name=errgen_build",
        "--crate-type=lib",
        "--emit=metadata",
        "--out-dir",
        str(tmp_path),
        str(probe_file),
    ]


def test_build_command_with_wrapper_target_and_flags(tmp_path: Path) -> None:
    env = _env(
        tmp_path,
        wrapper="/usr/bin/sccache",
        target="aarch64-apple-darwin",
        encoded_rustflags="-C\x1fopt-level=2\x1f--cfg=foo",
    )
    args = build_command(env, tmp_path / "probe.rs", ProbeOptions(edition="2021", crate_name="x"))

    assert args[:2] == ["/usr/bin/sccache", "/toolchain/bin/rustc"]
    assert "--edition=2021" in args and "--crate-name=x" in args
    assert args[-5:] == ["--target", "aarch64-apple-darwin", "-C", "opt-level=2", "--cfg=foo"]


def test_build_command_ignores_empty_flag_list(tmp_path: Path) -> None:
    args = build_command(_env(tmp_path, encoded_rustflags=""), tmp_path / "probe.rs")
    assert args[-1] == str(tmp_path / "probe.rs")


@pytest.mark.parametrize("missing", ["rustc", "out_dir"])
def test_compile_probe_without_toolchain_returns_none(tmp_path: Path, missing: str) -> None:
    compiler = FakeCompiler()
    env = _env(tmp_path, **{missing: None})  # type: ignore[arg-type]

    assert compile_probe("fn main() {}", env, runner=compiler) is None
    assert compiler.calls == []


def test_compile_probe_writes_snippet_and_returns_status(tmp_path: Path) -> None:
    compiler = FakeCompiler(default=1)

    status = compile_probe("pub struct S;", _env(tmp_path), runner=compiler)

    assert status == 1
    assert (tmp_path / "probe.rs").read_text(encoding="utf-8") == "pub struct S;"
    assert compiler.calls[0][-1] == str(tmp_path / "probe.rs")


def test_compile_probe_unwritable_scratch_dir_returns_none(tmp_path: Path) -> None:
    compiler = FakeCompiler()
    env = _env(tmp_path, out_dir=str(tmp_path / "missing" / "dir"))

    assert compile_probe("pub struct S;", env, runner=compiler) is None
    assert compiler.calls == []


def test_compile_probe_launch_failure_returns_none(tmp_path: Path) -> None:
    def runner(args):  # type: ignore[no-untyped-def]
        raise FileNotFoundError(args[0])

    assert compile_probe("pub struct S;", _env(tmp_path), runner=runner) is None


def test_validate_probe_uses_a_file_per_probe(tmp_path: Path) -> None:
    compiler = FakeCompiler()
    assert validate_probe(BACKTRACE_PROBE, _env(tmp_path), runner=compiler)
    assert (tmp_path / "probe_has_backtrace.rs").read_text(encoding="utf-8") == BACKTRACE_PROBE.snippet


def test_run_probes_emits_one_gate_per_success(tmp_path: Path) -> None:
    compiler = FakeCompiler(statuses={"probe_provide_any.rs": 1})
    emitted: list[str] = []

    enabled = run_probes(DEFAULT_PROBES, _env(tmp_path), emit=emitted.append, runner=compiler)

    assert enabled == ["has_backtrace"]
    assert emitted == ["cargo:rustc-cfg=has_backtrace"]
    assert len(compiler.calls) == 2


def test_run_probes_without_environment_emits_nothing(tmp_path: Path) -> None:
    emitted: list[str] = []
    enabled = run_probes(DEFAULT_PROBES, ProbeEnvironment(), emit=emitted.append)
    assert enabled == []
    assert emitted == []


def test_run_probes_prints_directives_by_default(tmp_path: Path, capsys) -> None:
    probes = [Probe("first", "a"), Probe("second", "b")]
    run_probes(probes, _env(tmp_path), runner=FakeCompiler())
    assert capsys.readouterr().out.splitlines() == [
        "cargo:rustc-cfg=first",
        "cargo:rustc-cfg=second",
    ]


def test_run_probes_with_invalid_compiler_path(tmp_path: Path) -> None:
    emitted: list[str] = []
    env = _env(tmp_path, rustc=str(tmp_path / "no-such-rustc"))

    enabled = run_probes(DEFAULT_PROBES, env, emit=emitted.append)

    assert enabled == []
    assert emitted == []


@pytest.mark.skipif(shutil.which("rustc") is None, reason="rustc not installed")
def test_backtrace_probe_compiles_with_real_toolchain(tmp_path: Path) -> None:
    emitted: list[str] = []
    env = _env(tmp_path, rustc=shutil.which("rustc") or "rustc")

    run_probes([BACKTRACE_PROBE, Probe("broken", "fn {")], env, emit=emitted.append)

    assert emitted == ["cargo:rustc-cfg=has_backtrace"]


def test_run_probes_emits_a_repeated_name_once(tmp_path: Path) -> None:
    compiler = FakeCompiler()
    emitted: list[str] = []

    enabled = run_probes(
        [Probe("g", "a"), Probe("g", "b")], _env(tmp_path), emit=emitted.append, runner=compiler
    )

    assert enabled == ["g"]
    assert emitted == ["cargo:rustc-cfg=g"]
    assert len(compiler.calls) == 1
    assert (tmp_path / "probe_g.rs").read_text(encoding="utf-8") == "a"
