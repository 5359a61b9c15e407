"""Build-time detection of optional toolchain features."""

from __future__ import annotations

from .runner import (
    ProbeEnvironment,
    ProbeOptions,
    build_command,
    compile_probe,
    run_probes,
    validate_probe,
)
from .snippets import BACKTRACE_PROBE, DEFAULT_PROBES, PROVIDE_ANY_PROBE, Probe

__all__ = [
    "BACKTRACE_PROBE",
    "DEFAULT_PROBES",
    "PROVIDE_ANY_PROBE",
    "Probe",
    "ProbeEnvironment",
    "ProbeOptions",
    "build_command",
    "compile_probe",
    "run_probes",
    "validate_probe",
]
