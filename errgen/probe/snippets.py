"""Built-in toolchain capability probes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Probe:
    """A configuration gate and the source that must compile to enable it."""

    name: str
    snippet: str


# Exercises the surface area expected of the Provider API. If it compiles,
# generated code may use providers for backtrace support.
PROVIDE_ANY_PROBE = Probe(
    name="provide_any",
    snippet="""
    #![feature(provide_any)]

    use std::any::{Demand, Provider};

    fn _f<'a, P: Provider>(p: &'a P, demand: &mut Demand<'a>) {
        p.provide(demand);
    }
""",
)

# Checks that std::backtrace::Backtrace is available.
BACKTRACE_PROBE = Probe(
    name="has_backtrace",
    snippet="""
    use std::backtrace::Backtrace;

    fn _f() -> Backtrace {
        Backtrace::capture()
    }
""",
)

DEFAULT_PROBES: Tuple[Probe, ...] = (PROVIDE_ANY_PROBE, BACKTRACE_PROBE)

__all__ = ["BACKTRACE_PROBE", "DEFAULT_PROBES", "PROVIDE_ANY_PROBE", "Probe"]
