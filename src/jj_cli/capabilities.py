"""Build capabilities that gate whole command families.

A capability corresponds to an optional build feature. Commands requiring a
capability that is not enabled are left out of the command-line schema
entirely, as if they had never been written.

The set of enabled capabilities is resolved once per process. The defaults
mirror a standard build; ``JJ_CLI_FEATURES`` selects a different set, the
same way a packager would pick build features:

    JJ_CLI_FEATURES=git,bench jj --help
    JJ_CLI_FEATURES= jj --help        # no optional features
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from jj_cli.exceptions import ConfigError

logger = logging.getLogger(__name__)

FEATURES_ENV_VAR = "JJ_CLI_FEATURES"


class Capability(Enum):
    """Optional build features."""

    GIT = "git"
    BENCH = "bench"


# Features enabled in a standard build
DEFAULT_FEATURES: frozenset[Capability] = frozenset({Capability.GIT})


@dataclass(frozen=True)
class CapabilitySet:
    """Immutable set of enabled capabilities."""

    enabled: frozenset[Capability] = DEFAULT_FEATURES

    @classmethod
    def from_names(cls, names: Iterable[str]) -> CapabilitySet:
        """Build a set from feature names, ignoring blanks.

        Raises:
            ConfigError: If a name is not a known feature.
        """
        enabled: set[Capability] = set()
        for name in names:
            name = name.strip().lower()
            if not name:
                continue
            try:
                enabled.add(Capability(name))
            except ValueError:
                raise ConfigError(
                    f"Unknown feature '{name}'",
                    context={"variable": FEATURES_ENV_VAR},
                    suggestions=[f"Known features: {', '.join(c.value for c in Capability)}"],
                ) from None
        return cls(frozenset(enabled))

    @classmethod
    def all(cls) -> CapabilitySet:
        return cls(frozenset(Capability))

    @classmethod
    def none(cls) -> CapabilitySet:
        return cls(frozenset())

    def __contains__(self, capability: object) -> bool:
        return capability in self.enabled

    def satisfies(self, requirement: Capability | None) -> bool:
        """Return True if a descriptor with this requirement is compiled in."""
        return requirement is None or requirement in self.enabled

    def names(self) -> list[str]:
        return sorted(c.value for c in self.enabled)


def resolve_capabilities(environ: Mapping[str, str] | None = None) -> CapabilitySet:
    """Resolve the enabled capabilities from the environment.

    Args:
        environ: Environment mapping (default: ``os.environ``)

    Returns:
        The build defaults, or the features listed in ``JJ_CLI_FEATURES``
        when that variable is set (an empty value disables all features).
    """
    if environ is None:
        environ = os.environ

    raw = environ.get(FEATURES_ENV_VAR)
    if raw is None:
        capabilities = CapabilitySet()
    else:
        capabilities = CapabilitySet.from_names(raw.split(","))

    logger.debug("Enabled features: %s", ", ".join(capabilities.names()) or "(none)")
    return capabilities


@functools.lru_cache(maxsize=1)
def active_capabilities() -> CapabilitySet:
    """Return the process-wide capability set, resolving it on first use."""
    return resolve_capabilities()
