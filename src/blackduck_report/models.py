# blackduck_report/models.py

"""
Immutable dashboard aggregates built from the raw API records.

A ``Project`` owns its ``components`` tuple. The four severity views
partition the components by their most severe non-zero counter
(critical > high > medium > low); a component with no vulnerabilities
appears in none of them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

DIRECT_MATCH_TOKEN = "DIRECT"


@dataclass(frozen=True)
class Vulnerabilities:
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    # every counter except OK, unknown severities included
    total: int = 0

    def __post_init__(self):
        for name in ("critical", "high", "medium", "low", "total"):
            if getattr(self, name) < 0:
                raise ValueError(f"Vulnerability count '{name}' must not be negative")


@dataclass(frozen=True)
class Component:
    name: Optional[str]
    version: Optional[str]
    id: str
    vulnerabilities: Vulnerabilities = field(default_factory=Vulnerabilities)
    match_type: str = ""

    @property
    def is_direct_dependency(self) -> bool:
        return DIRECT_MATCH_TOKEN in (self.match_type or "").upper()

    @property
    def severity(self) -> Optional[str]:
        """The bucket this component belongs to, or None when it has no vulnerabilities."""
        counts = self.vulnerabilities
        if counts.critical != 0:
            return "critical"
        if counts.high != 0:
            return "high"
        if counts.medium != 0:
            return "medium"
        if counts.low != 0:
            return "low"
        return None


@dataclass(frozen=True)
class Project:
    name: Optional[str]
    version: Optional[str]
    last_updated_at: Optional[datetime] = None
    vulnerabilities: Vulnerabilities = field(default_factory=Vulnerabilities)
    components: Tuple[Component, ...] = ()

    def _bucket(self, severity: str) -> Tuple[Component, ...]:
        return tuple(c for c in self.components if c.severity == severity)

    @property
    def components_with_critical(self) -> Tuple[Component, ...]:
        return self._bucket("critical")

    @property
    def components_with_high(self) -> Tuple[Component, ...]:
        return self._bucket("high")

    @property
    def components_with_medium(self) -> Tuple[Component, ...]:
        return self._bucket("medium")

    @property
    def components_with_low(self) -> Tuple[Component, ...]:
        return self._bucket("low")

    @property
    def direct_dependencies(self) -> Tuple[Component, ...]:
        return tuple(c for c in self.components if c.is_direct_dependency)

    def __str__(self) -> str:
        return f"{self.name} ({self.version})"
