"""Data models for resolved identities and the dependency graph."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class Ecosystem(Enum):
    """Enum for supported ecosystems."""
    MAVEN = "Maven"


@dataclass(frozen=True)
class Identity:
    """Graph key for one resolved component; equal iff all three fields match."""
    ecosystem: Ecosystem
    name: str
    revision: str

    def __str__(self) -> str:
        return f"{self.ecosystem.value}+{self.name}${self.revision}"

    def to_dict(self) -> Dict[str, str]:
        return {
            "type": self.ecosystem.value,
            "name": self.name,
            "revision": self.revision,
        }


@dataclass(frozen=True)
class Import:
    """One entry of the direct dependency list."""
    resolved: Identity


@dataclass
class Package:
    """A known component.

    ``dependencies_known`` is False when only the identity was observed and the
    component's own dependencies were never inspected, so an empty ``imports``
    list does not mean "no dependencies".
    """
    id: Identity
    imports: List[Import] = field(default_factory=list)
    dependencies_known: bool = False


@dataclass
class DependencyGraph:
    """Direct imports in scan order plus every known package keyed by identity."""
    direct: List[Import] = field(default_factory=list)
    transitive: Dict[Identity, Package] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form; transitive entries keep insertion order."""
        return {
            "direct": [imp.resolved.to_dict() for imp in self.direct],
            "transitive": [
                {
                    "id": pkg.id.to_dict(),
                    "imports": [imp.resolved.to_dict() for imp in pkg.imports],
                    "dependenciesKnown": pkg.dependencies_known,
                }
                for pkg in self.transitive.values()
            ],
        }
