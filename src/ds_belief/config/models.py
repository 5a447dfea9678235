from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping

from ds_belief.belief.assignment import MassAssignment
from ds_belief.frame.index import MAX_FRAME_SIZE


# -----------------------------
# Evidence config (evidence.yaml)
# -----------------------------

@dataclass(frozen=True)
class EngineConfig:
    max_frame_size: int = MAX_FRAME_SIZE


@dataclass(frozen=True)
class FocalElementConfig:
    subset: List[Any]
    weight: float


@dataclass(frozen=True)
class SourceConfig:
    id: str
    label: str
    focal_elements: List[FocalElementConfig] = field(default_factory=list)


@dataclass(frozen=True)
class EvidenceConfig:
    version: int
    name: str
    description: str
    frame: List[Any]
    sources: List[SourceConfig]
    engine: EngineConfig = field(default_factory=EngineConfig)


# -----------------------------
# Derived structures
# -----------------------------

@dataclass(frozen=True)
class DerivedEvidence:
    """
    Wraps the raw EvidenceConfig plus one mass assignment per source,
    keyed by source id in file order.
    """
    config: EvidenceConfig
    assignments: Mapping[str, MassAssignment]
