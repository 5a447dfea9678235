from .models import (
    DerivedEvidence,
    EngineConfig,
    EvidenceConfig,
    FocalElementConfig,
    SourceConfig,
)
from .derive import ConfigDerivationError, derive_assignments, fuse_sources
from .loader import ConfigError, load_evidence, parse_evidence

__all__ = [
    # configs
    "EngineConfig",
    "EvidenceConfig",
    "FocalElementConfig",
    "SourceConfig",
    # derived
    "DerivedEvidence",
    "derive_assignments",
    "fuse_sources",
    # loaders
    "load_evidence",
    "parse_evidence",
    # errors
    "ConfigError",
    "ConfigDerivationError",
]
