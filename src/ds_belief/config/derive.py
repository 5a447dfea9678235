from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence

from ds_belief.belief.assignment import MassAssignment
from ds_belief.belief.combine import combine_all
from ds_belief.belief.errors import BeliefInputError
from ds_belief.belief.types import CombinationResult
from ds_belief.frame.errors import FrameError

from .models import DerivedEvidence, EvidenceConfig

logger = logging.getLogger(__name__)


class ConfigDerivationError(ValueError):
    pass


def derive_assignments(config: EvidenceConfig) -> Dict[str, MassAssignment]:
    """
    Build one MassAssignment per source:
      - focal elements of a source become its weighted subsets
      - a source without focal elements yields the vacuous assignment
    """
    assignments: Dict[str, MassAssignment] = {}
    frame = set(config.frame)

    for source in config.sources:
        foreign = {e for fe in source.focal_elements for e in fe.subset if e not in frame}
        if foreign:
            logger.debug("Source %r mentions elements outside the frame: %r", source.id, sorted(map(repr, foreign)))

        pairs = [(tuple(fe.subset), fe.weight) for fe in source.focal_elements]
        try:
            assignments[source.id] = MassAssignment(
                config.frame,
                pairs,
                max_frame_size=config.engine.max_frame_size,
            )
        except (BeliefInputError, FrameError) as e:
            raise ConfigDerivationError(f"Source '{source.id}': {e}") from e

    return assignments


def fuse_sources(evidence: DerivedEvidence, source_ids: Optional[Sequence[str]] = None) -> CombinationResult:
    """
    Combine the selected sources (all of them by default) with Dempster's rule,
    in the given order.
    """
    ids = list(source_ids) if source_ids is not None else list(evidence.assignments)
    missing = [sid for sid in ids if sid not in evidence.assignments]
    if missing:
        raise ConfigDerivationError(f"Unknown source ids: {missing}")
    if not ids:
        raise ConfigDerivationError("No sources to fuse.")
    return combine_all(evidence.assignments[sid] for sid in ids)
