from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

from ds_belief.frame.index import MAX_FRAME_SIZE

from .derive import ConfigDerivationError, derive_assignments
from .models import (
    DerivedEvidence,
    EngineConfig,
    EvidenceConfig,
    FocalElementConfig,
    SourceConfig,
)

_SCALAR_TYPES = (str, int, float, bool)


class ConfigError(ValueError):
    pass


def _read_yaml(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {p}")
    data = yaml.safe_load(p.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ConfigError(f"YAML root must be a mapping/dict: {p}")
    return data


def _require(d: Mapping[str, Any], key: str, ctx: str) -> Any:
    if key not in d:
        raise ConfigError(f"Missing required key '{key}' in {ctx}")
    return d[key]


def _as_dict(x: Any, ctx: str) -> Dict[str, Any]:
    if not isinstance(x, dict):
        raise ConfigError(f"Expected a mapping/dict in {ctx}, got {type(x)}")
    return x


def _as_list(x: Any, ctx: str) -> List[Any]:
    if not isinstance(x, list):
        raise ConfigError(f"Expected a list in {ctx}, got {type(x)}")
    return x


def _as_elements(x: Any, ctx: str) -> List[Any]:
    elements = _as_list(x, ctx)
    for i, e in enumerate(elements):
        if not isinstance(e, _SCALAR_TYPES):
            raise ConfigError(f"{ctx}[{i}] must be a scalar element, got {type(e)}")
    return elements


def _parse_engine(raw: Mapping[str, Any]) -> EngineConfig:
    if "engine" not in raw or raw["engine"] is None:
        return EngineConfig()
    engine_raw = _as_dict(raw["engine"], "evidence.engine")
    max_frame_size = engine_raw.get("max_frame_size", EngineConfig().max_frame_size)
    try:
        max_frame_size = int(max_frame_size)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"evidence.engine.max_frame_size must be an integer, got {max_frame_size!r}") from e
    if max_frame_size < 1:
        raise ConfigError("evidence.engine.max_frame_size must be positive")
    if max_frame_size > MAX_FRAME_SIZE:
        raise ConfigError(f"evidence.engine.max_frame_size must be at most {MAX_FRAME_SIZE}, got {max_frame_size}")
    return EngineConfig(max_frame_size=max_frame_size)


def _parse_source(raw: Any, i: int) -> SourceConfig:
    s_dict = _as_dict(raw, f"evidence.sources[{i}]")
    source_id = str(_require(s_dict, "id", f"source[{i}]"))
    label = str(s_dict.get("label", source_id))

    focal_raw = s_dict.get("focal_elements") or []
    focal_list = _as_list(focal_raw, f"source[{i}].focal_elements")

    focal_elements: List[FocalElementConfig] = []
    for j, fe in enumerate(focal_list):
        ctx = f"source[{i}].focal_elements[{j}]"
        fe_dict = _as_dict(fe, ctx)
        subset = _as_elements(_require(fe_dict, "subset", ctx), f"{ctx}.subset")
        weight_raw = _require(fe_dict, "weight", ctx)
        try:
            weight = float(weight_raw)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{ctx}.weight must be a number, got {weight_raw!r}") from e
        focal_elements.append(FocalElementConfig(subset=subset, weight=weight))

    return SourceConfig(id=source_id, label=label, focal_elements=focal_elements)


def parse_evidence(raw: Mapping[str, Any]) -> EvidenceConfig:
    """Validate an already-parsed evidence mapping into an EvidenceConfig."""
    version = int(_require(raw, "version", "evidence"))
    name = str(_require(raw, "name", "evidence"))
    description = str(raw.get("description", ""))

    frame = _as_elements(_require(raw, "frame", "evidence"), "evidence.frame")
    if not frame:
        raise ConfigError("evidence.frame must contain at least one element")
    if len(set(frame)) != len(frame):
        raise ConfigError("evidence.frame contains duplicate elements")

    sources_raw = _as_list(_require(raw, "sources", "evidence"), "evidence.sources")
    sources: List[SourceConfig] = []
    seen_ids = set()
    for i, s in enumerate(sources_raw):
        source = _parse_source(s, i)
        if source.id in seen_ids:
            raise ConfigError(f"Duplicate source id '{source.id}'")
        seen_ids.add(source.id)
        sources.append(source)

    return EvidenceConfig(
        version=version,
        name=name,
        description=description,
        frame=frame,
        sources=sources,
        engine=_parse_engine(raw),
    )


def load_evidence(path: str | Path) -> DerivedEvidence:
    """
    Load an evidence YAML file and derive one mass assignment per source:
      version, name, description
      frame: [elements]
      engine.max_frame_size (optional)
      sources[].{id, label, focal_elements[].{subset, weight}}
    """
    cfg = parse_evidence(_read_yaml(path))

    try:
        assignments = derive_assignments(cfg)
    except ConfigDerivationError as e:
        raise ConfigError(str(e)) from e

    return DerivedEvidence(config=cfg, assignments=assignments)
