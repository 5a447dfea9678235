from __future__ import annotations

import logging

from ds_belief.config import fuse_sources, load_evidence


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    evidence_yaml = "examples/evidence.yaml"
    evidence = load_evidence(evidence_yaml)

    print("\n=== ds-belief YAML fusion example ===")
    print("Evidence config:", evidence_yaml)
    print("Frame:", evidence.config.frame)

    print("\n[Step 1] Sources")
    for source_id, m in evidence.assignments.items():
        print(f"  {source_id}: {m}")

    # 2) Fuse every source in file order with Dempster's rule
    result = fuse_sources(evidence)

    print("\n[Step 2] Dempster combination")
    if not result.ok:
        print("  failed:", result.failure.value)
        return
    fused = result.unwrap()
    print("  conflicts per step:", result.debug["conflicts"])

    print("\n[Step 3] Belief / plausibility of singletons")
    for e in fused.event_space():
        print(f"  {e}: bel={fused.belief([e]):.4f} pl={fused.plausibility([e]):.4f}")


if __name__ == "__main__":
    main()
