#!/usr/bin/env python3
"""
Validate a scenario document and print its composition.

Checks (same as the app at start-up):
1. The file is reachable and is a JSON list of scenario records.
2. Scenario ids are unique; node ids are unique within each scenario.
3. Every edge endpoint references a node of the same scenario.

Run: python scripts/check_scenarios.py [path-or-url]
Exit code 1 when the document is rejected.
"""
import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend import config
from backend.services.scenarios import ScenarioLoadError, load_all
from frontend.utils.tables import composition_frame


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Validate a scenario document.")
    parser.add_argument("source", nargs="?", default=config.SCENARIOS_SOURCE, help="path or http(s) URL")
    args = parser.parse_args(argv)

    try:
        scenarios = load_all(args.source)
    except ScenarioLoadError as e:
        print(f"REJECTED: {e}", file=sys.stderr)
        return 1

    print(f"{len(scenarios)} scenario(s) in {args.source}")
    for sc in scenarios:
        print(f"\n[{sc.id}] {sc.name}: {len(sc.nodes)} nodes, {len(sc.edges)} edges, {len(sc.checklist)} checklist items")
        print(composition_frame(sc).to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
