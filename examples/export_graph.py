import argparse
import sys
import os

# Ensure project root is on sys.path when running this file directly
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from routeforge.config import RouteforgeConfig
from routeforge.graph.builder import load_diagram
from routeforge.pipeline.route_planner import RoutePlanner


def main():
    parser = argparse.ArgumentParser(description="Normalize a diagram snapshot and print the canonical graph JSON.")
    parser.add_argument("--diagram", required=True, help="Path to the editor's diagram JSON")
    parser.add_argument("--out", default=None, help="Optional path to save the canonical graph JSON")
    args = parser.parse_args()

    planner = RoutePlanner(RouteforgeConfig())
    result = planner.normalize(load_diagram(args.diagram))
    text = planner.export_json(result.graph)

    for dangling in result.dangling:
        print(f"Dropped connector {dangling.connector_id}: missing {dangling.missing_ids}", file=sys.stderr)

    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            f.write(text)
        print(f"Wrote canonical graph to {args.out}")
    else:
        print(text)


if __name__ == "__main__":
    main()
