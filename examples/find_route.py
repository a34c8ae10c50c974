import argparse
import json
import sys
import os

# Ensure project root is on sys.path when running this file directly
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from routeforge.config import RouteforgeConfig
from routeforge.graph.builder import load_diagram
from routeforge.graph.exporter import load_graph
from routeforge.pipeline.route_planner import RoutePlanner


def main():
    parser = argparse.ArgumentParser(description="Find the shortest route between two labelled rooms.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--diagram", help="Path to the editor's diagram JSON")
    source.add_argument("--graph", help="Path to an exported canonical graph JSON")
    parser.add_argument("--start", required=True, help="Label of the start room")
    parser.add_argument("--end", required=True, help="Label of the destination room")
    parser.add_argument("--max-visits", type=int, default=None, help="Give up after finalizing this many nodes")
    parser.add_argument("--deadline", type=float, default=None, help="Give up after this many seconds")
    args = parser.parse_args()

    config = RouteforgeConfig(max_visits=args.max_visits, deadline_seconds=args.deadline)
    planner = RoutePlanner(config)
    target = load_graph(args.graph) if args.graph else load_diagram(args.diagram)
    result = planner.find_route(target, args.start, args.end)
    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    if not result.found:
        sys.exit(1)


if __name__ == "__main__":
    main()
