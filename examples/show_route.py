import argparse
import sys
import os

# Ensure project root is on sys.path when running this file directly
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from routeforge.geometry.visualize import draw_graph
from routeforge.graph.builder import load_diagram
from routeforge.pipeline.route_planner import RoutePlanner


def main():
    parser = argparse.ArgumentParser(description="Render the canonical graph and a route as an overlay image.")
    parser.add_argument("--diagram", required=True, help="Path to the editor's diagram JSON")
    parser.add_argument("--start", default=None, help="Label of the start room")
    parser.add_argument("--end", default=None, help="Label of the destination room")
    parser.add_argument("--image", default=None, help="Optional floor-plan image to draw over")
    parser.add_argument("--out", default="debug_route.png", help="Path to save the overlay image")
    args = parser.parse_args()

    planner = RoutePlanner()
    graph = planner.normalize(load_diagram(args.diagram)).graph
    route = None
    if args.start and args.end:
        result = planner.find_route(graph, args.start, args.end)
        print("Route:", result.status.value, " -> ".join(result.path))
        route = result.path
    out_path = draw_graph(graph, args.out, route=route, image_path=args.image)
    print("Saved:", out_path)


if __name__ == "__main__":
    main()
