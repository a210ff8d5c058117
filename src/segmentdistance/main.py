"""
Command-Line Entry Point
========================
Computes the distance between two segments given on the command line or
picked by name from the scenario table.

Usage:
    $ segmentdistance 0 0 0 2 0 0  1 -1 1 1 1 -1
    $ segmentdistance --scenario parallel_overlapped --details
    $ segmentdistance --list
"""
import argparse
import logging
import sys
from typing import List, Optional

from segmentdistance.config import PARALLEL_TOLERANCE, DEFAULT_SCENARIOS_PATH
from segmentdistance.exceptions import SegmentDistanceError
from segmentdistance.logging_config import setup_logging
from segmentdistance.model.geometry_primitives import Segment
from segmentdistance.model.scenarios import load_scenarios, get_scenario
from segmentdistance.solvers.solver import closest_approach

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="segmentdistance",
        description="Minimum distance between two line segments in 3D",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Two segments from twelve coordinates (x0 y0 z0 x1 y1 z1 for each segment)
  segmentdistance 0 0 0 2 0 0  1 -1 1 1 1 -1

  # A named scenario, with closest-point parameters
  segmentdistance --scenario skew_overlapped --details
        """
    )
    parser.add_argument("coordinates", nargs="*", type=float, metavar="COORD",
                        help="Twelve numbers: endpoints of the first segment, then of the second")
    parser.add_argument("--scenario", "-s", help="Run a named scenario from the scenario table")
    parser.add_argument("--scenarios-file", default=DEFAULT_SCENARIOS_PATH,
                        help="Scenario table (JSON)")
    parser.add_argument("--list", action="store_true", help="List available scenarios and exit")
    parser.add_argument("--tolerance", type=float, default=PARALLEL_TOLERANCE,
                        help=f"Parallelism tolerance (default: {PARALLEL_TOLERANCE})")
    parser.add_argument("--details", action="store_true",
                        help="Print closest points and their parameters")
    parser.add_argument("--plot", action="store_true", help="Show a 3D plot of the segments")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", help="Also write logs to this file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING, log_file=args.log_file)

    if args.list:
        for name, scenario in load_scenarios(args.scenarios_file).items():
            print(f"{name:30s} {scenario.description}")
        return 0

    if args.scenario:
        if args.coordinates:
            parser.error("Give either coordinates or --scenario, not both")
        try:
            scenario = get_scenario(args.scenario, args.scenarios_file)
        except KeyError as e:
            parser.error(str(e.args[0]))
        s1, s2 = scenario.first, scenario.second
    else:
        if len(args.coordinates) != 12:
            parser.error(f"Expected 12 coordinates, got {len(args.coordinates)}")
        s1 = Segment.from_coordinates(*args.coordinates[:6])
        s2 = Segment.from_coordinates(*args.coordinates[6:])

    try:
        approach = closest_approach(s1, s2, tolerance=args.tolerance)
    except SegmentDistanceError as e:
        logger.error(str(e))
        return 1

    print("Distance equals:", approach.distance)
    if args.details:
        print("Closest point on segment 1:", approach.point_on_first, f"(sc = {approach.sc})")
        print("Closest point on segment 2:", approach.point_on_second, f"(tc = {approach.tc})")
        print("Parallel:", approach.parallel)
        print("Case:", approach.kind)

    if args.plot:
        from segmentdistance.plotting import plot_segments
        plot_segments(s1, s2, approach, title=args.scenario)

    return 0


if __name__ == "__main__":
    sys.exit(main())
