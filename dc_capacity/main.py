import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from dc_capacity.capacity import compute_capacity
from dc_capacity.config import load_config, params_from_config
from dc_capacity.generator import generate_topology
from dc_capacity.models import Reduction
from dc_capacity.parser import load_topology, read_interactive
from dc_capacity.report import format_detailed_results, format_results
from dc_capacity.visualization import save_capacity_chart

logger = logging.getLogger("dccap.main")

EPILOG = """\
Example input format:
  3 4                (3 groups, 4 machines per group)
  A1 B1 C1 D1        (Group 1 machines)
  A2 B2 C2 D2        (Group 2 machines)
  A3 B3 C3 D3        (Group 3 machines)
"""


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dc-capacity",
        description="Big data center capacity estimate (requests per second)",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("-f", "--file", metavar="FILE", help="Read input from file")
    source.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help="Interactive mode (default)",
    )
    source.add_argument(
        "-g",
        "--generate",
        nargs=2,
        type=int,
        metavar=("GROUPS", "MACHINES"),
        help="Generate a synthetic topology",
    )
    parser.add_argument("--pool-size", type=int, help="Distinct machine ids for --generate")
    parser.add_argument("--seed", type=int, default=0, help="Seed for --generate")
    parser.add_argument("-d", "--detailed", action="store_true", help="Show detailed results")
    parser.add_argument(
        "-r",
        "--reduction",
        choices=[r.value for r in Reduction],
        help="Override the configured reduction",
    )
    parser.add_argument("--chart", metavar="PATH", help="Save a bar chart of usable counts")
    parser.add_argument("-c", "--config", help="YAML/JSON config file (default: ./config.yaml)")
    parser.add_argument("--log-level", help="Logging level (default from config or WARNING)")
    return parser


def run(args: argparse.Namespace) -> int:
    cfg = load_config(args.config)

    log_level = args.log_level or cfg.get("log_level", "WARNING")
    logging.basicConfig(
        level=getattr(logging, str(log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    params = params_from_config(cfg)
    if args.reduction:
        params.reduction = Reduction.parse(args.reduction)

    if args.file:
        print(f"Reading from file: {args.file}")
        topology = load_topology(args.file, params.max_dimension)
    elif args.generate:
        groups, machines = args.generate
        topology = generate_topology(
            groups,
            machines,
            pool_size=args.pool_size,
            seed=args.seed,
            max_dimension=params.max_dimension,
        )
        logger.info("Generated topology groups=%d machines=%d seed=%s", groups, machines, args.seed)
    else:
        topology = read_interactive(max_dimension=params.max_dimension)

    result = compute_capacity(topology, params)

    if args.detailed:
        print(format_detailed_results(result, params.unit_weight))
    else:
        print(format_results(result))

    if args.chart:
        charts_cfg = cfg.get("charts", {}) if isinstance(cfg.get("charts"), dict) else {}
        chart_path = args.chart
        if not os.path.dirname(chart_path):
            chart_path = os.path.join(charts_cfg.get("dir", "charts"), chart_path)
        saved = save_capacity_chart(result, chart_path, params.unit_weight)
        print(f"Chart saved as: {saved}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    try:
        return run(args)
    except (ValueError, OSError) as e:
        logger.debug("Run failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
