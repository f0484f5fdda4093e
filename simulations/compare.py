# simulations/compare.py

from __future__ import annotations

import argparse
import logging
import math
import sys

import matplotlib.pyplot as plt

from pi_drop.logging_config import setup_logging

from .common import common_y_range, format_stats_line
from .methods import METHODS
from .run import run_pair


# Keep the tool intentionally opinionated: seed and radius are fixed
DEFAULT_SEED = 42
DEFAULT_RADIUS = 240.0


def main(argv: list[str]) -> int:
    parser = argparse.ArgumentParser(
        description="Compare two disc samplers: radial uniformity and pi convergence."
    )
    methods = " | ".join(sorted(METHODS))
    parser.add_argument("--method-a", required=True, help=f"e.g. {methods}")
    parser.add_argument("--method-b", required=True, help=f"e.g. {methods}")
    parser.add_argument("--balls", type=int, required=True, help="number of balls")
    parser.add_argument("--batches", type=int, default=1, help="number of drop actions")
    parser.add_argument("--bands", type=int, default=10, help="equal-area radial bands")
    parser.add_argument("--no-plot", action="store_true", help="print stats only")

    args = parser.parse_args(argv)
    setup_logging(level=logging.WARNING)

    ra, rb = run_pair(
        args.method_a,
        args.method_b,
        balls=args.balls,
        radius=DEFAULT_RADIUS,
        batches=args.batches,
        bands=args.bands,
        seed=DEFAULT_SEED,
    )

    print(format_stats_line(ra))
    print(format_stats_line(rb))

    if args.no_plot:
        return 0

    ymin, ymax = common_y_range([ra, rb])
    band_ids = list(range(args.bands))

    plt.figure(figsize=(12, 8))

    for col, r in enumerate((ra, rb)):
        plt.subplot(2, 2, col + 1)
        plt.bar(band_ids, r.band_counts)
        plt.axhline(r.band_stats.mean, color="#10b981", linestyle="--")
        plt.title(r.method)
        plt.xlabel("Equal-area ring (center -> edge)")
        if col == 0:
            plt.ylabel("Balls per ring")
        plt.ylim(ymin, ymax * 1.05)

        plt.subplot(2, 2, col + 3)
        plt.plot([p.index for p in r.history], [p.value for p in r.history], color="#3b82f6")
        plt.axhline(math.pi, color="#10b981", linestyle="--", label="pi")
        plt.xlabel("Balls landed")
        if col == 0:
            plt.ylabel("Estimated pi")
        plt.legend(loc="upper right")

    plt.suptitle(
        f"Compare: {ra.method} vs {rb.method}  "
        f"(balls={args.balls}, batches={args.batches}, bands={args.bands})"
    )
    plt.tight_layout(rect=[0, 0.02, 1, 0.94])
    plt.show()

    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
