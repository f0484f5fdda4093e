# simulations/visualize.py
"""
Interactive viewer: balls falling into a circle with its inscribed square,
live counters and a convergence chart.

Keys:
    1 / 2 / 5   drop 1 / 100 / 500 balls
    r           reset
    i           ask for a commentary on the current numbers
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from typing import List, Tuple

import matplotlib.animation as animation
import matplotlib.patches as mpatches
import matplotlib.pyplot as plt

from pi_drop.animator import visual_position
from pi_drop.commentary import request_insight_async
from pi_drop.logging_config import setup_logging
from pi_drop.sampler import CIRCLE_COLOR, SQUARE_COLOR
from pi_drop.simulation import Simulation

logger = logging.getLogger(__name__)

DROP_KEYS = {"1": 1, "2": 100, "5": 500}
FRAME_INTERVAL_MS = 16
CHART_SPAN = 0.2


class Viewer:
    """Rendering and statistics display. Reads the simulation, never edits balls."""

    def __init__(self, sim: Simulation):
        self.sim = sim
        self.insight: str = "Press 'i' for a commentary."

        self.fig = plt.figure(figsize=(13, 7))
        self.ax_canvas = self.fig.add_axes([0.02, 0.05, 0.5, 0.9])
        self.ax_chart = self.fig.add_axes([0.58, 0.08, 0.38, 0.45])
        self.ax_text = self.fig.add_axes([0.58, 0.6, 0.38, 0.35])
        self.ax_text.axis("off")

        self._build_canvas()
        self._build_chart()
        self.stats_text = self.ax_text.text(0, 1, "", va="top", family="monospace", fontsize=11)
        self.insight_text = self.ax_text.text(0, 0.15, "", va="top", wrap=True, fontsize=9, style="italic")

        self.fig.canvas.mpl_connect("key_press_event", self.on_key)

    # ------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------

    def _build_canvas(self) -> None:
        ax = self.ax_canvas
        sim = self.sim
        cx, cy = sim.center
        half = sim.square_half_side

        ax.set_xlim(0, sim.width)
        # Canvas coordinates: y grows downwards, balls start above the top
        ax.set_ylim(sim.height, sim.start_y - 20)
        ax.set_aspect("equal")
        ax.axis("off")

        ax.add_patch(mpatches.Circle(
            (cx, cy), sim.radius, facecolor=(0.12, 0.16, 0.23, 0.5), edgecolor=CIRCLE_COLOR, lw=2,
        ))
        ax.add_patch(mpatches.Rectangle(
            (cx - half, cy - half), 2 * half, 2 * half, fill=False, edgecolor=SQUARE_COLOR, lw=2, ls="--",
        ))
        ax.text(cx - sim.radius, cy - sim.radius - 10, "Circle Area (πR²)", color="#94a3b8", fontsize=9)
        ax.text(cx - half, cy + half + 20, "Inscribed Square (2R²)", color="#94a3b8", fontsize=9)

        self.landed_sq, = ax.plot([], [], "o", color=SQUARE_COLOR, ms=2)
        self.landed_circ, = ax.plot([], [], "o", color=CIRCLE_COLOR, ms=2)
        # Falling balls are drawn larger with a halo
        self.falling_sq, = ax.plot([], [], "o", color=SQUARE_COLOR, ms=4, mec=SQUARE_COLOR, mew=3, alpha=0.8)
        self.falling_circ, = ax.plot([], [], "o", color=CIRCLE_COLOR, ms=4, mec=CIRCLE_COLOR, mew=3, alpha=0.8)

    def _build_chart(self) -> None:
        ax = self.ax_chart
        ax.set_title("Convergence Stability", fontsize=10)
        ax.axhline(math.pi, color="#10b981", linestyle="--", lw=1)
        ax.text(1.01, math.pi, "π", color="#10b981", transform=ax.get_yaxis_transform(), va="center")
        ax.set_ylim(math.pi - CHART_SPAN, math.pi + CHART_SPAN)
        ax.set_xticks([])
        self.history_line, = ax.plot([], [], color="#3b82f6", lw=2)

    # ------------------------------------------------------------
    # Events
    # ------------------------------------------------------------

    def on_key(self, event) -> None:
        if event.key in DROP_KEYS:
            self.sim.drop(DROP_KEYS[event.key])
        elif event.key == "r":
            self.sim.reset()
            self.insight = "Press 'i' for a commentary."
        elif event.key == "i":
            self.insight = "Thinking..."
            request_insight_async(self.sim.stats, callback=self._set_insight)

    def _set_insight(self, text: str) -> None:
        self.insight = text

    # ------------------------------------------------------------
    # Frame
    # ------------------------------------------------------------

    def update(self, _frame):
        self.sim.tick()

        groups: dict[Tuple[bool, bool], Tuple[List[float], List[float]]] = {
            key: ([], []) for key in [(False, True), (False, False), (True, True), (True, False)]
        }
        for s in self.sim.samples:
            x, y = visual_position(s, self.sim.start_y)
            xs, ys = groups[(s.landed, s.in_square)]
            xs.append(x)
            ys.append(y)

        self.landed_sq.set_data(*groups[(True, True)])
        self.landed_circ.set_data(*groups[(True, False)])
        self.falling_sq.set_data(*groups[(False, True)])
        self.falling_circ.set_data(*groups[(False, False)])

        stats = self.sim.stats
        self.stats_text.set_text(
            f"Total Samples   {stats.total_in_circle:>10,}\n"
            f"Hits in Square  {stats.total_in_square:>10,}\n"
            f"π Estimation    {stats.estimated_pi:>10.7f}\n"
            f"Error           {stats.error * 100:>9.4f}%\n"
            f"True Value      {math.pi:>10.7f}"
        )
        self.insight_text.set_text(self.insight)

        history = self.sim.history
        self.history_line.set_data([p.index for p in history], [p.value for p in history])
        if history:
            lo, hi = history[0].index, history[-1].index
            self.ax_chart.set_xlim(lo, hi if hi > lo else lo + 1)

        return (
            self.landed_sq, self.landed_circ, self.falling_sq, self.falling_circ,
            self.stats_text, self.insight_text, self.history_line,
        )

    def show(self) -> None:
        self.fig.suptitle("Pi Monte Carlo Visualizer   π ≈ 2 × (Total / Square)")
        self._anim = animation.FuncAnimation(
            self.fig, self.update, interval=FRAME_INTERVAL_MS, blit=False, cache_frame_data=False,
        )
        plt.show()


def main(argv: list[str]) -> int:
    parser = argparse.ArgumentParser(description="Drop balls into a circle and watch pi converge.")
    parser.add_argument("--size", type=int, default=600, help="canvas width/height")
    parser.add_argument("--initial", type=int, default=0, help="balls to drop at start")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed")
    parser.add_argument("--log-file", default=None, help="also write logs here")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")

    args = parser.parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)

    sim = Simulation(width=args.size, height=args.size, seed=args.seed)
    if args.initial:
        sim.drop(args.initial)

    logger.info("Keys: 1/2/5 drop 1/100/500 balls, r reset, i commentary.")
    Viewer(sim).show()
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
