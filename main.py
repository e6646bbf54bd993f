"""
main.py — Bootstrap

1. Load tuning constants
2. Load the location table and zone layout
3. Build the controller (draws the first agent)
4. Run the pygame shell
"""

import argparse

from core import tuning
from core.app import App
from core.entropy import default_entropy
from core.zone import load_zones
from logic.locations import LocationTable
from simulation.controller import GameController


def _offset(seed, n):
    return None if seed is None else seed + n


def main():
    parser = argparse.ArgumentParser(description="Outbreak Walk")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed the entropy source for a replayable run")
    args = parser.parse_args()

    tuning.load()
    ctl = GameController(
        locations=LocationTable.from_file(),
        zones=load_zones(),
        entropy=default_entropy(args.seed),
        agent_entropy=default_entropy(_offset(args.seed, 1)),
        tip_entropy=default_entropy(_offset(args.seed, 2)),
    )

    app = App(ctl)
    app.run()


if __name__ == "__main__":
    main()
