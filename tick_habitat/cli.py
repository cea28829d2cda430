"""Headless runner: seed a field, run it, print a census.

Run: python -m tick_habitat --steps 500 --report-every 50
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Sequence, TextIO

from tick_habitat.components import Organism
from tick_habitat.config import DEFAULT_HEIGHT, DEFAULT_WIDTH, HabitatConfig
from tick_habitat.engine import Simulation
from tick_habitat.types import Species, TickContext
from tick_habitat.world import World

LONG_RUN = 4000

_TOGGLES = {
    Species.RABBIT: "no_rabbits",
    Species.FOX: "no_foxes",
    Species.WOLF: "no_wolves",
    Species.HUNTER: "no_hunters",
}


def census(world: World) -> dict[Species, int]:
    counts = {sp: 0 for sp in Species}
    for _, (organism,) in world.query(Organism):
        counts[organism.species] += 1
    return counts


def format_census(tick_number: int, counts: dict[Species, int]) -> str:
    parts = "  ".join(f"{sp.value}={n:<5}" for sp, n in counts.items())
    return f"[tick {tick_number:>5}]  {parts}".rstrip()


def make_census_system(
    report_every: int, out: TextIO
) -> Callable[[World, TickContext], None]:
    """Print the population every *report_every* ticks."""

    def census_system(world: World, ctx: TickContext) -> None:
        if ctx.tick_number % report_every != 0:
            return
        print(format_census(ctx.tick_number, census(world)), file=out)

    return census_system


def make_collapse_system() -> Callable[[World, TickContext], None]:
    """Stop the run once fewer than two species remain."""

    def collapse_system(world: World, ctx: TickContext) -> None:
        present = sum(1 for n in census(world).values() if n > 0)
        if present <= 1:
            logging.getLogger(__name__).info(
                "population collapsed at tick %d", ctx.tick_number
            )
            ctx.request_stop()

    return collapse_system


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tick-habitat",
        description="Run a rabbit/fox/wolf/hunter field headless and print a census.",
    )
    p.add_argument("--seed", type=int, default=None, help="Random seed (default: random)")
    p.add_argument("--width", type=int, default=DEFAULT_WIDTH,
                   help=f"Field width (default: {DEFAULT_WIDTH})")
    p.add_argument("--height", type=int, default=DEFAULT_HEIGHT,
                   help=f"Field height (default: {DEFAULT_HEIGHT})")
    p.add_argument("--steps", type=int, default=LONG_RUN,
                   help=f"Ticks to run (default: {LONG_RUN})")
    p.add_argument("--report-every", type=int, default=100, metavar="N",
                   help="Print a census every N ticks (default: 100)")
    p.add_argument("--stop-when-collapsed", action="store_true",
                   help="Stop once fewer than two species are alive")
    p.add_argument("--no-rabbits", action="store_true", help="Do not seed rabbits")
    p.add_argument("--no-foxes", action="store_true", help="Do not seed foxes")
    p.add_argument("--no-wolves", action="store_true", help="Do not seed wolves")
    p.add_argument("--no-hunters", action="store_true", help="Do not seed hunters")
    verbosity = p.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="count", default=0,
                           help="More log output (-vv for every fight)")
    verbosity.add_argument("-q", "--quiet", action="store_true",
                           help="Only log warnings and errors")
    return p


def _log_level(args: argparse.Namespace) -> int:
    if args.quiet:
        return logging.WARNING
    if args.verbose >= 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    return logging.WARNING


def main(argv: Sequence[str] | None = None, out: TextIO | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    out = out if out is not None else sys.stdout

    if args.steps < 0:
        parser.error("--steps must not be negative")
    if args.report_every <= 0:
        parser.error("--report-every must be positive")
    try:
        config = HabitatConfig(width=args.width, height=args.height)
    except ValueError as exc:
        parser.error(str(exc))

    logging.basicConfig(
        level=_log_level(args),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    sim = Simulation(config, seed=args.seed, populate=False)
    for species, flag in _TOGGLES.items():
        sim.set_species_enabled(species, not getattr(args, flag))
    sim.reset()

    print(f"=== tick-habitat {config.width}x{config.height} (seed={sim.seed}) ===", file=out)
    print(format_census(sim.tick_number, census(sim.world)), file=out)
    sim.add_system(make_census_system(args.report_every, out))
    if args.stop_when_collapsed:
        sim.add_system(make_collapse_system())

    sim.run(args.steps)

    view = sim.view()
    print(f"\nFinished at tick {view.tick_number}: "
          f"{view.population_details() or 'no organisms left'}", file=out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
