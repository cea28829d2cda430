"""
Habitat Viewer - pygame front end for tick-habitat

Draws the field every frame from a read-only FieldView and drives the
simulation with a tick accumulator.

Controls:
  Space   Run / Pause
  N       Single step (while paused)
  R       Reset (reseeds with the enabled species)
  1-4     Toggle rabbits / foxes / wolves / hunters for the next reset
  + / -   Faster / slower
  Escape  Quit

Run: python examples/habitat-viewer/main.py --seed 7
"""
from __future__ import annotations

import argparse
import sys

import pygame

from tick_habitat import FieldView, HabitatConfig, Simulation, Species

TITLE = "Habitat Viewer - rabbits, foxes, wolves and hunters"
FPS = 60
HUD_H = 52
EMPTY_COLOR = (255, 255, 255)
BG_COLOR = (18, 22, 30)
HUD_COLOR = (200, 200, 220)
COLORS: dict[Species, tuple[int, int, int]] = {
    Species.RABBIT: (255, 200, 0),
    Species.FOX: (0, 0, 255),
    Species.WOLF: (64, 64, 64),
    Species.HUNTER: (255, 0, 0),
}
TOGGLE_KEYS = {
    pygame.K_1: Species.RABBIT,
    pygame.K_2: Species.FOX,
    pygame.K_3: Species.WOLF,
    pygame.K_4: Species.HUNTER,
}
# Seconds per tick, slowest to fastest.
SPEEDS = (0.4, 0.08, 0.04, 0.02, 0.004)
SPEED_NAMES = ("Very Slow", "Slow", "Normal", "Fast", "Very Fast")


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description=TITLE)
    p.add_argument("--seed", type=int, default=None, help="Random seed (default: random)")
    p.add_argument("--width", type=int, default=120, help="Field width (default: 120)")
    p.add_argument("--height", type=int, default=80, help="Field height (default: 80)")
    p.add_argument("--cell", type=int, default=6, help="Cell size in pixels (default: 6)")
    return p.parse_args()


def _draw_field(screen: pygame.Surface, view: FieldView, cell: int) -> None:
    for row, cells in enumerate(view.cells):
        for col, species in enumerate(cells):
            color = COLORS[species] if species is not None else EMPTY_COLOR
            pygame.draw.rect(
                screen, color, (col * cell, HUD_H + row * cell, cell - 1, cell - 1)
            )


def _draw_hud(
    screen: pygame.Surface,
    font: pygame.font.Font,
    sim: Simulation,
    view: FieldView,
    paused: bool,
    speed: int,
    message: str,
) -> None:
    enabled = "".join(
        sp.value[0].upper() if sp in sim.enabled_species else "-" for sp in Species
    )
    state = "PAUSED" if paused else SPEED_NAMES[speed]
    lines = [
        f"Step: {view.tick_number}   Population: {view.population_details() or '-'}",
        message or f"[{state}] seed={enabled}  Space=Run N=Step R=Reset 1-4=Toggle +/-=Speed",
    ]
    for i, line in enumerate(lines):
        surf = font.render(line, True, HUD_COLOR)
        screen.blit(surf, (8, 6 + i * 20))


def main() -> None:
    args = parse_args()
    try:
        config = HabitatConfig(width=args.width, height=args.height)
    except ValueError as exc:
        print(f"habitat-viewer: {exc}", file=sys.stderr)
        sys.exit(2)

    sim = Simulation(config, seed=args.seed)

    pygame.init()
    screen = pygame.display.set_mode(
        (config.width * args.cell, HUD_H + config.height * args.cell)
    )
    pygame.display.set_caption(TITLE)
    pg_clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 14)

    paused = True
    speed = 2
    tick_acc = 0.0
    message = ""
    running = True

    while running:
        dt = pg_clock.tick(FPS) / 1000.0

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                message = ""
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    paused = not paused
                    tick_acc = 0.0
                elif event.key == pygame.K_n and paused:
                    sim.step()
                elif event.key == pygame.K_r:
                    paused = True
                    sim.reset()
                elif event.key in TOGGLE_KEYS:
                    species = TOGGLE_KEYS[event.key]
                    sim.set_species_enabled(species, species not in sim.enabled_species)
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    speed = min(speed + 1, len(SPEEDS) - 1)
                elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                    speed = max(speed - 1, 0)

        # --- Update (tick accumulator) ---
        if not paused:
            tick_acc += dt
            while tick_acc >= SPEEDS[speed]:
                sim.step()
                tick_acc -= SPEEDS[speed]
                if not sim.view().is_viable():
                    paused = True
                    message = (
                        f"Simulation finished: {sim.view().population_details() or 'empty'}"
                    )
                    break

        # --- Draw ---
        view = sim.view()
        screen.fill(BG_COLOR)
        _draw_field(screen, view, args.cell)
        _draw_hud(screen, font, sim, view, paused, speed, message)
        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
