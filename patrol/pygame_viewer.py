# patrol/pygame_viewer.py (step-through guard animation)
from __future__ import annotations
import argparse
from dataclasses import dataclass
from typing import List, Optional, Set
import os, sys
import pygame

from .config import DEFAULT_P_BLOCKED, DEFAULT_SIZE
from .errors import ConfigurationError, UnboundedRunError
from .grid import GridWorld
from .search import ObstructionSearch
from .simulator import GridSimulator
from .types import AgentState, Position

@dataclass
class Colors:
    BG = (18, 18, 22)
    WALL = (35, 35, 44)
    FLOOR = (230, 230, 240)
    GUARD = (220, 90, 90)
    START = (90, 160, 220)
    TRAIL = (70, 170, 110)
    TRAP = (240, 160, 60)
    GRID = (60, 60, 70)

def _is_cmd_ctrl_f(event):
    mods = event.mod
    KMOD_CMD = getattr(pygame, "KMOD_META", 0) | getattr(pygame, "KMOD_GUI", 0)
    return event.key == pygame.K_f and (mods & pygame.KMOD_CTRL) and (mods & KMOD_CMD)

class Viewer:
    def __init__(self, world: GridWorld, cell_size: int = 24, fps: int = 60,
                 fullscreen: bool = False, speed: float = 8.0,
                 map_dir: str | None = None):
        self.world = world
        self.cell = cell_size
        self.fps = fps
        self.speed_ticks_per_sec = speed
        self.map_dir = map_dir
        self.map_files: List[str] = []
        self.map_index = -1

        self.autopilot = False
        self.show_traps = False
        self.show_grid = False
        self._step_timer = 0.0

        self.fullscreen = fullscreen
        self._recreate_display()
        pygame.display.set_caption("Guard Patrol")
        self.clock = pygame.time.Clock()

        self._reset_state()

        if self.map_dir:
            self._find_map_files()

    # ----------------- display / fullscreen -----------------
    def _recreate_display(self) -> None:
        W, H = self.world.grid.width * self.cell, self.world.grid.height * self.cell
        flags = (pygame.FULLSCREEN | pygame.SCALED) if self.fullscreen else 0
        self.screen = pygame.display.set_mode((W, H), flags)

    def toggle_fullscreen(self) -> None:
        self.fullscreen = not self.fullscreen
        self._recreate_display()

    def _recalculate_step_interval(self) -> None:
        self._step_interval = 1.0 / self.speed_ticks_per_sec

    # ----------------- simulation -----------------
    def _reset_state(self) -> None:
        """Puts the guard back on its start for the current world."""
        self.sim = GridSimulator(self.world.grid)
        self.state: Optional[AgentState] = self.world.start
        self.trail: Set[Position] = set()
        self.ticks = 0
        self.traps: Optional[Set[Position]] = None
        self._recalculate_step_interval()

    def _set_world(self, world: GridWorld) -> None:
        resized = (world.grid.width, world.grid.height) != (self.world.grid.width, self.world.grid.height)
        self.world = world
        if resized:
            self._recreate_display()
        self._reset_state()

    def _find_map_files(self) -> None:
        if self.map_dir and os.path.isdir(self.map_dir):
            self.map_files = sorted([f for f in os.listdir(self.map_dir) if f.endswith(".txt")])

    def _load_map_by_index(self, index: int) -> None:
        if not self.map_files or not (0 <= index < len(self.map_files)):
            return
        self.map_index = index
        filepath = os.path.join(self.map_dir, self.map_files[self.map_index])
        print(f"Loading: {filepath}")
        try:
            world = GridWorld.load(filepath)
        except ConfigurationError as e:
            print(f"error: {filepath}: {e}")
            return
        self._set_world(world)

    def step(self) -> None:
        if self.state is None:
            return
        self.trail.add(self.state.position)
        self.state = self.sim.step(self.state)
        self.ticks += 1
        if self.state is None:
            print(f"Guard left the map after {self.ticks} ticks, {len(self.trail)} cells visited")

    def toggle_traps(self) -> None:
        self.show_traps = not self.show_traps
        if self.show_traps and self.traps is None:
            try:
                self.traps = ObstructionSearch(self.world.grid, self.world.start).find_cyclic_obstructions()
            except UnboundedRunError:
                print("error: guard never leaves the map, no obstructions to check")
                self.traps = set()
                return
            print(f"{len(self.traps)} looping obstruction candidates")

    # ----------------- draw -----------------
    def draw(self) -> None:
        grid, cell = self.world.grid, self.cell
        scr = self.screen
        scr.fill(Colors.BG)

        for y in range(grid.height):
            for x in range(grid.width):
                rect = pygame.Rect(x * cell, y * cell, cell, cell)
                color = Colors.WALL if grid.blocked[y][x] else Colors.FLOOR
                scr.fill(color, rect)

        for (x, y) in self.trail:
            rect = pygame.Rect(x * cell + cell // 4, y * cell + cell // 4, cell // 2, cell // 2)
            pygame.draw.rect(scr, Colors.TRAIL, rect, border_radius=4)

        if self.show_traps and self.traps:
            for (x, y) in self.traps:
                rect = pygame.Rect(x * cell + 3, y * cell + 3, cell - 6, cell - 6)
                pygame.draw.rect(scr, Colors.TRAP, rect, width=3, border_radius=4)

        sx, sy = self.world.start.position
        pygame.draw.rect(scr, Colors.START, pygame.Rect(sx * cell + 4, sy * cell + 4, cell - 8, cell - 8),
                         width=2, border_radius=6)

        if self.state is not None:
            (gx, gy), heading = self.state
            rect = pygame.Rect(gx * cell + 6, gy * cell + 6, cell - 12, cell - 12)
            pygame.draw.rect(scr, Colors.GUARD, rect, border_radius=8)
            dx, dy = heading.delta
            cx, cy = rect.center
            pygame.draw.line(scr, Colors.BG, (cx, cy), (cx + dx * cell // 3, cy + dy * cell // 3), 3)

        if self.show_grid:
            W, H = grid.width * cell, grid.height * cell
            for i in range(grid.width + 1):
                pygame.draw.line(scr, Colors.GRID, (i * cell, 0), (i * cell, H))
            for i in range(grid.height + 1):
                pygame.draw.line(scr, Colors.GRID, (0, i * cell), (W, i * cell))

        pygame.display.flip()

    # ----------------- loop -----------------
    def handle_key(self, event) -> bool:
        """Returns False when the viewer should close."""
        if event.key == pygame.K_ESCAPE:
            return False
        elif event.key == pygame.K_SPACE:
            self.autopilot = not self.autopilot
        elif event.key == pygame.K_n:
            self.step()
        elif event.key == pygame.K_o:
            self.toggle_traps()
        elif event.key == pygame.K_r:
            self._reset_state()
        elif event.key == pygame.K_g:
            self._set_world(GridWorld.random(width=self.world.grid.width, height=self.world.grid.height))
        elif event.key == pygame.K_LEFTBRACKET and self.map_files: # Previous map '['
            self._load_map_by_index((self.map_index - 1 + len(self.map_files)) % len(self.map_files))
        elif event.key == pygame.K_RIGHTBRACKET and self.map_files: # Next map ']'
            self._load_map_by_index((self.map_index + 1) % len(self.map_files))
        elif event.key == pygame.K_PAGEUP:
            self.speed_ticks_per_sec = min(self.speed_ticks_per_sec + 1, 60)
            self._recalculate_step_interval()
        elif event.key == pygame.K_PAGEDOWN:
            self.speed_ticks_per_sec = max(self.speed_ticks_per_sec - 1, 1)
            self._recalculate_step_interval()
        elif event.key == pygame.K_h:
            self.show_grid = not self.show_grid
        elif (event.key == pygame.K_RETURN and (event.mod & pygame.KMOD_ALT)) or _is_cmd_ctrl_f(event):
            self.toggle_fullscreen()
        elif event.key == pygame.K_F11:
            self.toggle_fullscreen()
        return True

    def run(self) -> None:
        running = True
        while running:
            dt = self.clock.tick(self.fps) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = self.handle_key(event)

            if self.autopilot and self.state is not None:
                self._step_timer += dt
                while self._step_timer >= self._step_interval and self.state is not None:
                    self.step()
                    self._step_timer -= self._step_interval

            self.draw()

def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Guard patrol viewer")
    parser.add_argument("--width", type=int, default=DEFAULT_SIZE, help="Map width when generating random maps")
    parser.add_argument("--height", type=int, default=DEFAULT_SIZE, help="Map height when generating random maps")
    parser.add_argument("--p", type=float, default=DEFAULT_P_BLOCKED, help="Block probability for random maps")
    parser.add_argument("--load", type=str, default=None, help="Load a saved map (.txt)")
    parser.add_argument("--cell", type=int, default=24, help="Cell size in pixels")
    parser.add_argument("--mapdir", type=str, default="maps", help="Directory of maps to cycle through with [ and ]")
    parser.add_argument("--fps", type=int, default=60, help="Frames per second")
    parser.add_argument("--speed", type=float, default=8.0, help="Autopilot speed in ticks/sec")
    parser.add_argument("--fullscreen", action="store_true", help="Start in fullscreen (toggle Option+Enter / F11)")
    args = parser.parse_args(argv)

    # Determine initial world
    try:
        if args.load:
            world = GridWorld.load(args.load)
        elif os.path.isdir(args.mapdir) and any(f.endswith(".txt") for f in os.listdir(args.mapdir)):
            first_map = sorted([f for f in os.listdir(args.mapdir) if f.endswith(".txt")])[0]
            world = GridWorld.load(os.path.join(args.mapdir, first_map))
        else:
            world = GridWorld.random(width=args.width, height=args.height, p_blocked=args.p)
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        raise SystemExit(2)

    pygame.init()
    try:
        Viewer(world, cell_size=args.cell, fps=args.fps, fullscreen=args.fullscreen,
               speed=args.speed, map_dir=args.mapdir).run()
    finally:
        pygame.quit()

if __name__ == "__main__":
    main()
