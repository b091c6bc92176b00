# game.py
import os
import time
from enum import Enum

from best_times import BestTimes
from maze_data import generate_maze


def _env_int(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        number = int(value)
    except ValueError:
        number = 0
    if number < 1:
        print(f"⚠️ Ignoring {name}={value!r}, using {default}")
        return default
    return number


# ==== KONFIGURASI ====
INITIAL_SIZE = _env_int("MAZE_INITIAL_SIZE", 8)
MAX_SIZE = max(_env_int("MAZE_MAX_SIZE", 24), INITIAL_SIZE)


class GameStatus(Enum):
    START = "START"
    PLAYING = "PLAYING"
    WON = "WON"


class Direction(Enum):
    # (dr, dc, sisi dinding yang harus terbuka)
    UP = (-1, 0, "top")
    DOWN = (1, 0, "bottom")
    LEFT = (0, -1, "left")
    RIGHT = (0, 1, "right")

    def __init__(self, dr, dc, wall):
        self.dr = dr
        self.dc = dc
        self.wall = wall


def level_size(level):
    """Level 1 = 8x8, tiap level +2, mentok di MAX_SIZE."""
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level!r}")
    return min(INITIAL_SIZE + (level - 1) * 2, MAX_SIZE)


def can_move(grid, pos, direction):
    r, c = pos
    return not getattr(grid[r][c].walls, direction.wall)


def step(grid, pos, direction):
    """Posisi baru kalau langkahnya legal, kalau tidak tetap di tempat."""
    if not can_move(grid, pos, direction):
        return pos
    return (pos[0] + direction.dr, pos[1] + direction.dc)


def format_time(seconds):
    mins, secs = divmod(int(seconds), 60)
    return f"{mins}:{secs:02d}"


class MazeGame:
    """State satu sesi permainan: level, maze, posisi player/goal, timer."""

    def __init__(self, best_times=None, rng=None, clock=time.monotonic):
        self.best_times = best_times if best_times is not None else BestTimes()
        self.rng = rng
        self.clock = clock

        self.level = 1
        self.status = GameStatus.START
        self.maze = []
        self.player = (0, 0)
        self.goal = (0, 0)
        self.start_time = None
        self.final_time = 0
        self.new_record = False

    # ==== INIT LEVEL ====
    def init_level(self, level):
        size = level_size(level)
        self.level = level
        self.maze = generate_maze(size, size, self.rng)
        self.player = (0, 0)
        self.goal = (size - 1, size - 1)
        self.status = GameStatus.PLAYING
        self.start_time = self.clock()
        self.final_time = 0
        self.new_record = False
        print(f"🎮 Level {level} initialized ({size}x{size})")

        # Maze 1x1: start sudah di goal
        if self.player == self.goal:
            self._handle_win()

    def next_level(self):
        self.init_level(self.level + 1)

    def restart(self):
        self.init_level(1)

    @property
    def elapsed(self):
        """Detik bulat sejak level dimulai (berhenti saat menang)."""
        if self.status == GameStatus.WON:
            return self.final_time
        if self.start_time is None:
            return 0
        return max(0, int(self.clock() - self.start_time))

    @property
    def best_time(self):
        return self.best_times.get(self.level)

    # ==== MOVEMENT ====
    def move(self, direction):
        if self.status != GameStatus.PLAYING:
            return False

        new_pos = step(self.maze, self.player, direction)
        if new_pos == self.player:
            return False

        self.player = new_pos
        if self.player == self.goal:
            self._handle_win()
        return True

    def _handle_win(self):
        self.final_time = self.elapsed
        self.status = GameStatus.WON
        self.new_record = self.best_times.submit(self.level, self.final_time)
        print(f"🎉 Win! Level {self.level} in {format_time(self.final_time)}")
