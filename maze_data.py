# maze_data.py
import random
from collections import deque
from dataclasses import dataclass, field

# Default ukuran cell (digunakan di main.py)
CELL_SIZE = 20

# Urutan scan tetangga: atas, bawah, kiri, kanan
NEIGHBOR_STEPS = [(-1, 0), (1, 0), (0, -1), (0, 1)]

# Sisi dinding yang dilewati untuk tiap langkah (dr, dc)
WALL_FOR_STEP = {
    (-1, 0): "top",
    (1, 0): "bottom",
    (0, -1): "left",
    (0, 1): "right",
}

HEX_BITS = {"top": 1, "right": 2, "bottom": 4, "left": 8}


class MazeError(ValueError):
    """Grid tidak memenuhi syarat perfect maze."""


@dataclass
class Walls:
    top: bool = True
    right: bool = True
    bottom: bool = True
    left: bool = True


@dataclass
class Cell:
    row: int
    col: int
    walls: Walls = field(default_factory=Walls)
    visited: bool = False


def new_grid(rows, cols):
    """Semua dinding ada, semua cell belum dikunjungi."""
    return [[Cell(r, c) for c in range(cols)] for r in range(rows)]


def in_bounds(grid, pos):
    r, c = pos
    return 0 <= r < len(grid) and 0 <= c < len(grid[0])


def unvisited_neighbors(grid, pos):
    r, c = pos
    neighbors = []
    for dr, dc in NEIGHBOR_STEPS:
        nxt = (r + dr, c + dc)
        if in_bounds(grid, nxt) and not grid[nxt[0]][nxt[1]].visited:
            neighbors.append(nxt)
    return neighbors


def remove_walls(grid, a, b):
    """Buka dinding antara dua cell yang bersebelahan (kedua sisi sekaligus)."""
    dr = a[0] - b[0]
    dc = a[1] - b[1]
    if abs(dr) + abs(dc) != 1:
        raise ValueError(f"Cells {a} and {b} are not adjacent")

    cell_a = grid[a[0]][a[1]].walls
    cell_b = grid[b[0]][b[1]].walls

    if dr == 1:
        cell_a.top = False
        cell_b.bottom = False
    elif dr == -1:
        cell_a.bottom = False
        cell_b.top = False
    elif dc == 1:
        cell_a.left = False
        cell_b.right = False
    else:
        cell_a.right = False
        cell_b.left = False


def generate_maze(rows, cols, rng=None):
    """
    Generate perfect maze menggunakan depth-first backtracking (stack, bukan rekursi).

    rng cukup punya method choice(); default pakai modul random global.
    Hasilnya grid[row][col] berisi Cell dengan flag dinding top/right/bottom/left.
    """
    if isinstance(rows, bool) or not isinstance(rows, int) or rows < 1:
        raise ValueError(f"rows must be a positive integer, got {rows!r}")
    if isinstance(cols, bool) or not isinstance(cols, int) or cols < 1:
        raise ValueError(f"cols must be a positive integer, got {cols!r}")
    if rng is None:
        rng = random

    grid = new_grid(rows, cols)

    start = (0, 0)
    grid[0][0].visited = True
    stack = [start]

    while stack:
        current = stack[-1]
        neighbors = unvisited_neighbors(grid, current)

        if neighbors:
            nxt = rng.choice(neighbors)
            remove_walls(grid, current, nxt)
            grid[nxt[0]][nxt[1]].visited = True
            stack.append(nxt)
        else:
            # Backtrack
            stack.pop()

    return grid


def open_neighbors(grid, pos):
    """Cell yang bisa dicapai satu langkah dari pos (dinding sudah terbuka)."""
    r, c = pos
    walls = grid[r][c].walls
    result = []
    for (dr, dc), side in WALL_FOR_STEP.items():
        nxt = (r + dr, c + dc)
        if not getattr(walls, side) and in_bounds(grid, nxt):
            result.append(nxt)
    return result


def count_passages(grid):
    # Hitung tiap pasangan sekali saja: cukup lihat ke kanan dan ke bawah
    rows, cols = len(grid), len(grid[0])
    total = 0
    for r in range(rows):
        for c in range(cols):
            walls = grid[r][c].walls
            if c + 1 < cols and not walls.right:
                total += 1
            if r + 1 < rows and not walls.bottom:
                total += 1
    return total


def solve_path(grid, start, goal):
    """Shortest path (BFS) dari start ke goal, atau None kalau tidak tersambung."""
    if start == goal:
        return [start]

    queue = deque([start])
    came_from = {start: None}

    while queue:
        cur = queue.popleft()
        if cur == goal:
            break
        for nxt in open_neighbors(grid, cur):
            if nxt not in came_from:
                came_from[nxt] = cur
                queue.append(nxt)

    if goal not in came_from:
        return None

    path = [goal]
    while path[-1] != start:
        path.append(came_from[path[-1]])
    path.reverse()
    return path


def validate_maze(grid):
    """Raise MazeError kalau grid bukan perfect maze yang valid."""
    if not grid or not grid[0]:
        raise MazeError("Invalid maze: empty grid")

    rows, cols = len(grid), len(grid[0])

    for c in range(cols):
        if not grid[0][c].walls.top:
            raise MazeError("Invalid maze: top border has an opening")
        if not grid[rows - 1][c].walls.bottom:
            raise MazeError("Invalid maze: bottom border has an opening")
    for r in range(rows):
        if not grid[r][0].walls.left:
            raise MazeError("Invalid maze: left border has an opening")
        if not grid[r][cols - 1].walls.right:
            raise MazeError("Invalid maze: right border has an opening")

    for r in range(rows):
        for c in range(cols):
            walls = grid[r][c].walls
            if r + 1 < rows and walls.bottom != grid[r + 1][c].walls.top:
                raise MazeError(f"Invalid maze: one-sided wall between ({r},{c}) and ({r + 1},{c})")
            if c + 1 < cols and walls.right != grid[r][c + 1].walls.left:
                raise MazeError(f"Invalid maze: one-sided wall between ({r},{c}) and ({r},{c + 1})")

    reachable = {(0, 0)}
    queue = deque([(0, 0)])
    while queue:
        for nxt in open_neighbors(grid, queue.popleft()):
            if nxt not in reachable:
                reachable.add(nxt)
                queue.append(nxt)
    if len(reachable) != rows * cols:
        raise MazeError("Invalid maze: disconnected cells exist")

    # Connected + edges == nodes - 1 berarti spanning tree (tidak ada loop)
    if count_passages(grid) != rows * cols - 1:
        raise MazeError("Invalid maze: contains loops")


def maze_to_hex(grid):
    """Satu digit hex per cell: top=1, right=2, bottom=4, left=8 (bit = ada dinding)."""
    lines = []
    for row in grid:
        digits = []
        for cell in row:
            value = 0
            for side, bit in HEX_BITS.items():
                if getattr(cell.walls, side):
                    value |= bit
            digits.append(f"{value:X}")
        lines.append("".join(digits))
    return lines
