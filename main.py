import pygame
import asyncio

from maze_data import CELL_SIZE, maze_to_hex, solve_path
from best_times import BestTimes, IS_WEB
from game import MAX_SIZE, Direction, GameStatus, MazeGame, format_time

# ==== KONFIGURASI ====
FPS = 60
HUD_HEIGHT = 110
WALL_THICK = 2
MOVE_DELAY = 120  # ms antar langkah saat tombol ditahan

# ==== INISIALISASI PYGAME ====
pygame.init()

# ==== SCREEN SETUP ====
BOARD_SIZE = MAX_SIZE * CELL_SIZE
SCREEN_WIDTH = BOARD_SIZE
SCREEN_HEIGHT = BOARD_SIZE + HUD_HEIGHT
screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
pygame.display.set_caption("Neon Runner")

# ==== WARNA ====
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
SLATE = (15, 23, 42)
PANEL = (30, 41, 59)
WALL = (100, 116, 139)
CYAN = (6, 182, 212)
EMERALD = (52, 211, 153)
GRAY = (128, 128, 128)
YELLOW = (250, 204, 21)

# ==== FONT ====
font_small = pygame.font.SysFont(None, 24)
font_large = pygame.font.SysFont(None, 48)
font_huge = pygame.font.SysFont(None, 72)

# ==== KEY MAP ====
MOVE_KEYS = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}


def board_offset(game):
    # Maze kecil digambar di tengah papan
    size = len(game.maze) * CELL_SIZE
    pad = (BOARD_SIZE - size) // 2
    return pad, pad


def draw_maze(game, show_hint):
    ox, oy = board_offset(game)

    if show_hint:
        path = solve_path(game.maze, game.player, game.goal) or []
        for r, c in path:
            rect = pygame.Rect(ox + c * CELL_SIZE, oy + r * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            pygame.draw.rect(screen, PANEL, rect)

    for row in game.maze:
        for cell in row:
            x = ox + cell.col * CELL_SIZE
            y = oy + cell.row * CELL_SIZE
            walls = cell.walls
            if walls.top:
                pygame.draw.line(screen, WALL, (x, y), (x + CELL_SIZE, y), WALL_THICK)
            if walls.right:
                pygame.draw.line(screen, WALL, (x + CELL_SIZE, y), (x + CELL_SIZE, y + CELL_SIZE), WALL_THICK)
            if walls.bottom:
                pygame.draw.line(screen, WALL, (x, y + CELL_SIZE), (x + CELL_SIZE, y + CELL_SIZE), WALL_THICK)
            if walls.left:
                pygame.draw.line(screen, WALL, (x, y), (x, y + CELL_SIZE), WALL_THICK)

    # Goal
    gr, gc = game.goal
    center = (ox + gc * CELL_SIZE + CELL_SIZE // 2, oy + gr * CELL_SIZE + CELL_SIZE // 2)
    pygame.draw.circle(screen, EMERALD, center, CELL_SIZE // 3, 2)
    pygame.draw.circle(screen, EMERALD, center, CELL_SIZE // 6)

    # Player
    pr, pc = game.player
    inset = CELL_SIZE // 5
    player_rect = pygame.Rect(
        ox + pc * CELL_SIZE + inset,
        oy + pr * CELL_SIZE + inset,
        CELL_SIZE - 2 * inset,
        CELL_SIZE - 2 * inset,
    )
    pygame.draw.rect(screen, CYAN, player_rect)


def draw_hud(game):
    ui_y = BOARD_SIZE
    pygame.draw.rect(screen, PANEL, (0, ui_y, SCREEN_WIDTH, HUD_HEIGHT))

    stage_text = font_large.render(f"Stage {game.level}", True, CYAN)
    screen.blit(stage_text, (10, ui_y + 10))

    timer_text = font_large.render(format_time(game.elapsed), True, EMERALD)
    screen.blit(timer_text, timer_text.get_rect(topright=(SCREEN_WIDTH - 10, ui_y + 10)))

    best = game.best_time
    best_label = format_time(best) if best is not None else "--:--"
    best_text = font_small.render(f"Personal Best: {best_label}", True, YELLOW)
    screen.blit(best_text, best_text.get_rect(topright=(SCREEN_WIDTH - 10, ui_y + 55)))

    help_text = font_small.render("WASD/Arrows move  H hint  R reset", True, GRAY)
    screen.blit(help_text, (10, ui_y + 80))


def draw_overlay(lines):
    overlay = pygame.Surface((SCREEN_WIDTH, BOARD_SIZE))
    overlay.set_alpha(210)
    overlay.fill(BLACK)
    screen.blit(overlay, (0, 0))

    y = BOARD_SIZE // 2 - 80
    for text, font, color in lines:
        surf = font.render(text, True, color)
        screen.blit(surf, surf.get_rect(center=(SCREEN_WIDTH // 2, y)))
        y += 70


def handle_keydown(game, key, state):
    if game.status == GameStatus.START:
        if key in (pygame.K_RETURN, pygame.K_SPACE):
            game.init_level(1)
        return

    if key == pygame.K_r:
        game.restart()
    elif key == pygame.K_n and game.status == GameStatus.WON:
        game.next_level()
    elif key == pygame.K_h:
        state["show_hint"] = not state["show_hint"]
    elif key == pygame.K_F1:
        print("\n".join(maze_to_hex(game.maze)))
    elif key in MOVE_KEYS:
        game.move(MOVE_KEYS[key])
        state["last_move_time"] = pygame.time.get_ticks()


# ==== MAIN GAME LOOP ====
async def main():
    best_times = BestTimes()
    best_times.load()
    game = MazeGame(best_times)
    print(f"🎮 Neon Runner ready (web={IS_WEB})")

    clock = pygame.time.Clock()
    state = {"show_hint": False, "last_move_time": 0}
    running = True

    while running:
        clock.tick(FPS)
        current_time = pygame.time.get_ticks()

        # Handle events
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                handle_keydown(game, event.key, state)

        # ============ MOVEMENT (tombol ditahan: jeda awal 2x, lalu tiap MOVE_DELAY) ============
        if game.status == GameStatus.PLAYING and current_time - state["last_move_time"] > MOVE_DELAY * 2:
            keys = pygame.key.get_pressed()
            for key, direction in MOVE_KEYS.items():
                if keys[key]:
                    game.move(direction)
                    state["last_move_time"] = current_time - MOVE_DELAY
                    break

        # ============ DRAW ============
        screen.fill(SLATE)

        if game.maze:
            draw_maze(game, state["show_hint"])
        draw_hud(game)

        if game.status == GameStatus.START:
            draw_overlay([
                ("NEON RUNNER", font_huge, WHITE),
                ("Escape the labyrinth.", font_small, GRAY),
                ("Press Enter to begin", font_large, CYAN),
            ])
        elif game.status == GameStatus.WON:
            record = "New record!" if game.new_record else ""
            draw_overlay([
                ("LEVEL CLEAR", font_huge, EMERALD),
                (f"Time: {format_time(game.final_time)}  {record}", font_large, WHITE),
                ("N next stage   R reset progress", font_large, WHITE),
            ])

        pygame.display.flip()
        await asyncio.sleep(0)  # CRITICAL for Pygbag

    pygame.quit()


# ==== RUN ====
if __name__ == "__main__":
    asyncio.run(main())
