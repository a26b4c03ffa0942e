from __future__ import annotations

import argparse
from typing import FrozenSet, Optional

import pygame

from block_puzzle.game import BlockPuzzleGame, GameConfig
from block_puzzle.game.shapes import Coordinate
from block_puzzle.storage import JsonHighScoreStore
from .renderer import BACKGROUND, Renderer


FLASH_MS = 500
BANNER_MS = 1500


def run(seed: Optional[int] = None, high_score_path: Optional[str] = None) -> None:
    pygame.init()
    try:
        game = BlockPuzzleGame(GameConfig(random_seed=seed),
                               high_score_store=JsonHighScoreStore(high_score_path))
        renderer = Renderer()
        size = game.config.grid_size
        width, height = renderer.window_size(size, game.config.pieces_per_set)
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Block Puzzle (8x8)")
        font = pygame.font.SysFont(None, 28)
        big_font = pygame.font.SysFont(None, 48)

        selected_piece: Optional[int] = None
        flashing: FrozenSet[Coordinate] = frozenset()
        flash_until = 0
        banner = ""
        banner_until = 0

        key_to_index = {
            pygame.K_1: 0,
            pygame.K_2: 1,
            pygame.K_3: 2,
            pygame.K_KP1: 0,
            pygame.K_KP2: 1,
            pygame.K_KP3: 2,
        }

        running = True
        clock = pygame.time.Clock()
        while running:
            now = pygame.time.get_ticks()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in key_to_index:
                        idx = key_to_index[event.key]
                        if idx < len(game.current_pieces):
                            selected_piece = idx
                    elif event.key == pygame.K_n:
                        game.reset()
                        selected_piece = None
                    elif event.key == pygame.K_c:
                        game.clear_high_score()
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and not game.game_over:
                    for idx, rect in enumerate(renderer.tray_rects(size, game.current_pieces)):
                        if rect.collidepoint(event.pos):
                            selected_piece = idx
                            break
                    else:
                        if selected_piece is not None:
                            row, col = renderer.cell_at(*event.pos)
                            outcome = game.place_piece(selected_piece, row, col)
                            if outcome.placed:
                                selected_piece = None
                                if outcome.lines_cleared:
                                    flashing = outcome.cleared_positions
                                    flash_until = now + FLASH_MS
                                    banner = (f"{outcome.lines_cleared} lines! "
                                              f"{outcome.streak}x streak +{outcome.points}")
                                    banner_until = now + BANNER_MS
                            if outcome.game_over:
                                print(f"Game over. Final score: {game.score}")

            if now >= flash_until:
                flashing = frozenset()

            # Draw
            screen.fill(BACKGROUND)
            renderer.draw_board(screen, game.grid, flashing)
            if selected_piece is not None and not game.game_over:
                row, col = renderer.cell_at(*pygame.mouse.get_pos())
                renderer.draw_preview(screen, game.preview(selected_piece, row, col))
            renderer.draw_tray(screen, size, game.current_pieces, selected_piece)

            m = renderer.margin
            renderer.draw_text(screen, big_font, str(game.score), (m, m), (250, 204, 21))
            if game.high_score > 0:
                renderer.draw_text(screen, font, f"HIGH: {game.high_score}", (m, m + 40), (254, 240, 138))
            if game.streak > 1:
                renderer.draw_text(screen, font, f"{game.streak}x STREAK", (m + 200, m), (249, 115, 22))
            if now < banner_until:
                renderer.draw_text(screen, font, banner, (m + 200, m + 40))
            if game.game_over:
                renderer.draw_text(screen, big_font, "Game Over! Press N", (m, height // 2), (255, 100, 100))
                if game.score >= game.high_score and game.score > 0:
                    renderer.draw_text(screen, font, "New High Score!", (m, height // 2 + 44), (250, 204, 21))

            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--high-score-file", type=str, default=None)
    args = p.parse_args()
    run(args.seed, args.high_score_file)


if __name__ == "__main__":  # pragma: no cover
    main()
