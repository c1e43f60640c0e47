from __future__ import annotations

import argparse
import logging
from typing import Callable, Optional

from tetris_dojo_bot.ai.controller import TurnController
from tetris_dojo_bot.ai.errors import NoLegalMoveError
from tetris_dojo_bot.ai.profiles import PROFILES
from tetris_dojo_bot.config import AgentConfig, parse_level_profiles
from tetris_dojo_bot.game import GameConfig, TetrisGame

logger = logging.getLogger("tetris_dojo_bot.play")


def play_game(
    game: TetrisGame,
    controller: TurnController,
    max_pieces: int = 500,
    on_turn: Optional[Callable[[TetrisGame], None]] = None,
) -> dict:
    """Let the controller play until the glass overflows or ``max_pieces`` drop."""
    stuck = False
    while not game.game_over and game.pieces_dropped < max_pieces:
        snapshot = game.snapshot()
        try:
            command = controller.answer(snapshot)
        except NoLegalMoveError as exc:
            logger.warning("%s; ending game", exc)
            logger.debug("Glass at the dead end:\n%s", snapshot.render())
            stuck = True
            break
        logger.debug("piece %d: %s", game.pieces_dropped + 1, command)
        game.execute(command)
        if on_turn is not None:
            on_turn(game)
    return {
        "score": game.score,
        "lines": game.lines_cleared_total,
        "pieces": game.pieces_dropped,
        "level": game.level,
        "game_over": game.game_over or stuck,
    }


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play the heuristic agent against a local glass")
    p.add_argument("--profile", choices=sorted(PROFILES), default="dellacherie")
    p.add_argument("--level-profile", action="append", default=[], metavar="LEVEL=PROFILE",
                   help="Use a different profile on a given level (repeatable)")
    p.add_argument("--size", type=int, default=18)
    p.add_argument("--games", type=int, default=1)
    p.add_argument("--pieces", type=int, default=500)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--render", action="store_true")
    p.add_argument("--fps", type=int, default=10)
    p.add_argument("--log-level", default="INFO")
    return p


def _render_callback(size: int, fps: int) -> Callable[[TetrisGame], None]:
    import pygame

    from tetris_dojo_bot.visualization.renderer import Renderer

    pygame.init()
    renderer = Renderer()
    screen = pygame.display.set_mode(renderer.window_size(size))
    pygame.display.set_caption("Tetris dojo bot")
    clock = pygame.time.Clock()

    def on_turn(game: TetrisGame) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                raise KeyboardInterrupt
        renderer.draw(screen, game)
        clock.tick(fps)

    return on_turn


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(message)s")

    config = AgentConfig(
        profile=args.profile,
        level_profiles=parse_level_profiles(args.level_profile),
        board_size=args.size,
    )
    controller = TurnController(config)
    on_turn = _render_callback(config.board_size, args.fps) if args.render else None

    try:
        for i in range(args.games):
            seed = None if args.seed is None else args.seed + i
            game = TetrisGame(GameConfig(size=config.board_size, random_seed=seed))
            stats = play_game(game, controller, max_pieces=args.pieces, on_turn=on_turn)
            logger.info(
                "game %d/%d: score=%d lines=%d pieces=%d level=%d",
                i + 1, args.games, stats["score"], stats["lines"], stats["pieces"], stats["level"],
            )
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        if args.render:
            import pygame

            pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    main()
