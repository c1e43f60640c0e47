from __future__ import annotations

from typing import List

LEFT = "LEFT"
RIGHT = "RIGHT"
DOWN = "DOWN"
SEPARATOR = ","


def rotate_token(quarter_turns: int) -> str:
    return f"ACT({quarter_turns})"


def encode_move(rotation: int, target_x: int, current_x: int) -> str:
    """Command string that turns the piece, slides it to ``target_x`` and drops it.

    The resting row is left to the server's own gravity, so no vertical
    component is emitted.
    """
    tokens: List[str] = []
    if rotation != 0:
        tokens.append(rotate_token(rotation))
    dx = target_x - current_x
    tokens.extend([RIGHT if dx > 0 else LEFT] * abs(dx))
    tokens.append(DOWN)
    return SEPARATOR.join(tokens)
