"""PGN parsing and serialization helpers."""

from __future__ import annotations

import logging
import re
from datetime import date

from chessgame.config import EngineSettings
from chessgame.core.enums import Team
from chessgame.core.errors import ChessError, IllegalDestinationError
from chessgame.core.game import DRAW, Game, GameResult
from chessgame.core.notation.fen import STARTING_FEN
from chessgame.core.notation.models import ParsedPgn, PgnMove
from chessgame.core.notation.san import game_to_san_moves, parse_san

_LOGGER = logging.getLogger(__name__)

_PGN_HEADER_RE = re.compile(r'^\[(\w+)\s+"((?:[^"\\]|\\.)*)"\]\s*$')
_PGN_RESULT_TOKENS = {"1-0", "0-1", "1/2-1/2", "*"}
_MOVE_NUMBER_RE = re.compile(r"^\d+\.(?:\.\.)?$")
_GLUED_MOVE_NUMBER_RE = re.compile(r"^\d+\.+")

SEVEN_TAG_ROSTER: tuple[str, ...] = ("Event", "Site", "Date", "Round", "White", "Black", "Result")


def result_to_pgn(result: GameResult) -> str:
    """Convert a game result (winning team, ``"DRAW"`` or ``None``) to a PGN token."""
    if result is Team.WHITE:
        return "1-0"
    if result is Team.BLACK:
        return "0-1"
    if result == DRAW:
        return "1/2-1/2"
    return "*"


def result_from_pgn(token: str) -> GameResult:
    """Convert a PGN result token back to a game result."""
    if token == "1-0":
        return Team.WHITE
    if token == "0-1":
        return Team.BLACK
    if token == "1/2-1/2":
        return DRAW
    return None


def pgn_movetext_from_sans(
    sans: list[str],
    result_token: str,
    *,
    first_move_number: int = 1,
    black_first: bool = False,
) -> str:
    """Build PGN movetext from SAN moves and a result token."""
    return pgn_movetext_from_moves(
        [PgnMove(san=san) for san in sans],
        result_token,
        first_move_number=first_move_number,
        black_first=black_first,
    )


def pgn_movetext_from_moves(
    moves: list[PgnMove],
    result_token: str,
    *,
    first_move_number: int = 1,
    black_first: bool = False,
) -> str:
    """Build PGN movetext from mainline moves with optional comments.

    ``black_first`` starts the text with ``N...`` for games set up with
    black to move.
    """
    parts: list[str] = []
    offset = 1 if black_first else 0
    for idx, move in enumerate(moves):
        ply = idx + offset
        number = first_move_number + ply // 2
        if ply % 2 == 0:
            parts.append(f"{number}.")
        elif idx == 0:
            parts.append(f"{number}...")
        parts.append(move.san)
        if move.comment:
            # PGN comments cannot contain a closing brace.
            safe_comment = move.comment.replace("}", "]")
            parts.append(f"{{{safe_comment}}}")
    parts.append(result_token)
    return " ".join(parts)


def _header_lines(headers: dict[str, str]) -> list[str]:
    lines: list[str] = []
    for key, value in headers.items():
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        lines.append(f'[{key} "{escaped}"]')
    return lines


def build_pgn(
    headers: dict[str, str],
    sans: list[str],
    result_token: str,
    comments: list[str | None] | None = None,
    *,
    first_move_number: int = 1,
    black_first: bool = False,
) -> str:
    """Build a single-game PGN document."""
    if comments is not None and len(comments) != len(sans):
        raise ValueError("PGN comments length must match SAN move length")

    moves: list[PgnMove] = []
    for idx, san in enumerate(sans):
        comment = ""
        if comments is not None and comments[idx]:
            comment = comments[idx] or ""
        moves.append(PgnMove(san=san, comment=comment))

    lines = _header_lines(headers)
    lines.append("")
    lines.append(
        pgn_movetext_from_moves(
            moves, result_token, first_move_number=first_move_number, black_first=black_first
        )
    )
    lines.append("")
    return "\n".join(lines)


def game_to_pgn(game: Game, headers: dict[str, str] | None = None) -> str:
    """Export *game* as a PGN document.

    The Seven Tag Roster is always present (``?`` for unknown values, today's
    date); *headers* override or extend it.  A game that did not start from
    the standard position gets ``SetUp`` and ``FEN`` tags.
    """
    result_token = result_to_pgn(game.get_result())
    tags: dict[str, str] = dict.fromkeys(SEVEN_TAG_ROSTER, "?")
    tags["Date"] = date.today().strftime("%Y.%m.%d")
    if game.start_fen != STARTING_FEN:
        tags["SetUp"] = "1"
        tags["FEN"] = game.start_fen
    if headers:
        tags.update(headers)
    tags["Result"] = result_token

    start_fields = game.start_fen.split()
    return build_pgn(
        tags,
        game_to_san_moves(game),
        result_token,
        first_move_number=int(start_fields[5]),
        black_first=start_fields[1] == "b",
    )


def _append_comment(move: PgnMove, comment: str) -> None:
    clean = " ".join(comment.split())
    if not clean:
        return
    if move.comment:
        move.comment = f"{move.comment} {clean}"
    else:
        move.comment = clean


def _parse_pgn_movetext_mainline(movetext: str) -> tuple[list[PgnMove], str]:
    """Parse movetext and return mainline moves/comments plus result token."""
    moves: list[PgnMove] = []
    result_token = "*"
    variation_depth = 0
    idx = 0
    total = len(movetext)

    while idx < total:
        ch = movetext[idx]

        if ch.isspace():
            idx += 1
            continue

        if ch == "{":
            end = movetext.find("}", idx + 1)
            if end < 0:
                comment = movetext[idx + 1 :]
                idx = total
            else:
                comment = movetext[idx + 1 : end]
                idx = end + 1
            if variation_depth == 0 and moves:
                _append_comment(moves[-1], comment)
            continue

        if ch == ";":
            end = movetext.find("\n", idx + 1)
            if end < 0:
                end = total
            comment = movetext[idx + 1 : end]
            if variation_depth == 0 and moves:
                _append_comment(moves[-1], comment)
            idx = end
            continue

        if ch == "(":
            variation_depth += 1
            idx += 1
            continue

        if ch == ")":
            variation_depth = max(0, variation_depth - 1)
            idx += 1
            continue

        token_end = idx
        while (
            token_end < total
            and not movetext[token_end].isspace()
            and movetext[token_end] not in "{};()"
        ):
            token_end += 1
        token = movetext[idx:token_end]
        idx = token_end

        if not token or variation_depth > 0:
            continue

        if token in _PGN_RESULT_TOKENS:
            result_token = token
            continue

        if _MOVE_NUMBER_RE.match(token):
            continue

        if token.startswith("$") and token[1:].isdigit():
            continue

        # "12.e4" and "12...e5" carry the move number on the move itself.
        token = _GLUED_MOVE_NUMBER_RE.sub("", token)
        if not token:
            continue

        moves.append(PgnMove(san=token))

    return moves, result_token


def parse_pgn_game(pgn_text: str) -> ParsedPgn:
    """Parse a single PGN game into headers, mainline moves and result."""
    headers: dict[str, str] = {}
    move_lines: list[str] = []
    in_headers = True

    for raw_line in pgn_text.splitlines():
        line = raw_line.strip()
        if not line:
            if in_headers and not headers:
                continue
            in_headers = False
            continue

        if in_headers and line.startswith("["):
            match = _PGN_HEADER_RE.match(line)
            if match is None:
                raise ValueError(f"Invalid PGN header line: {line}")
            key, raw_value = match.groups()
            value = raw_value.replace('\\"', '"').replace("\\\\", "\\")
            headers[key] = value
            continue

        in_headers = False
        if line.startswith("%"):
            continue
        move_lines.append(line)

    moves, result_token = _parse_pgn_movetext_mainline("\n".join(move_lines))
    header_result = headers.get("Result")
    if result_token == "*" and header_result in _PGN_RESULT_TOKENS:
        result_token = header_result

    return ParsedPgn(headers=headers, moves=moves, result_token=result_token)


def parse_pgn(pgn_text: str) -> tuple[dict[str, str], list[str], str]:
    """Parse PGN into headers, SAN mainline and result token."""
    parsed = parse_pgn_game(pgn_text)
    return parsed.headers, [move.san for move in parsed.moves], parsed.result_token


def game_from_pgn(pgn_text: str, settings: EngineSettings | None = None) -> Game:
    """Replay the mainline of a PGN game and return the resulting :class:`Game`.

    Raises :class:`~chessgame.core.errors.IllegalDestinationError` naming
    the first move that cannot be played.
    """
    parsed = parse_pgn_game(pgn_text)
    game = Game.from_fen(parsed.start_fen or STARTING_FEN, settings=settings)
    for ply, pgn_move in enumerate(parsed.moves, start=1):
        try:
            game.execute_move(parse_san(game, pgn_move.san))
        except ChessError as exc:
            _LOGGER.debug("PGN replay stopped at ply %d (%s): %s", ply, pgn_move.san, exc)
            raise IllegalDestinationError(f"Ply {ply} ({pgn_move.san}): {exc}") from exc
    return game
