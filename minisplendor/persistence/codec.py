"""
Save File Codec - Line-oriented text format for a GameState.

Format (UTF-8, one record per line, in this order):

    CURRENT_PLAYER_INDEX:<int>
    CHIPS_TAKEN:Red=0;Blue=0;Green=0;Black=0;White=0;
    PLAYER_COUNT:<int>
    PLAYER:<index>          } repeated per player,
    SCORE:<int>             } in turn order
    CHIPS:<Color>=<int>;... }
    CARD_COUNT:<int>
    CARD:<id>               } repeated per card,
    POINTS:<int>            } in table order
    COST:<Color>=<int>;...  }

Reading is tolerant:
- unknown color names, unparseable or negative counts are skipped
- unknown line prefixes and blank lines are ignored
- colors missing from a mapping are zero
- a CARD record whose id does not parse is dropped

A file that can't be read, holds no records, or describes an impossible
state fails as a whole with SaveFileError.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
import logging

from ..engine_core.state import MAX_PLAYERS, Card, ChipColor, GameState, Player, TokenBag
from ..errors import SaveFileError

logger = logging.getLogger(__name__)

CURRENT_PLAYER_INDEX = "CURRENT_PLAYER_INDEX:"
CHIPS_TAKEN = "CHIPS_TAKEN:"
PLAYER_COUNT = "PLAYER_COUNT:"
PLAYER = "PLAYER:"
SCORE = "SCORE:"
CHIPS = "CHIPS:"
CARD_COUNT = "CARD_COUNT:"
CARD = "CARD:"
POINTS = "POINTS:"
COST = "COST:"

ENCODING = "utf-8"


def encode_chips(bag: TokenBag) -> str:
    """Render a bag as `Color=count;` pairs in color order."""
    return "".join(f"{color.value}={count};" for color, count in bag.items())


def decode_chips(data: str) -> TokenBag:
    """Parse `Color=count;` pairs, skipping anything malformed."""
    counts: dict[ChipColor, int] = {}
    for pair in data.split(";"):
        if "=" not in pair:
            continue
        name, _, raw_count = pair.partition("=")
        color = ChipColor.parse(name)
        count = _parse_int(raw_count)
        if color is None or count is None or count < 0:
            logger.debug("Skipping chip entry %r", pair)
            continue
        counts[color] = count
    return TokenBag.of(counts)


def dumps(state: GameState) -> str:
    """Serialize a game state to save-file text."""
    lines = [
        f"{CURRENT_PLAYER_INDEX}{state.current_player_idx}",
        f"{CHIPS_TAKEN}{encode_chips(state.chips_taken)}",
    ]

    players = state.players
    lines.append(f"{PLAYER_COUNT}{len(players)}")
    for index, player in enumerate(players):
        lines.append(f"{PLAYER}{index}")
        lines.append(f"{SCORE}{player.score}")
        lines.append(f"{CHIPS}{encode_chips(player.tokens)}")

    cards = state.cards
    lines.append(f"{CARD_COUNT}{len(cards)}")
    for card in cards:
        lines.append(f"{CARD}{card.card_id}")
        lines.append(f"{POINTS}{card.points}")
        lines.append(f"{COST}{encode_chips(card.cost)}")

    return "\n".join(lines) + "\n"


def loads(text: str) -> GameState:
    """Parse save-file text into a new GameState."""
    return _SaveFileReader().read(text)


@dataclass
class _CardRecord:
    card_id: int
    points: int = 0
    cost: TokenBag = field(default_factory=TokenBag.empty)


@dataclass
class _SaveFileReader:
    """Accumulates records line by line; builds the state at the end."""
    current_player_idx: int = 0
    chips_taken: TokenBag = field(default_factory=TokenBag.empty)
    players: list[Player] = field(default_factory=list)
    cards: list[_CardRecord] = field(default_factory=list)
    declared_players: int | None = None
    declared_cards: int | None = None
    records_seen: int = 0

    # The open PLAYER / CARD record that field lines attach to
    _player: Player | None = None
    _card: _CardRecord | None = None
    _in_card_section: bool = False

    def read(self, text: str) -> GameState:
        for line_no, raw_line in enumerate(text.splitlines(), start=1):
            line = raw_line.strip()
            if line:
                self._read_line(line, line_no)

        if self.records_seen == 0:
            raise SaveFileError("No game records found")

        if self.declared_players is not None and self.declared_players != len(self.players):
            logger.warning(
                "PLAYER_COUNT says %d but %d players were read",
                self.declared_players, len(self.players),
            )
        if self.declared_cards is not None and self.declared_cards != len(self.cards):
            logger.warning(
                "CARD_COUNT says %d but %d cards were read",
                self.declared_cards, len(self.cards),
            )

        # Either the pre-game table or a full game
        if len(self.players) not in (0, MAX_PLAYERS):
            raise SaveFileError(
                f"Saved game has {len(self.players)} players, expected {MAX_PLAYERS}"
            )

        try:
            return GameState(
                players=self.players,
                cards=[Card(r.card_id, r.cost, r.points) for r in self.cards],
                current_player_idx=self.current_player_idx,
                chips_taken=self.chips_taken,
            )
        except ValueError as e:
            raise SaveFileError(f"Saved state is inconsistent: {e}") from e

    def _read_line(self, line: str, line_no: int):
        if line.startswith(CURRENT_PLAYER_INDEX):
            self._set_int("current_player_idx", line[len(CURRENT_PLAYER_INDEX):], line_no)
        elif line.startswith(CHIPS_TAKEN):
            self.chips_taken = decode_chips(line[len(CHIPS_TAKEN):])
        elif line.startswith(PLAYER_COUNT):
            self.declared_players = _parse_int(line[len(PLAYER_COUNT):])
        elif line.startswith(PLAYER):
            self._player = Player()
            self.players.append(self._player)
        elif line.startswith(SCORE):
            if self._player is not None and not self._in_card_section:
                score = _parse_int(line[len(SCORE):])
                if score is None or score < 0:
                    logger.debug("Line %d: bad score %r", line_no, line)
                else:
                    self._player.score = score
        elif line.startswith(CHIPS):
            if self._player is not None and not self._in_card_section:
                self._player.tokens = decode_chips(line[len(CHIPS):])
        elif line.startswith(CARD_COUNT):
            self._in_card_section = True
            self._player = None
            self.declared_cards = _parse_int(line[len(CARD_COUNT):])
        elif line.startswith(CARD):
            self._in_card_section = True
            self._player = None
            card_id = _parse_int(line[len(CARD):])
            if card_id is None:
                logger.debug("Line %d: dropping card with bad id %r", line_no, line)
                self._card = None
            else:
                self._card = _CardRecord(card_id=card_id)
                self.cards.append(self._card)
        elif line.startswith(POINTS):
            if self._card is not None:
                points = _parse_int(line[len(POINTS):])
                if points is None or points < 0:
                    logger.debug("Line %d: bad points %r", line_no, line)
                else:
                    self._card.points = points
        elif line.startswith(COST):
            if self._card is not None:
                self._card.cost = decode_chips(line[len(COST):])
        else:
            logger.debug("Line %d: ignoring unknown record %r", line_no, line)
            return

        self.records_seen += 1

    def _set_int(self, attr: str, raw: str, line_no: int):
        value = _parse_int(raw)
        if value is None:
            logger.debug("Line %d: bad integer for %s: %r", line_no, attr, raw)
            return
        setattr(self, attr, value)


def _parse_int(raw: str) -> int | None:
    try:
        return int(raw.strip())
    except ValueError:
        return None


class SaveFileCodec:
    """
    Reads and writes save files on disk.

    Usage:
        codec = SaveFileCodec()
        codec.save(state, "game.sav")
        state = codec.load("game.sav")
    """

    def __init__(self, encoding: str = ENCODING):
        self.encoding = encoding

    def save(self, state: GameState, path: str | Path):
        """Write `state` to `path`. Raises SaveFileError on I/O failure."""
        path = Path(path)
        try:
            path.write_text(dumps(state), encoding=self.encoding)
        except OSError as e:
            raise SaveFileError(f"Could not write {path}: {e}", path=str(path)) from e

    def load(self, path: str | Path) -> GameState:
        """Read a new GameState from `path`. Raises SaveFileError on any failure."""
        path = Path(path)
        try:
            text = path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise SaveFileError(f"Could not read {path}: {e}", path=str(path)) from e

        try:
            return loads(text)
        except SaveFileError as e:
            e.path = str(path)
            raise
