"""
Curses front end for Minesweeper.

Draws a session centred in the terminal and maps keys to session actions.
Also provides a plain-text renderer for non-interactive output.
"""
import curses
from typing import Dict, Optional, Tuple

from .cell import Status, symbol
from .game import Game, GameState
from .session import Direction, Session


HELP = """\
hlkj or arrow keys to move
HLKJ to skip 0 cells

space to uncover a cell
space on a 1-8 cell uncovers all non-flagged adjacent cells
f, m  to toggle flag
q, ^D to quit

The first action is always safe
Press any key to quit after the game has ended"""

CTRL_D = ord("d") & 0x1F
QUIT_KEYS = (ord("q"), CTRL_D)

MOVE_KEYS: Dict[int, Tuple[Direction, bool]] = {
    ord("k"): (Direction.UP, False),
    ord("K"): (Direction.UP, True),
    curses.KEY_UP: (Direction.UP, False),
    ord("j"): (Direction.DOWN, False),
    ord("J"): (Direction.DOWN, True),
    curses.KEY_DOWN: (Direction.DOWN, False),
    ord("h"): (Direction.LEFT, False),
    ord("H"): (Direction.LEFT, True),
    curses.KEY_LEFT: (Direction.LEFT, False),
    ord("l"): (Direction.RIGHT, False),
    ord("L"): (Direction.RIGHT, True),
    curses.KEY_RIGHT: (Direction.RIGHT, False),
}
FLAG_KEYS = (ord("f"), ord("m"))
ACT_KEY = ord(" ")

HEADER_HEIGHT = 3
CELL_WIDTH = 4
CELL_HEIGHT = 2

# Color pair numbers
PAIR_BACKGROUND = 1
PAIR_HEADER = {GameState.UNDECIDED: 2, GameState.WON: 3, GameState.LOST: 4}
PAIR_CURSOR_INNER = 20
PAIR_CURSOR_OUTER = 21
STATUS_PAIR_OFFSET = 10

SMILEYS = {GameState.UNDECIDED: ":|", GameState.WON: ":)", GameState.LOST: ":("}

# Flags and mines on the curses board
BOARD_SYMBOLS = {Status.FLAG: "X", Status.MINE: "#"}


# ============================================================================
# Input
# ============================================================================

def handle_key(session: Session, key: int) -> bool:
    """
    Apply one key press to the session.

    Returns:
        False if the key asks to quit, True otherwise.
    """
    if key in QUIT_KEYS:
        return False
    if key in MOVE_KEYS:
        direction, skipping = MOVE_KEYS[key]
        session.move(direction, skipping)
    elif key in FLAG_KEYS:
        session.toggle_flag()
    elif key == ACT_KEY:
        session.act()
    return True


# ============================================================================
# Text Rendering
# ============================================================================

def board_symbol(status: Status) -> str:
    """Character drawn for a status on the curses board."""
    return BOARD_SYMBOLS.get(status, symbol(status))


def render_text(game: Game, cursor: Optional[Tuple[int, int]] = None) -> str:
    """
    Render the game as plain text, one line per row.

    The cursor cell, if given, is wrapped in brackets.
    """
    lines = []
    for y in range(game.height):
        row = ""
        for x in range(game.width):
            ch = symbol(game.status_at(x, y))
            if cursor == (x, y):
                row += f"[{ch}]"
            else:
                row += f" {ch} "
        lines.append(row.rstrip())
    return "\n".join(lines)


# ============================================================================
# Curses Screen
# ============================================================================

class Screen:
    """Curses windows for the header and the board."""

    def __init__(self, stdscr: "curses.window", session: Session) -> None:
        self.stdscr = stdscr
        self.session = session
        self.board_window: Optional["curses.window"] = None
        self.header_window: Optional["curses.window"] = None

    def setup(self) -> None:
        """Configure the terminal and color pairs."""
        curses.curs_set(0)
        self.stdscr.keypad(True)
        curses.start_color()
        curses.use_default_colors()
        curses.init_pair(PAIR_BACKGROUND, curses.COLOR_WHITE, curses.COLOR_BLACK)
        curses.init_pair(PAIR_HEADER[GameState.UNDECIDED], curses.COLOR_WHITE, curses.COLOR_CYAN)
        curses.init_pair(PAIR_HEADER[GameState.WON], curses.COLOR_WHITE, curses.COLOR_GREEN)
        curses.init_pair(PAIR_HEADER[GameState.LOST], curses.COLOR_WHITE, curses.COLOR_RED)
        status_colors = {
            Status.FLAG: curses.COLOR_YELLOW,
            Status.UNKNOWN: curses.COLOR_BLACK,
            Status.ZERO: curses.COLOR_WHITE,
            Status.ONE: curses.COLOR_BLUE,
            Status.TWO: curses.COLOR_CYAN,
            Status.THREE: curses.COLOR_GREEN,
            Status.MINE: curses.COLOR_RED,
        }
        for status in Status:
            color = status_colors.get(status, curses.COLOR_BLACK)
            curses.init_pair(STATUS_PAIR_OFFSET + status, color, -1)
        curses.init_pair(PAIR_CURSOR_INNER, curses.COLOR_BLACK, -1)
        curses.init_pair(PAIR_CURSOR_OUTER, curses.COLOR_WHITE, -1)

    def layout(self) -> None:
        """Create centred windows, or explain why the board does not fit."""
        self.stdscr.clear()
        term_h, term_w = self.stdscr.getmaxyx()
        board_w = CELL_WIDTH * self.session.game.width + 1
        board_h = CELL_HEIGHT * self.session.game.height + 1
        if term_h < board_h + HEADER_HEIGHT or term_w < board_w:
            self.stdscr.attrset(curses.A_BOLD)
            self._addstr(
                self.stdscr, 0, 0,
                f"required terminal size: {board_w} x {board_h + HEADER_HEIGHT}\n"
                f"available terminal size: {term_w} x {term_h}",
            )
            self.board_window = None
            self.header_window = None
        else:
            offset_x = (term_w - board_w) // 2
            offset_y = (term_h - board_h - HEADER_HEIGHT) // 2
            self.board_window = curses.newwin(
                board_h, board_w, offset_y + HEADER_HEIGHT, offset_x
            )
            self.header_window = curses.newwin(
                HEADER_HEIGHT, board_w, offset_y, offset_x
            )
        self.stdscr.bkgd(" ", curses.color_pair(PAIR_BACKGROUND))
        self.stdscr.refresh()

    def draw_header(self) -> None:
        if self.header_window is None:
            return
        state = self.session.game.state
        self.header_window.erase()
        self.header_window.bkgd(
            " ", curses.color_pair(PAIR_HEADER[state]) | curses.A_BOLD
        )
        self._addstr(self.header_window, 1, 2, SMILEYS[state])
        self.header_window.refresh()

    def draw_board(self) -> None:
        window = self.board_window
        if window is None:
            return
        game = self.session.game
        window.erase()
        for y in range(game.height):
            for x in range(game.width):
                status = game.status_at(x, y)
                ch = curses.ACS_BULLET if status == Status.UNKNOWN else board_symbol(status)
                window.attrset(curses.color_pair(STATUS_PAIR_OFFSET + status))
                self._addch(window, 1 + CELL_HEIGHT * y, 2 + CELL_WIDTH * x, ch)
        self._draw_cursor(window)
        window.refresh()

    def _draw_cursor(self, window: "curses.window") -> None:
        game = self.session.game
        cx, cy = self.session.cursor_x, self.session.cursor_y
        sx, sy = 2 + CELL_WIDTH * cx, 1 + CELL_HEIGHT * cy
        window.attrset(curses.color_pair(PAIR_CURSOR_INNER))
        self._addch(window, sy + 1, sx + 2, curses.ACS_LRCORNER)
        self._addch(window, sy + 1, sx - 2, curses.ACS_LLCORNER)
        self._addch(window, sy - 1, sx + 2, curses.ACS_URCORNER)
        self._addch(window, sy - 1, sx - 2, curses.ACS_ULCORNER)
        if not self.session.extended_action_available:
            return
        # Outer 3x3 frame around the cells a chord would uncover
        right = cx < game.width - 1
        left = cx > 0
        below = cy < game.height - 1
        above = cy > 0
        window.attrset(curses.color_pair(PAIR_CURSOR_OUTER))
        if right and below:
            self._addch(window, sy + 3, sx + 6, curses.ACS_LRCORNER)
        if left and below:
            self._addch(window, sy + 3, sx - 6, curses.ACS_LLCORNER)
        if right and above:
            self._addch(window, sy - 3, sx + 6, curses.ACS_URCORNER)
        if left and above:
            self._addch(window, sy - 3, sx - 6, curses.ACS_ULCORNER)

    def redraw(self) -> None:
        self.layout()
        self.draw_header()
        self.draw_board()

    @staticmethod
    def _addch(window: "curses.window", y: int, x: int, ch) -> None:
        # Writing the bottom-right cell of a window raises after the write
        try:
            window.addch(y, x, ch)
        except curses.error:
            pass

    @staticmethod
    def _addstr(window: "curses.window", y: int, x: int, text: str) -> None:
        try:
            window.addstr(y, x, text)
        except curses.error:
            pass


def play(stdscr: "curses.window", session: Session) -> None:
    """Run the interactive game loop until the player quits or it ends."""
    screen = Screen(stdscr, session)
    screen.setup()
    screen.redraw()
    while True:
        screen.draw_board()
        key = stdscr.getch()
        if key == curses.KEY_RESIZE:
            screen.redraw()
            continue
        if not handle_key(session, key):
            break
        if session.is_over:
            screen.draw_board()
            screen.draw_header()
            # Any key to quit
            while stdscr.getch() == curses.KEY_RESIZE:
                screen.redraw()
            break


def run(session: Session) -> None:
    """Play a session in the current terminal."""
    curses.wrapper(play, session)
