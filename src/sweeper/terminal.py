"""
Terminal adapters for Minesweeper game.

AnsiBackend turns draw commands into ANSI escape sequences and
KeyReader turns raw keyboard input into key tokens. Neither holds any
game logic.
"""
import os
import sys
from typing import Callable, Dict, Iterator, List, Optional, TextIO

from .controls import Key
from .render import Command, DrawGlyph, DrawText, Glyph, MoveCursor


# ============================================================================
# ANSI Render Backend
# ============================================================================

ESC = "\033["
RESET = "\033[0m"


def _rgb(red: int, green: int, blue: int) -> str:
    return f"\033[38;2;{red};{green};{blue}m"


GLYPH_STRINGS: Dict[Glyph, str] = {
    Glyph.HIDDEN: f"\033[48;2;64;64;64m.{RESET}",
    Glyph.FLAG: f"\033[7m{_rgb(255, 255, 0)}!{RESET}",
    Glyph.QUESTION: f"\033[7m{_rgb(224, 152, 203)}?{RESET}",
    Glyph.NUMBER_0: f"{_rgb(100, 100, 100)}0{RESET}",
    Glyph.NUMBER_1: f"{_rgb(149, 253, 141)}1{RESET}",
    Glyph.NUMBER_2: f"{_rgb(193, 253, 141)}2{RESET}",
    Glyph.NUMBER_3: f"{_rgb(253, 252, 141)}3{RESET}",
    Glyph.NUMBER_4: f"{_rgb(253, 211, 141)}4{RESET}",
    Glyph.NUMBER_5: f"{_rgb(253, 165, 141)}5{RESET}",
    Glyph.NUMBER_6: f"{_rgb(253, 141, 176)}6{RESET}",
    Glyph.NUMBER_7: f"{_rgb(253, 141, 220)}7{RESET}",
    Glyph.NUMBER_8: f"{_rgb(237, 141, 253)}8{RESET}",
    Glyph.MINE: f"{_rgb(255, 0, 0)}X{RESET}",
    Glyph.FLAG_CORRECT: f"\033[7m{_rgb(149, 253, 141)}!{RESET}",
    Glyph.FLAG_WRONG: f"\033[7m{_rgb(156, 156, 156)}!{RESET}",
    Glyph.DETONATED: f"\033[7m{_rgb(255, 0, 0)}X{RESET}",
    Glyph.BLANK: "",
}


class AnsiBackend:
    """
    Render backend for ANSI terminals.

    Each grid cell takes two terminal columns (glyph plus a gap), so
    cell column x lives at terminal column 2x + 1.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def begin(self, height: int) -> None:
        """Reserve lines for the grid and status line, back on the origin."""
        self.stream.write("\n" * height + f"{ESC}{height}A{ESC}1G")
        self.stream.flush()

    def execute(self, commands: List[Command]) -> None:
        """Write a batch of commands and flush."""
        self.stream.write("".join(self.translate(command) for command in commands))
        self.stream.flush()

    def translate(self, command: Command) -> str:
        """Escape sequence for a single command."""
        if isinstance(command, MoveCursor):
            return self._move(command)
        if isinstance(command, DrawGlyph):
            text = GLYPH_STRINGS[command.glyph]
            return f"{text}{ESC}1D" if text else ""
        if isinstance(command, DrawText):
            return f"{ESC}2K{command.text}"
        raise TypeError(f"Unknown draw command: {command!r}")

    @staticmethod
    def _move(command: MoveCursor) -> str:
        parts = []
        if command.dy > 0:
            parts.append(f"{ESC}{command.dy}B")
        elif command.dy < 0:
            parts.append(f"{ESC}{-command.dy}A")

        if command.dy == 0 and command.dx == 1:
            parts.append(f"{ESC}2C")
        elif command.dy == 0 and command.dx == -1:
            parts.append(f"{ESC}2D")
        elif command.dx != 0:
            parts.append(f"{ESC}{command.x * 2 + 1}G")
        return "".join(parts)


# ============================================================================
# Raw Key Reader
# ============================================================================

POSIX_KEYS: Dict[str, Key] = {
    "\r": Key.CONFIRM,
    "\n": Key.CONFIRM,
    "'": Key.MARK,
    "\x03": Key.QUIT,
    "q": Key.QUIT,
}

# Final bytes of the CSI (ESC [) and SS3 (ESC O) cursor key sequences
POSIX_ARROWS: Dict[str, Key] = {
    "A": Key.UP,
    "B": Key.DOWN,
    "C": Key.RIGHT,
    "D": Key.LEFT,
}

# Windows console scan codes following a 0xE0 or 0x00 prefix
WINDOWS_KEYS: Dict[str, Key] = {
    "\r": Key.CONFIRM,
    "'": Key.MARK,
    "\x03": Key.QUIT,
    "q": Key.QUIT,
    "\xe0": Key.ARROW_PREFIX,
    "\x00": Key.ARROW_PREFIX,
    "H": Key.UP,
    "P": Key.DOWN,
    "K": Key.LEFT,
    "M": Key.RIGHT,
}


def _posix_getch() -> str:
    """Read one character with the terminal in raw mode."""
    import termios
    import tty

    fd = sys.stdin.fileno()
    old_settings = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        return sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


def _windows_getch() -> str:
    import msvcrt

    return msvcrt.getwch()


class KeyReader:
    """
    Iterable of key tokens read from the keyboard.

    Blocks on each character. Unmapped characters are skipped and the
    iteration ends when the input is closed.
    """

    def __init__(
        self,
        getch: Optional[Callable[[], str]] = None,
        windows: Optional[bool] = None,
    ) -> None:
        """
        Args:
            getch: Function returning one character, "" at end of input.
            windows: Use Windows console key codes; detected when None.
        """
        self.windows = os.name == "nt" if windows is None else windows
        if getch is None:
            getch = _windows_getch if self.windows else _posix_getch
        self.getch = getch
        self.keymap = WINDOWS_KEYS if self.windows else POSIX_KEYS

    def __iter__(self) -> Iterator[Key]:
        while True:
            char = self.getch()
            if not char:
                return
            if char == "\x1b" and not self.windows:
                direction = POSIX_ARROWS.get(self._read_escape_sequence())
                if direction is not None:
                    yield Key.ARROW_PREFIX
                    yield direction
                continue
            key = self.keymap.get(char)
            if key is not None:
                yield key

    def _read_escape_sequence(self) -> str:
        """
        Consume the rest of an escape sequence and return its final byte.

        ESC [ and ESC O sequences run until a byte in the range 0x40-0x7E,
        so keys such as Delete (ESC [ 3 ~) or F1 (ESC O P) are swallowed
        whole. Any other byte after ESC is dropped with it. Returns "" for
        anything that is not a complete CSI or SS3 sequence.
        """
        if self.getch() not in ("[", "O"):
            return ""
        while True:
            char = self.getch()
            if not char:
                return ""
            if "\x40" <= char <= "\x7e":
                return char
