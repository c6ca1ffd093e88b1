"""Error types with formatted source context."""

from __future__ import annotations

from sylan.tokens import Position, line_and_column, source_lines


class LexError(Exception):
    """Raised on a fatal lexing error, with position and optional source context."""

    def __init__(self, message: str, position: Position, source: str | None = None) -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    @property
    def line(self) -> int:
        """1-based line of the offending character."""
        return self._location()[0]

    @property
    def column(self) -> int:
        """1-based column of the offending character."""
        return self._location()[1]

    def _location(self) -> tuple[int, int]:
        if self.source is not None:
            # Offsets count characters exactly, so they survive CRLF row quirks
            return line_and_column(self.source, self.position.offset)
        if self.position.newline_started:
            return self.position.row + 2, 1
        return self.position.row + 1, self.position.column + 1

    def format(self, filename: str = "input.sy") -> str:
        line, col = self._location()
        header = f"error: {self.message}\n"
        gutter_width = len(str(line)) + 1
        location = f"{' ' * gutter_width}--> {filename}:{line}:{col}"

        if self.source is None:
            return header + location

        lines = source_lines(self.source)
        line_idx = line - 1

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx]
        else:
            source_line = ""

        pad = " " * (col - 1)
        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line:>{gutter_width - 1}} |"

        return (
            f"{header}{location}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}^"
        )


class NoTokenError(LexError):
    """Raised when a token is requested but the input cannot supply a whole one."""

    def __init__(
        self,
        position: Position,
        source: str | None = None,
        message: str = "no token available",
    ) -> None:
        super().__init__(message, position, source)


class SourceReadError(Exception):
    """Raised when the underlying byte source fails; the original error is the cause."""

    def __init__(self, position: Position) -> None:
        self.position = position
        super().__init__(f"failed to read source at offset {position.offset}")
