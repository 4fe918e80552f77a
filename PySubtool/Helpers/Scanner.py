import regex

_NEWLINE_PATTERN = regex.compile(r'\r\n|\r|\n')

def SplitLines(text : str) -> list[str]:
    """
    Split text on any line ending, without a phantom empty line after a trailing newline
    """
    lines = _NEWLINE_PATTERN.split(text)
    if lines and lines[-1] == '':
        lines.pop()
    return lines

class Scanner:
    """
    Cursor over the lines of a block of text
    """
    def __init__(self, text : str):
        self._lines : list[str] = SplitLines(text)
        self._index : int = 0

    @property
    def line_number(self) -> int:
        """ 1-based number of the next line to be read """
        return self._index + 1

    def has_next(self) -> bool:
        return self._index < len(self._lines)

    def next(self) -> str|None:
        if not self.has_next():
            return None
        line = self._lines[self._index]
        self._index += 1
        return line

    def peek(self) -> str|None:
        return self._lines[self._index] if self.has_next() else None

    def remaining_lines(self) -> list[str]:
        remaining = self._lines[self._index:]
        self._index = len(self._lines)
        return remaining

    def reset(self) -> None:
        self._index = 0

    def __iter__(self):
        while self.has_next():
            yield self.next()
