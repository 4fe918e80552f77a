from __future__ import annotations

from copy import deepcopy

from PySubtool.StyleAttributes import StyleAttributes
from PySubtool.SubtitleLine import LineItem, SubtitleLine

class SubtitleItem:
    """
    A single cue: a time interval in milliseconds and the lines displayed during it.

    Style and region are referenced by id and resolved against the owning Subtitles.
    """
    def __init__(self, start : int = 0, end : int = 0, lines : list[SubtitleLine]|None = None, index : int|None = None, comments : list[str]|None = None,
                 inline_style : StyleAttributes|None = None, style_id : str|None = None, region_id : str|None = None):
        self.start : int = start
        self.end : int = end
        self.lines : list[SubtitleLine] = lines or []
        self.index : int|None = index
        self.comments : list[str] = comments or []
        self.inline_style : StyleAttributes|None = inline_style
        self.style_id : str|None = style_id
        self.region_id : str|None = region_id

    @classmethod
    def Construct(cls, start : int, end : int, text : str, index : int|None = None) -> SubtitleItem:
        """
        Build an unstyled item, one line per row of text
        """
        lines = [ SubtitleLine([LineItem(row)]) for row in text.split('\n') ] if text else []
        return cls(start, end, lines, index=index)

    @property
    def text(self) -> str:
        """ Plain text of the item, lines joined with " - " """
        return ' - '.join(line.text for line in self.lines)

    @property
    def duration(self) -> int:
        return self.end - self.start

    def Clone(self) -> SubtitleItem:
        """
        Copy the item with its own lines and formatting. Style and region ids are shared.
        """
        return deepcopy(self)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"SubtitleItem({self.start}, {self.end}, {self.text!r})"
