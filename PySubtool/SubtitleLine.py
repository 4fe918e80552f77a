from __future__ import annotations

from PySubtool.StyleAttributes import StyleAttributes

class LineItem:
    """
    A run of text within a line that shares one style context.

    Attributes:
        text (str): literal text, with markup entities already unescaped
        inline_style (StyleAttributes|None): formatting attached directly to the run
        style_id (str|None): id of a shared style in the owning Subtitles
        start (int|None): WebVTT inline timestamp in milliseconds, for progressively revealed text
    """
    def __init__(self, text : str = "", inline_style : StyleAttributes|None = None, style_id : str|None = None, start : int|None = None):
        self.text : str = text
        self.inline_style : StyleAttributes|None = inline_style
        self.style_id : str|None = style_id
        self.start : int|None = start

    def __repr__(self) -> str:
        return f"LineItem({self.text!r})"

class SubtitleLine:
    """
    One rendered row of a subtitle, made of styled runs and an optional WebVTT speaker
    """
    def __init__(self, items : list[LineItem]|None = None, voice_name : str|None = None):
        self.items : list[LineItem] = items or []
        self.voice_name : str|None = voice_name

    @property
    def text(self) -> str:
        return ''.join(item.text for item in self.items)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"SubtitleLine({self.text!r})"
