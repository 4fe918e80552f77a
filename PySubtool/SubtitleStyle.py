from __future__ import annotations

from PySubtool.StyleAttributes import StyleAttributes

class SubtitleStyle:
    """
    Named, reusable formatting. May inherit from a parent style, referenced by id.
    """
    def __init__(self, id : str, inline_style : StyleAttributes|None = None, style_id : str|None = None):
        self.id : str = id
        self.inline_style : StyleAttributes|None = inline_style
        self.style_id : str|None = style_id

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id!r})"

class SubtitleRegion(SubtitleStyle):
    """
    Named screen area that items can be placed in. May link a style by id.
    """
    pass
