from __future__ import annotations

from copy import deepcopy

class SrtStyleAttributes:
    """
    Inline formatting supported by SubRip tags: <b>, <i>, <u>, <font color> and {\\anN} positioning
    """
    def __init__(self, bold : bool = False, italics : bool = False, underline : bool = False, color : str|None = None, position : int|None = None):
        self.bold : bool = bold
        self.italics : bool = italics
        self.underline : bool = underline
        self.color : str|None = color
        self.position : int|None = position     # numpad layout, 1-9

    @property
    def any_set(self) -> bool:
        return bool(self.bold or self.italics or self.underline or self.color or self.position)

    def Copy(self) -> SrtStyleAttributes:
        return SrtStyleAttributes(self.bold, self.italics, self.underline, self.color, self.position)

    def __eq__(self, other : object) -> bool:
        if not isinstance(other, SrtStyleAttributes):
            return False
        return (self.bold, self.italics, self.underline, self.color, self.position) == (other.bold, other.italics, other.underline, other.color, other.position)

    def __repr__(self) -> str:
        return f"SrtStyleAttributes(bold={self.bold}, italics={self.italics}, underline={self.underline}, color={self.color!r}, position={self.position})"

class WebVttTag:
    """
    A WebVTT cue text span, e.g. <c.yellow.bg_blue> or <lang en>
    """
    def __init__(self, name : str, annotation : str|None = None, classes : list[str]|None = None):
        self.name : str = name
        self.annotation : str|None = annotation or None
        self.classes : list[str] = classes or []

    @property
    def start_tag(self) -> str:
        text = self.name
        if self.classes:
            text += '.' + '.'.join(self.classes)
        if self.annotation:
            text += ' ' + self.annotation
        return f"<{text}>"

    @property
    def end_tag(self) -> str:
        return f"</{self.name}>"

    def __eq__(self, other : object) -> bool:
        if not isinstance(other, WebVttTag):
            return False
        return (self.name, self.annotation, self.classes) == (other.name, other.annotation, other.classes)

    def __repr__(self) -> str:
        return f"WebVttTag({self.start_tag})"

class WebVttPosition:
    """
    Value of the position cue setting, e.g. "10%" or "10%,line-left"
    """
    def __init__(self, x_position : str, alignment : str|None = None):
        self.x_position : str = x_position
        self.alignment : str|None = alignment or None

    @classmethod
    def Parse(cls, text : str) -> WebVttPosition|None:
        if not text:
            return None
        x_position, _, alignment = text.partition(',')
        return cls(x_position.strip(), alignment.strip())

    def __str__(self) -> str:
        return f"{self.x_position},{self.alignment}" if self.alignment else self.x_position

    def __eq__(self, other : object) -> bool:
        if not isinstance(other, WebVttPosition):
            return False
        return (self.x_position, self.alignment) == (other.x_position, other.alignment)

    def __repr__(self) -> str:
        return f"WebVttPosition({str(self)!r})"

class WebVttStyleAttributes:
    """
    WebVTT cue settings, region settings, raw STYLE block lines and the active cue text tags
    """
    def __init__(self):
        # Cue settings
        self.align : str|None = None
        self.line : str|None = None
        self.position : WebVttPosition|None = None
        self.size : str|None = None
        self.vertical : str|None = None

        # Region settings
        self.lines : int|None = None
        self.region_anchor : str|None = None
        self.scroll : str|None = None
        self.viewport_anchor : str|None = None
        self.width : str|None = None

        # STYLE block content
        self.styles : list[str] = []

        # Cue text spans, outermost first
        self.tags : list[WebVttTag] = []

class TtmlStyleAttributes:
    """
    The TTML attributes other writers consult when converting
    """
    def __init__(self, color : str|None = None, background_color : str|None = None):
        self.color : str|None = color
        self.background_color : str|None = background_color

class StyleAttributes:
    """
    Formatting attached to an item, line item, style or region.
    Each format keeps its own attributes, so only the slots relevant to a format are populated.
    """
    def __init__(self, srt : SrtStyleAttributes|None = None, webvtt : WebVttStyleAttributes|None = None, ttml : TtmlStyleAttributes|None = None):
        self.srt : SrtStyleAttributes|None = srt
        self.webvtt : WebVttStyleAttributes|None = webvtt
        self.ttml : TtmlStyleAttributes|None = ttml

    def Copy(self) -> StyleAttributes:
        return deepcopy(self)
