from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from PySubtool.Helpers import GetInputPath
from PySubtool.Helpers.Localization import _
from PySubtool.StyleAttributes import StyleAttributes
from PySubtool.SubtitleError import SubtitleError
from PySubtool.SubtitleItem import SubtitleItem
from PySubtool.SubtitleMetadata import SubtitleMetadata
from PySubtool.SubtitleStyle import SubtitleRegion, SubtitleStyle

if TYPE_CHECKING:
    from PySubtool.SubtitleFileHandler import SubtitleFileHandler

class Subtitles:
    """
    Format-agnostic representation of a subtitle file.

    Attributes:
        items (list[SubtitleItem]): cues in file order, normally by ascending start time
        styles (dict[str, SubtitleStyle]): shared styles by id
        regions (dict[str, SubtitleRegion]): shared regions by id
        metadata (SubtitleMetadata|None): format-specific header fields
    """
    def __init__(self, items : list[SubtitleItem]|None = None, metadata : SubtitleMetadata|None = None) -> None:
        self.items : list[SubtitleItem] = items or []
        self.styles : dict[str, SubtitleStyle] = {}
        self.regions : dict[str, SubtitleRegion] = {}
        self.metadata : SubtitleMetadata|None = metadata

        self.sourcepath : str|None = None
        self.lock = threading.RLock()
        self.file_format : str|None = None

    @property
    def itemcount(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def duration(self) -> int:
        """
        End time of the last item in milliseconds, or 0 if there are no items.
        Only meaningful when the items are ordered.
        """
        return self.items[-1].end if self.items else 0

    def GetStyle(self, style_id : str|None) -> SubtitleStyle|None:
        return self.styles.get(style_id) if style_id else None

    def GetRegion(self, region_id : str|None) -> SubtitleRegion|None:
        return self.regions.get(region_id) if region_id else None

    def AddStyle(self, style : SubtitleStyle) -> None:
        self.styles[style.id] = style

    def AddRegion(self, region : SubtitleRegion) -> None:
        self.regions[region.id] = region

    def GetParentStyle(self, style : SubtitleStyle|SubtitleItem) -> StyleAttributes|None:
        """
        Formatting inherited from the style an item, style or region links to
        """
        parent = self.GetStyle(style.style_id)
        return parent.inline_style if parent else None

    def LoadSubtitles(self, filepath : str, file_handler : SubtitleFileHandler|None = None) -> None:
        """
        Load subtitles from a file, choosing a file handler from the extension unless one is given
        """
        from PySubtool.SubtitleFormatRegistry import SubtitleFormatRegistry

        sourcepath = GetInputPath(filepath)
        if not sourcepath:
            raise SubtitleError(_("No file path provided"))

        handler = file_handler or SubtitleFormatRegistry.create_handler(filename=sourcepath)
        loaded = handler.load_file(sourcepath)

        self._assign(loaded)
        self.sourcepath = sourcepath
        self.file_format = handler.FORMAT_NAME

        logging.info(_("Loaded {count} subtitles from {path}").format(count=self.itemcount, path=sourcepath))

    def LoadSubtitlesFromString(self, content : str, file_handler : SubtitleFileHandler) -> None:
        """
        Parse subtitles from a string with the given file handler
        """
        loaded = file_handler.parse_string(content)
        self._assign(loaded)
        self.file_format = file_handler.FORMAT_NAME

    def SaveSubtitles(self, outputpath : str, file_handler : SubtitleFileHandler|None = None) -> None:
        """
        Write the subtitles to a file, choosing a file handler from the extension unless one is given
        """
        from PySubtool.SubtitleFileHandler import default_encoding
        from PySubtool.SubtitleFormatRegistry import SubtitleFormatRegistry

        outputpath = GetInputPath(outputpath) or outputpath
        handler = file_handler or SubtitleFormatRegistry.create_handler(filename=outputpath)
        content = handler.compose(self)

        with open(outputpath, 'w', encoding=default_encoding, newline='') as f:
            f.write(content)

        logging.info(_("Saved {count} subtitles to {path}").format(count=self.itemcount, path=outputpath))

    def _assign(self, other : Subtitles) -> None:
        self.items = other.items
        self.styles = other.styles
        self.regions = other.regions
        self.metadata = other.metadata
