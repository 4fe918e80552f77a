from collections.abc import Sequence
from typing import TypeAlias

from PySubtool.Helpers.Time import GetDuration
from PySubtool.StyleAttributes import StyleAttributes
from PySubtool.SubtitleItem import SubtitleItem
from PySubtool.SubtitleMetadata import SubtitleMetadata, WebVttTimestampMap
from PySubtool.SubtitleStyle import SubtitleRegion, SubtitleStyle
from PySubtool.Subtitles import Subtitles


ItemData : TypeAlias = tuple[int|str, int|str, str]

class SubtitleBuilder:
    """
    A helper class for programmatically building subtitles with fine-grained control.

    Provides a fluent API for defining styles, regions and items.
    Styles and regions must be added before the items that refer to them.

    Usage:
    >>> subtitles = (SubtitleBuilder()
    ...     .AddStyle("yellow", StyleAttributes(ttml=TtmlStyleAttributes(color="#ffff00")))
    ...     .AddRegion("bottom", style_id="yellow")
    ...     .BuildItem(1000, 3000, "Hello...", region_id="bottom")
    ...     .BuildItem("00:00:04.000", "00:00:06.000", "Nice to meet you!")
    ...     .Build()
    ... )
    """
    def __init__(self):
        self._subtitles : Subtitles = Subtitles()

    def AddStyle(self, style_id : str, inline_style : StyleAttributes|None = None, parent_id : str|None = None) -> 'SubtitleBuilder':
        """
        Define a named style, optionally inheriting from a previously defined style.

        Returns
        -------
        SubtitleBuilder
            Returns self for method chaining.
        """
        self._check_style(parent_id)
        self._subtitles.AddStyle(SubtitleStyle(style_id, inline_style, parent_id))
        return self

    def AddRegion(self, region_id : str, inline_style : StyleAttributes|None = None, style_id : str|None = None) -> 'SubtitleBuilder':
        """
        Define a named region, optionally linked to a previously defined style.

        Returns
        -------
        SubtitleBuilder
            Returns self for method chaining.
        """
        self._check_style(style_id)
        self._subtitles.AddRegion(SubtitleRegion(region_id, inline_style, style_id))
        return self

    def AddItem(self, item : SubtitleItem) -> 'SubtitleBuilder':
        """
        Add a SubtitleItem. Its style and region must already be defined.

        Returns
        -------
        SubtitleBuilder
            Returns self for method chaining.
        """
        self._check_style(item.style_id)
        if item.region_id and item.region_id not in self._subtitles.regions:
            raise ValueError(f"Unknown region: {item.region_id}")

        for line in item.lines:
            for line_item in line.items:
                self._check_style(line_item.style_id)

        self._subtitles.items.append(item)
        return self

    def BuildItem(self, start : int|str, end : int|str, text : str, style_id : str|None = None, region_id : str|None = None,
                  inline_style : StyleAttributes|None = None) -> 'SubtitleBuilder':
        """
        Build a SubtitleItem from parameters and add it.

        Parameters
        ----------
        start : int|str
            Start time in milliseconds or as a timestamp string.
        end : int|str
            End time in milliseconds or as a timestamp string.
        text : str
            The subtitle text, one line per row.

        Returns
        -------
        SubtitleBuilder
            Returns self for method chaining.
        """
        item = SubtitleItem.Construct(_to_duration(start), _to_duration(end), text, index=len(self._subtitles.items) + 1)
        item.style_id = style_id
        item.region_id = region_id
        item.inline_style = inline_style
        return self.AddItem(item)

    def AddItems(self, items : Sequence[SubtitleItem] | Sequence[ItemData]) -> 'SubtitleBuilder':
        """
        Add multiple items, either SubtitleItem instances or tuples (start, end, text).

        Returns
        -------
        SubtitleBuilder
            Returns self for method chaining.
        """
        for item_data in items:
            if isinstance(item_data, SubtitleItem):
                self.AddItem(item_data)

            elif isinstance(item_data, tuple):
                if len(item_data) == 3:
                    start, end, text = item_data
                    self.BuildItem(start, end, text)
                else:
                    raise ValueError(f"Invalid item data tuple length: {item_data}")
            else:
                raise ValueError(f"Invalid item data format: {item_data}")

        return self

    def SetMetadata(self, language : str|None = None, timestamp_map : WebVttTimestampMap|None = None, title : str|None = None) -> 'SubtitleBuilder':
        self._subtitles.metadata = SubtitleMetadata(language, timestamp_map, title)
        return self

    def Build(self) -> Subtitles:
        """
        Return the built Subtitles instance.
        """
        return self._subtitles

    def _check_style(self, style_id : str|None) -> None:
        if style_id and style_id not in self._subtitles.styles:
            raise ValueError(f"Unknown style: {style_id}")

def _to_duration(value : int|str) -> int:
    duration = GetDuration(value)
    if duration is None:
        raise ValueError(f"Invalid time: {value}")
    return duration
