from __future__ import annotations
from collections.abc import Callable
import math

import logging

from PySubtool.Helpers.Localization import _
from PySubtool.SubtitleError import SubtitleError
from PySubtool.SubtitleItem import SubtitleItem
from PySubtool.SubtitleProcessor import SubtitleProcessor
from PySubtool.Subtitles import Subtitles

DUMMY_ITEM_TEXT = "..."

class SubtitleEditor:
    """
    Timeline operations on subtitles, mutating them in place.
    Use as a context manager to hold the subtitles lock for a group of edits.
    """

    def __init__(self, subtitles : Subtitles, on_exit : Callable[[bool], None]|None = None) -> None:
        self.subtitles = subtitles
        self._lock_acquired = False
        self._on_exit : Callable[[bool], None]|None = on_exit

    def __enter__(self) -> SubtitleEditor:
        self._lock_acquired = self.subtitles.lock.acquire()
        if not self._lock_acquired:
            raise SubtitleError(_("Unable to acquire subtitle lock"))

        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._lock_acquired:
            self.subtitles.lock.release()
            self._lock_acquired = False

        if self._on_exit:
            self._on_exit(exc_type is None)

    def GetDuration(self) -> int:
        """
        End time of the last item, or 0 if there are none
        """
        return self.subtitles.duration

    def IsEmpty(self) -> bool:
        return self.subtitles.is_empty

    def Add(self, delta : int) -> None:
        """
        Shift every item by delta milliseconds.
        Items that end up entirely at or before zero are removed, others are clamped to start at zero.
        """
        items = []
        for item in self.subtitles.items:
            item.start += delta
            item.end += delta

            if item.start <= 0 and item.end <= 0:
                continue

            item.start = max(item.start, 0)
            items.append(item)

        removed = len(self.subtitles.items) - len(items)
        if removed:
            logging.debug(f"Removed {removed} items shifted before zero")

        self.subtitles.items = items

    def Order(self) -> None:
        """
        Sort items by start time, keeping the relative order of items that start together
        """
        self.subtitles.items.sort(key=lambda item: item.start)

    def Fragment(self, window : int) -> None:
        """
        Split items at every multiple of the window size, so that no item spans a window boundary.
        The part before a boundary becomes a new item inserted before the original.
        """
        if window <= 0:
            raise ValueError(_("Fragment duration must be positive: {window}").format(window=window))

        items = self.subtitles.items
        if not items:
            return

        last_end = max(item.end for item in items)
        window_start = 0
        while window_start < last_end:
            window_end = window_start + window

            i = 0
            while i < len(items):
                item = items[i]
                boundary = None
                if item.start < window_start < item.end:
                    boundary = window_start
                elif item.start < window_end < item.end:
                    boundary = window_end

                if boundary is not None:
                    earlier = item.Clone()
                    earlier.end = boundary
                    item.start = boundary
                    items.insert(i, earlier)
                    i += 1

                i += 1

            window_start = window_end

        self.Order()

    def Unfragment(self) -> None:
        """
        Merge items with identical text that overlap or touch into a single item
        """
        if len(self.subtitles.items) <= 1:
            return

        self.Order()

        items = self.subtitles.items
        i = 0
        while i < len(items) - 1:
            current = items[i]
            current_text = current.text

            j = i + 1
            while j < len(items):
                later = items[j]
                if later.text == current_text and current.end >= later.start:
                    current.end = max(current.end, later.end)
                    del items[j]
                    continue

                if current.end < later.start:
                    break

                j += 1

            i += 1

    def Merge(self, other : Subtitles) -> None:
        """
        Add the items of another set of subtitles, along with any styles and regions not already defined
        """
        self.subtitles.items.extend(other.items)
        self.Order()

        for region_id, region in other.regions.items():
            if region_id not in self.subtitles.regions:
                self.subtitles.regions[region_id] = region

        for style_id, style in other.styles.items():
            if style_id not in self.subtitles.styles:
                self.subtitles.styles[style_id] = style

    def Optimize(self) -> None:
        """
        Remove styles and regions that nothing refers to
        """
        if self.subtitles.is_empty:
            return

        used_regions : set[str] = set()
        used_styles : set[str] = set()

        for item in self.subtitles.items:
            if item.region_id:
                used_regions.add(item.region_id)
            if item.style_id:
                used_styles.add(item.style_id)

            for line in item.lines:
                for line_item in line.items:
                    if line_item.style_id:
                        used_styles.add(line_item.style_id)

        for region_id, region in list(self.subtitles.regions.items()):
            if region_id not in used_regions:
                del self.subtitles.regions[region_id]
            elif region.style_id:
                used_styles.add(region.style_id)

        # Styles can inherit from a parent style
        pending = list(used_styles)
        while pending:
            style = self.subtitles.GetStyle(pending.pop())
            if style and style.style_id and style.style_id not in used_styles:
                used_styles.add(style.style_id)
                pending.append(style.style_id)

        for style_id in list(self.subtitles.styles.keys()):
            if style_id not in used_styles:
                del self.subtitles.styles[style_id]

    def RemoveStyling(self) -> None:
        """
        Remove all styles, regions and inline formatting
        """
        self.subtitles.styles.clear()
        self.subtitles.regions.clear()

        for item in self.subtitles.items:
            item.region_id = None
            item.style_id = None
            item.inline_style = None

            for line in item.lines:
                for line_item in line.items:
                    line_item.inline_style = None
                    line_item.style_id = None

    def ApplyLinearCorrection(self, actual1 : int, desired1 : int, actual2 : int, desired2 : int) -> None:
        """
        Remap timestamps so that actual1 becomes desired1 and actual2 becomes desired2,
        scaling and offsetting every timestamp in between.
        """
        if actual1 == actual2:
            raise SubtitleError(_("Linear correction needs two different actual times, got {actual} twice").format(actual=actual1))

        scale = (desired2 - desired1) / (actual2 - actual1)
        offset = desired1 - scale * actual1

        for item in self.subtitles.items:
            item.start = max(math.floor(scale * item.start + offset), 0)
            item.end = max(math.floor(scale * item.end + offset), 0)

    def ForceDuration(self, duration : int, add_dummy_item : bool = False) -> None:
        """
        Make the subtitles last exactly `duration` milliseconds where possible.

        Items past the duration are removed and items running over it are clipped.
        If the subtitles are shorter and add_dummy_item is set, a one millisecond "..." item is added at the end.
        """
        if self.GetDuration() == duration:
            return

        items = self.subtitles.items
        if self.GetDuration() > duration:
            for i, item in enumerate(items):
                if item.start >= duration:
                    del items[i:]
                    break

                item.end = min(item.end, duration)

        if add_dummy_item and self.GetDuration() < duration:
            items.append(SubtitleItem.Construct(max(duration - 1, 0), duration, DUMMY_ITEM_TEXT))

    def Process(self, processor : SubtitleProcessor) -> None:
        """
        Apply the transformations configured in a subtitle processor
        """
        processor.ProcessSubtitles(self)
