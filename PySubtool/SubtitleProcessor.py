from __future__ import annotations
from collections.abc import Mapping
import logging
from typing import TYPE_CHECKING

from PySubtool.Helpers.Localization import _
from PySubtool.Helpers.Time import FormatWebVttDuration
from PySubtool.SettingsType import SettingType, SettingsType
from PySubtool.SubtitleError import SubtitleError

if TYPE_CHECKING:
    from PySubtool.SubtitleEditor import SubtitleEditor

class SubtitleProcessor:
    """
    Applies a configured sequence of timeline transformations to subtitles.

    Settings (durations in milliseconds or as timestamps):
        sync_offset: shift every item by this amount
        actual1, desired1, actual2, desired2: two-point linear correction
        fragment_duration: split items at multiples of this duration
        unfragment: merge touching items with identical text
        order: sort items by start time
        optimize: remove unused styles and regions
        remove_styling: remove all styles, regions and inline formatting
        force_duration: clip or extend the subtitles to this duration
        add_dummy_item: with force_duration, add a placeholder item to reach the duration

    Transformations are applied in the order listed.
    """
    def __init__(self, settings : Mapping[str, SettingType]|None = None):
        settings = SettingsType(settings)

        self.sync_offset : int|None = settings.get_duration('sync_offset')
        self.actual1 : int|None = settings.get_duration('actual1')
        self.desired1 : int|None = settings.get_duration('desired1')
        self.actual2 : int|None = settings.get_duration('actual2')
        self.desired2 : int|None = settings.get_duration('desired2')
        self.fragment_duration : int|None = settings.get_duration('fragment_duration')
        self.unfragment : bool = settings.get_bool('unfragment')
        self.order : bool = settings.get_bool('order')
        self.optimize : bool = settings.get_bool('optimize')
        self.remove_styling : bool = settings.get_bool('remove_styling')
        self.force_duration : int|None = settings.get_duration('force_duration')
        self.add_dummy_item : bool = settings.get_bool('add_dummy_item')

        correction = [self.actual1, self.desired1, self.actual2, self.desired2]
        if any(value is not None for value in correction) and any(value is None for value in correction):
            raise SubtitleError(_("Linear correction needs actual1, desired1, actual2 and desired2"))

    @property
    def has_linear_correction(self) -> bool:
        return self.actual1 is not None

    def ProcessSubtitles(self, editor : SubtitleEditor) -> None:
        """
        Apply the configured transformations through a subtitle editor
        """
        if self.sync_offset:
            logging.info(_("Shifting subtitles by {offset}ms").format(offset=self.sync_offset))
            editor.Add(self.sync_offset)

        if self.has_linear_correction:
            logging.info(_("Applying linear correction {actual1} -> {desired1}, {actual2} -> {desired2}").format(
                actual1=self.actual1, desired1=self.desired1, actual2=self.actual2, desired2=self.desired2))
            editor.ApplyLinearCorrection(self.actual1, self.desired1, self.actual2, self.desired2) # type: ignore[arg-type]

        if self.fragment_duration:
            logging.info(_("Fragmenting subtitles every {duration}").format(duration=FormatWebVttDuration(self.fragment_duration)))
            editor.Fragment(self.fragment_duration)

        if self.unfragment:
            logging.info(_("Unfragmenting subtitles"))
            editor.Unfragment()

        if self.order:
            logging.info(_("Ordering subtitles"))
            editor.Order()

        if self.optimize:
            logging.info(_("Removing unused styles and regions"))
            editor.Optimize()

        if self.remove_styling:
            logging.info(_("Removing styling"))
            editor.RemoveStyling()

        if self.force_duration is not None:
            logging.info(_("Forcing duration to {duration}").format(duration=FormatWebVttDuration(self.force_duration)))
            editor.ForceDuration(self.force_duration, self.add_dummy_item)
