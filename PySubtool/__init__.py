"""
PySubtool - Subtitle Conversion and Timeline Library

A Python library for converting subtitle files between formats and adjusting their timing.

Basic Usage
-----------

# Load subtitles from file
subs = init_subtitles(filepath="movie.srt")

# Shift them by two seconds and split them into ten second fragments
process_subtitles(subs, sync_offset=2000, fragment_duration="00:00:10.000")

# Save them in another format
subs.SaveSubtitles("movie.vtt")
"""
from __future__ import annotations

from PySubtool.SettingsType import SettingType, SettingsType
from PySubtool.SubtitleBuilder import SubtitleBuilder
from PySubtool.SubtitleEditor import SubtitleEditor
from PySubtool.SubtitleError import SubtitleError
from PySubtool.SubtitleFormatRegistry import SubtitleFormatRegistry
from PySubtool.SubtitleItem import SubtitleItem
from PySubtool.Subtitles import Subtitles
from PySubtool.SubtitleProcessor import SubtitleProcessor
from PySubtool.version import __version__


def read_subtitles(content : str, format : str|None = None) -> Subtitles:
    """
    Parse subtitle content in the given format.

    Parameters
    ----------
    content : str
        Subtitle file content.
    format : str|None
        Format name ('srt', 'webvtt') or extension. If None, the format is detected from the content.

    Returns
    -------
    Subtitles : The parsed subtitles.

    Raises
    ------
    InvalidExtensionError
        If the format is unknown or has no file handler.
    SubtitleParseError
        If the content cannot be parsed.
    """
    format_name = format or SubtitleFormatRegistry.detect_format_from_content(content)
    file_handler = SubtitleFormatRegistry.create_handler(format_name=format_name)
    subtitles = Subtitles()
    subtitles.LoadSubtitlesFromString(content, file_handler=file_handler)
    return subtitles

def write_subtitles(subtitles : Subtitles, format : str) -> str:
    """
    Serialize subtitles in the given format.

    Raises
    ------
    InvalidExtensionError
        If the format is unknown or has no file handler.
    NoSubtitlesToWriteError
        If there are no subtitle items.
    """
    file_handler = SubtitleFormatRegistry.create_handler(format_name=format)
    return file_handler.compose(subtitles)

def init_settings(**settings : SettingType) -> SettingsType:
    """
    Create a :class:`SettingsType` from keyword settings, e.g. for :class:`SubtitleProcessor`.

    Examples
    --------
    settings = init_settings(sync_offset=-1500, unfragment=True)
    """
    return SettingsType(settings)

def init_subtitles(
    filepath: str|None = None,
    content: str|None = None,
    *,
    format: str|None = None,
) -> Subtitles:
    """
    Initialise a :class:`Subtitles` instance and optionally load content from a file or string.

    Parameters
    ----------
    filepath : str|None
        Path to the subtitle file to load. The format is deduced from the extension.

    content : str|None
        Subtitle content as a string. The format is detected from the content unless given.

    format : str|None
        Format name to use for content or to override the file extension.

    Returns
    -------
    Subtitles : An initialised subtitles instance.

    Examples
    --------

    # Load subtitles from a file:
    subs = init_subtitles(filepath="movie.srt")

    # Load subtitles from a string:
    srt_content = "1\\n00:00:01,000 --> 00:00:03,000\\nHello world"
    subs = init_subtitles(content=srt_content)
    """
    if filepath and content:
        raise SubtitleError("Only one of 'filepath' or 'content' should be provided, not both.")

    if filepath:
        subtitles = Subtitles()
        file_handler = SubtitleFormatRegistry.create_handler(format_name=format) if format else None
        subtitles.LoadSubtitles(filepath, file_handler=file_handler)
    elif content:
        subtitles = read_subtitles(content, format)
    else:
        return Subtitles()

    if subtitles.is_empty:
        raise SubtitleError("No subtitles were loaded from the supplied input")

    return subtitles

def process_subtitles(subtitles : Subtitles, settings : SettingsType|None = None, **kwargs : SettingType) -> None:
    """
    Apply timeline transformations configured by settings, see :class:`SubtitleProcessor`.

    Examples
    --------
    process_subtitles(subs, sync_offset=2000, order=True)
    """
    options = SettingsType(settings)
    options.update(kwargs)

    processor = SubtitleProcessor(options)
    with SubtitleEditor(subtitles) as editor:
        editor.Process(processor)


__all__ = [
    '__version__',
    'SettingsType',
    'Subtitles',
    'SubtitleItem',
    'SubtitleBuilder',
    'SubtitleEditor',
    'SubtitleError',
    'SubtitleFormatRegistry',
    'SubtitleProcessor',
    'init_settings',
    'init_subtitles',
    'process_subtitles',
    'read_subtitles',
    'write_subtitles',
]
