import importlib
import inspect
import logging
import os
import pkgutil

import pysubs2

from PySubtool.Helpers.Localization import _
from PySubtool.SubtitleFileHandler import SubtitleFileHandler
from PySubtool.SubtitleError import InvalidExtensionError, SubtitleParseError

# Subtitle formats known by file extension. Not every format has a file handler.
FORMAT_EXTENSIONS : dict[str, str] = {
    '.srt': 'srt',
    '.vtt': 'webvtt',
    '.ttml': 'ttml',
    '.dfxp': 'ttml',
    '.ssa': 'ssa',
    '.ass': 'ssa',
    '.stl': 'stl',
    '.ts': 'teletext',
}

class SubtitleFormatRegistry:
    """
    Manages discovery and lookup of subtitle file handlers.

    Uses lazy discovery to find all subclasses of SubtitleFileHandler in the Formats package.
    Handlers are registered by their supported file extensions and priorities,
    and can be looked up by extension, filename or format name.
    """
    _handlers : dict[str, type[SubtitleFileHandler]] = {}
    _priorities : dict[str, int] = {}
    _discovered : bool = False

    @classmethod
    def register_handler(cls, handler_class : type[SubtitleFileHandler]) -> None:
        """
        Register a subtitle file handler class for its supported extensions.
        """
        instance = handler_class()
        priorities = instance.get_extension_priorities()
        for ext, priority in priorities.items():
            ext = ext.lower()
            if ext not in cls._handlers or priority >= cls._priorities[ext]:
                cls._handlers[ext] = handler_class
                cls._priorities[ext] = priority

    @classmethod
    def get_handler_by_extension(cls, extension : str) -> type[SubtitleFileHandler]:
        """
        Get the subtitle file handler class for the given extension.
        """
        cls._ensure_discovered()
        ext = extension.lower()
        if not ext.startswith('.'):
            ext = f'.{ext}'

        if ext not in cls._handlers:
            raise InvalidExtensionError(_("Unknown subtitle format: {extension}. Available formats: {available}").format(extension=extension, available=cls.list_available_formats()))
        return cls._handlers[ext]

    @classmethod
    def get_handler_by_format(cls, format_name : str) -> type[SubtitleFileHandler]:
        """
        Get the file handler class for a format name such as 'webvtt'. Extensions are also accepted.
        """
        cls._ensure_discovered()
        name = format_name.lower().strip()
        for handler_class in set(cls._handlers.values()):
            if handler_class.FORMAT_NAME == name:
                return handler_class

        if name in FORMAT_EXTENSIONS.values():
            raise InvalidExtensionError(_("Subtitle format '{format}' is not supported").format(format=format_name))

        return cls.get_handler_by_extension(name)

    @classmethod
    def create_handler(cls, extension : str|None = None, filename : str|None = None, format_name : str|None = None) -> SubtitleFileHandler:
        """
        Instantiate a subtitle file handler for the given extension, filename or format name.
        """
        if format_name:
            return cls.get_handler_by_format(format_name)()

        if extension is None and filename is not None:
            extension = os.path.splitext(filename)[1].lower()

        if extension is None or not extension:
            raise InvalidExtensionError(
                _("Format cannot be deduced from filename or extension '{name}'. Available formats: {formats}").format(
                    name=filename or extension or "None", formats=cls.list_available_formats()))

        handler_cls = cls.get_handler_by_extension(extension)
        return handler_cls()

    @classmethod
    def enumerate_formats(cls) -> list[str]:
        """
        List all supported subtitle formats (file extensions).
        """
        cls._ensure_discovered()
        return sorted(cls._handlers.keys())

    @classmethod
    def enumerate_format_names(cls) -> list[str]:
        """
        List the names of all formats that have a file handler.
        """
        cls._ensure_discovered()
        return sorted({ handler_class.FORMAT_NAME for handler_class in cls._handlers.values() })

    @classmethod
    def list_available_formats(cls) -> str:
        """
        Get a comma-separated string of all supported subtitle formats.
        """
        formats = cls.enumerate_formats()
        return _("None") if not formats else ", ".join(formats)

    @classmethod
    def disable_autodiscovery(cls) -> None:
        """ Disable automatic discovery of subtitle formats (for testing) """
        cls.clear()
        cls._discovered = True

    @classmethod
    def enable_autodiscovery(cls) -> None:
        """ Enable automatic discovery of subtitle formats (for testing) """
        cls._discovered = False

    @classmethod
    def discover(cls) -> None:
        """
        Discover and register all subtitle file handlers in the Formats package.
        """
        formats_package = importlib.import_module("PySubtool.Formats")
        for _finder, module_name, _ispkg in pkgutil.iter_modules(formats_package.__path__):
            module = importlib.import_module(f"PySubtool.Formats.{module_name}")
            for _name, obj in inspect.getmembers(module, inspect.isclass):
                if issubclass(obj, SubtitleFileHandler) and obj is not SubtitleFileHandler:
                    cls.register_handler(obj)
        cls._discovered = True

    @classmethod
    def clear(cls) -> None:
        """
        Clear all registered handlers
        """
        cls._handlers.clear()
        cls._priorities.clear()
        cls._discovered = False

    @classmethod
    def get_format_from_filename(cls, filename : str) -> str|None:
        """
        Deduce subtitle format name from file extension, e.g. 'movie.vtt' -> 'webvtt'
        """
        base, extension = os.path.splitext(filename) # type: ignore[ignore-unused]
        return FORMAT_EXTENSIONS.get(extension.lower()) if extension else None

    @classmethod
    def detect_format_from_content(cls, content : str) -> str:
        """
        Detect the subtitle format of some content and return its format name.

        Raises:
            SubtitleParseError: If the format cannot be detected
            InvalidExtensionError: If the format is detected but has no file handler
        """
        cls._ensure_discovered()
        try:
            detected = pysubs2.formats.autodetect_format(content)
        except Exception as e:
            raise SubtitleParseError(_("Failed to detect subtitle format: {}").format(str(e)), e)

        if not detected:
            raise SubtitleParseError(_("Could not detect subtitle format"))

        detected_extension = pysubs2.formats.get_file_extension(detected)

        logging.info(_("Detected subtitle format '{format}'").format(format=detected_extension))

        format_name = FORMAT_EXTENSIONS.get(detected_extension)
        if not format_name or detected_extension not in cls._handlers:
            raise InvalidExtensionError(_("Detected subtitle format '{format}' is not supported.").format(format=detected_extension))

        return format_name

    @classmethod
    def _ensure_discovered(cls) -> None:
        if not cls._discovered:
            cls.discover()
