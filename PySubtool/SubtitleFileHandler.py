from abc import ABC, abstractmethod
from typing import TextIO
import os

from PySubtool.Subtitles import Subtitles

# Default encodings for reading subtitle files
default_encoding = os.getenv('DEFAULT_ENCODING', 'utf-8')
fallback_encoding = os.getenv('FALLBACK_ENCODING', 'iso-8859-1')


class SubtitleFileHandler(ABC):
    """
    Abstract interface for reading and writing subtitle files.

    Implementations convert between a format's text syntax and the Subtitles model,
    so that timeline operations remain format-agnostic.
    """

    SUPPORTED_EXTENSIONS : dict[str, int] = {}
    FORMAT_NAME : str = ""

    def load_file(self, path : str) -> Subtitles:
        """
        Read and parse a subtitle file, retrying with the fallback encoding if it is not valid in the default encoding
        """
        try:
            with open(path, 'r', encoding=default_encoding, newline='') as f:
                return self.parse_file(f)
        except UnicodeDecodeError:
            with open(path, 'r', encoding=fallback_encoding, newline='') as f:
                return self.parse_file(f)

    def parse_file(self, file_obj : TextIO) -> Subtitles:
        """
        Parse subtitle file content.

        Returns:
            Subtitles: Parsed items, styles, regions and metadata

        Raises:
            SubtitleParseError: If parsing fails
        """
        return self.parse_string(file_obj.read())

    @abstractmethod
    def parse_string(self, content : str) -> Subtitles:
        """
        Parse subtitle string content.

        Returns:
            Subtitles: Parsed items, styles, regions and metadata

        Raises:
            SubtitleParseError: If parsing fails
        """
        raise NotImplementedError

    @abstractmethod
    def compose(self, subtitles : Subtitles) -> str:
        """
        Compose subtitles into text for saving or exporting.

        Args:
            subtitles: Subtitles to serialize

        Returns:
            str: Subtitle content in the file handler's format

        Raises:
            NoSubtitlesToWriteError: If there are no items to write
        """
        raise NotImplementedError

    def get_file_extensions(self) -> list[str]:
        """
        Get file extensions supported by this handler.

        Returns:
            list[str]: List of file extensions (e.g., ['.srt'])
        """
        return list(self.__class__.SUPPORTED_EXTENSIONS.keys())

    def get_extension_priorities(self) -> dict[str, int]:
        """
        Get priority for each supported extension.
        Higher priority handlers override lower priority ones.

        Returns:
            dict[str, int]: Mapping of extensions to priorities
        """
        return self.__class__.SUPPORTED_EXTENSIONS.copy()
