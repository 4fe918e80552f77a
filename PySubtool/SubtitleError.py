from PySubtool.Helpers.Localization import _

class SubtitleError(Exception):
    """
    Base class for errors raised while reading, writing or editing subtitles.
    Optionally wraps the exception that caused it.
    """
    def __init__(self, message : str|None = None, error : Exception|None = None):
        super().__init__(message)
        self.message : str|None = message
        self.error : Exception|None = error

    def __str__(self) -> str:
        if self.error:
            return str(self.message or self.error)
        return str(self.message or _("Subtitle error"))

class SubtitleParseError(SubtitleError):
    """
    Subtitle content could not be parsed. Carries the 1-based source line number when it is known.
    """
    def __init__(self, message : str|None = None, error : Exception|None = None, line_number : int|None = None):
        super().__init__(message, error)
        self.line_number : int|None = line_number

class InvalidExtensionError(SubtitleError):
    """ The file extension or format name is unknown or has no codec """
    def __init__(self, message : str|None = None, error : Exception|None = None):
        super().__init__(message or _("Invalid file extension"), error)

class NoSubtitlesToWriteError(SubtitleError):
    """ Attempted to write a subtitle file with no items """
    def __init__(self, message : str|None = None, error : Exception|None = None):
        super().__init__(message or _("No subtitles to write"), error)
