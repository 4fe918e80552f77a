import regex

from PySubtool.Helpers.Localization import _

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE

_INTEGER_PATTERN = regex.compile(r'^[+-]?\d+$')

def _parse_int(text : str, source : str) -> int:
    text = text.strip()
    if not _INTEGER_PATTERN.match(text):
        raise ValueError(_("Failed to parse time component '{component}' in {source}").format(component=text, source=source))
    return int(text)

def ParseDuration(text : str, separator : str = '.', digits : int = 3) -> int:
    """
    Parse a timestamp such as 00:01:02.500, 01:02,5 or 00:01:02:500 into milliseconds.

    The fraction after the last separator is scaled by its length to a magnitude of
    `digits` digits, so with the default of 3 ".5", ".50" and ".500" all mean 500ms.
    A fourth colon-separated component is taken as a raw millisecond count and
    overrides any fraction.

    Raises:
        ValueError: If the text is not a recognisable timestamp
    """
    parts = text.split(separator)
    milliseconds = 0
    if len(parts) >= 2:
        fraction = parts[-1].strip()
        if len(fraction) > 3:
            raise ValueError(_("Invalid number of millisecond digits detected in {text}").format(text=text))

        milliseconds = _parse_int(fraction, text)
        exponent = digits - len(fraction)
        if exponent >= 0:
            milliseconds *= 10 ** exponent
        else:
            milliseconds //= 10 ** -exponent
        time_text = separator.join(parts[:-1])
    else:
        time_text = text

    components = time_text.strip().split(':')
    hours = 0
    if len(components) == 2:
        minutes, seconds = (_parse_int(c, text) for c in components)
    elif len(components) == 3:
        hours, minutes, seconds = (_parse_int(c, text) for c in components)
    elif len(components) == 4:
        hours, minutes, seconds, milliseconds = (_parse_int(c, text) for c in components)
    else:
        raise ValueError(_("No hours, minutes or seconds detected in {text}").format(text=text))

    return milliseconds + seconds * MS_PER_SECOND + minutes * MS_PER_MINUTE + hours * MS_PER_HOUR

def FormatDuration(duration : int, separator : str = '.', digits : int = 3) -> str:
    """
    Format milliseconds as HH:MM:SS<separator><fraction>, truncating the fraction to the requested number of digits
    """
    hours = duration // MS_PER_HOUR
    minutes = (duration % MS_PER_HOUR) // MS_PER_MINUTE
    seconds = (duration % MS_PER_MINUTE) // MS_PER_SECOND
    fraction = (duration % MS_PER_SECOND) // 10 ** (3 - digits)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}{separator}{fraction:0{digits}d}"

def ParseSrtDuration(text : str) -> int:
    return ParseDuration(text, ',', 3)

def FormatSrtDuration(duration : int) -> str:
    return FormatDuration(duration, ',', 3)

def ParseWebVttDuration(text : str) -> int:
    return ParseDuration(text, '.', 3)

def FormatWebVttDuration(duration : int) -> str:
    return FormatDuration(duration, '.', 3)

def ParseSsaDuration(text : str) -> int:
    return ParseDuration(text, '.', 3)

def FormatSsaDuration(duration : int) -> str:
    """ SSA timestamps use centiseconds """
    return FormatDuration(duration, '.', 2)

def GetDuration(value : int|float|str|None) -> int|None:
    """
    Convert a setting value to milliseconds. Numbers are taken as milliseconds,
    strings may be plain numbers or timestamps with either '.' or ',' separators.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        return int(value)

    text = value.strip()
    if _INTEGER_PATTERN.match(text):
        return int(text)

    separator = ',' if ',' in text else '.'
    return ParseDuration(text, separator)
