import regex

_ESCAPE_MAP = {
    '&': '&amp;',
    '<': '&lt;',
    '\u00a0': '&nbsp;',
}

_UNESCAPE_MAP = {
    '&amp;': '&',
    '&lt;': '<',
    '&gt;': '>',
    '&quot;': '"',
    '&nbsp;': '\u00a0',
    '&#39;': "'",
    '&#x27;': "'",
}

_ESCAPE_PATTERN = regex.compile(r'[&<\u00a0]')
_UNESCAPE_PATTERN = regex.compile(r'&(?:amp|lt|gt|quot|nbsp|#39|#x27);')
_TAG_PATTERN = regex.compile(r'<[^>]*?>')
_COLOR_ATTRIBUTE_PATTERN = regex.compile(r'color\s*=\s*["\']([^"\']+)["\']', regex.IGNORECASE)

def EscapeHtml(text : str) -> str:
    """
    Escape characters that cannot appear literally in subtitle markup
    """
    return _ESCAPE_PATTERN.sub(lambda match: _ESCAPE_MAP[match.group(0)], text)

def UnescapeHtml(text : str) -> str:
    """
    Replace recognised HTML entities with literal characters. Unknown entities are left alone.
    """
    return _UNESCAPE_PATTERN.sub(lambda match: _UNESCAPE_MAP[match.group(0)], text)

def StripHtmlTags(text : str) -> str:
    return _TAG_PATTERN.sub('', text)

def ParseHtmlColor(tag : str) -> str|None:
    """
    Extract the value of a color attribute, e.g. from <font color="red">
    """
    match = _COLOR_ATTRIBUTE_PATTERN.search(tag)
    return match.group(1) if match else None
