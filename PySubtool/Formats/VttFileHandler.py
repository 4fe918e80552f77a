import logging
import regex

from PySubtool.Helpers.Html import EscapeHtml, UnescapeHtml
from PySubtool.Helpers.Localization import _
from PySubtool.Helpers.Scanner import Scanner
from PySubtool.Helpers.Text import RemoveBom
from PySubtool.Helpers.Time import FormatWebVttDuration, ParseWebVttDuration
from PySubtool.StyleAttributes import StyleAttributes, WebVttPosition, WebVttStyleAttributes, WebVttTag
from PySubtool.SubtitleError import NoSubtitlesToWriteError, SubtitleError, SubtitleParseError
from PySubtool.SubtitleFileHandler import SubtitleFileHandler
from PySubtool.SubtitleItem import SubtitleItem
from PySubtool.SubtitleLine import LineItem, SubtitleLine
from PySubtool.SubtitleMetadata import SubtitleMetadata, WebVttTimestampMap
from PySubtool.SubtitleStyle import SubtitleRegion, SubtitleStyle
from PySubtool.Subtitles import Subtitles

TIME_BOUNDARIES_SEPARATOR = '-->'
TIMESTAMP_MAP_HEADER = 'X-TIMESTAMP-MAP'
DEFAULT_STYLE_ID = 'pysubtool-webvtt-default-style'

_BLOCK_NONE = ''
_BLOCK_COMMENT = 'comment'
_BLOCK_STYLE = 'style'
_BLOCK_TEXT = 'text'

# Tag names start with a letter, so <00:00:01.000> is left for the timestamp pattern
_TAG_PATTERN = regex.compile(r'<(/?)([A-Za-z][^\s.>/]*)((?:\.[^\s.>/]+)*)(?:\s+([^>]*))?>')
_INLINE_TIMESTAMP_PATTERN = regex.compile(r'<(\d+(?::\d+)*(?:\.\d+)?)>')

_CUE_SETTINGS = ['align', 'line', 'position', 'region', 'size', 'vertical']

_COLOR_NAMES = {
    '#00ffff': 'cyan',
    '#ffff00': 'yellow',
    '#ff0000': 'red',
    '#ff00ff': 'magenta',
    '#00ff00': 'lime',
}

# Colour classes defined by the WebVTT default stylesheet
_WEBVTT_COLOR_CLASSES = {'white', 'lime', 'cyan', 'red', 'yellow', 'magenta', 'blue', 'black'}

class VttFileHandler(SubtitleFileHandler):
    """
    File handler for WebVTT subtitles.

    Reads and writes NOTE, STYLE and Region blocks, the X-TIMESTAMP-MAP header,
    cue identifiers and settings, voice spans, inline timestamps and nested cue text tags.
    """

    SUPPORTED_EXTENSIONS = {'.vtt': 10}
    FORMAT_NAME = 'webvtt'

    def parse_string(self, content : str) -> Subtitles:
        """
        Parse WebVTT string content into Subtitles
        """
        try:
            subtitles = self._parse_webvtt(content)
            logging.debug(f"Parsed {subtitles.itemcount} items from WebVTT")
            return subtitles

        except SubtitleError:
            raise
        except Exception as e:
            raise SubtitleParseError(_("Unexpected error parsing WebVTT: {}").format(str(e)), e)

    def compose(self, subtitles : Subtitles) -> str:
        """
        Compose subtitles into WebVTT format, renumbering cues from 1.
        """
        if subtitles.is_empty:
            raise NoSubtitlesToWriteError()

        metadata = subtitles.metadata
        header = [f"WEBVTT {metadata.title}" if metadata and metadata.title else 'WEBVTT']
        if metadata and metadata.language:
            header.append(f"Language: {metadata.language}")
        if metadata and metadata.webvtt_timestamp_map:
            timestamp_map = metadata.webvtt_timestamp_map
            header.append(f"{TIMESTAMP_MAP_HEADER}=LOCAL:{FormatWebVttDuration(timestamp_map.local)},MPEGTS:{timestamp_map.mpegts}")

        blocks = ['\n'.join(header)]

        css = [ line for style in subtitles.styles.values()
                if style.inline_style and style.inline_style.webvtt
                for line in style.inline_style.webvtt.styles ]
        if css:
            blocks.append('\n'.join(['STYLE'] + css))

        if subtitles.regions:
            blocks.append('\n'.join(self._compose_region(subtitles, subtitles.regions[region_id]) for region_id in sorted(subtitles.regions)))

        for number, item in enumerate(subtitles.items, start=1):
            if item.comments:
                blocks.append('NOTE ' + '\n'.join(item.comments))

            cue = [str(number), self._compose_time_boundaries(subtitles, item)]
            cue.extend(self._compose_line(line) for line in item.lines)
            blocks.append('\n'.join(cue))

        return '\n\n'.join(blocks) + '\n'

    def _parse_webvtt(self, content : str) -> Subtitles:
        subtitles = Subtitles()
        scanner = Scanner(RemoveBom(content))

        title = self._read_header(scanner)
        if title is None:
            logging.warning(_("No WEBVTT header found"))
            return subtitles

        if title:
            subtitles.metadata = SubtitleMetadata(title=title)

        block = _BLOCK_NONE
        comments : list[str] = []
        index : int|None = None
        item : SubtitleItem|None = None
        css_lines : list[str]|None = None
        tag_stack : list[WebVttTag] = []

        while scanner.has_next():
            line_number = scanner.line_number
            line = (scanner.next() or '').strip()

            if not line:
                # A blank line inside a CSS rule does not end the STYLE block
                if block != _BLOCK_STYLE or not css_lines or css_lines[-1].endswith('}'):
                    block = _BLOCK_NONE
                tag_stack.clear()
                continue

            if TIME_BOUNDARIES_SEPARATOR in line:
                block = _BLOCK_TEXT
                tag_stack.clear()

                item = self._parse_cue(subtitles, line, line_number)
                item.comments = comments
                item.index = index
                subtitles.items.append(item)

                comments = []
                index = None
                continue

            if line == 'NOTE' or line.startswith('NOTE '):
                block = _BLOCK_COMMENT
                if line[5:]:
                    comments.append(line[5:])

            elif line.startswith('STYLE'):
                block = _BLOCK_STYLE
                css_lines = self._get_default_css(subtitles)

            elif line.startswith('Region:'):
                region = self._parse_region(line[len('Region:'):])
                if region:
                    subtitles.AddRegion(region)

            elif line.startswith(TIMESTAMP_MAP_HEADER):
                self._parse_timestamp_map(subtitles, line)

            elif block == _BLOCK_TEXT and item is not None:
                parsed = self._parse_text_line(line, tag_stack)
                if parsed.text.strip():
                    item.lines.append(parsed)

            elif block == _BLOCK_COMMENT:
                comments.append(line)

            elif block == _BLOCK_STYLE and css_lines is not None:
                css_lines.append(line)

            elif line.startswith('Language:'):
                metadata = subtitles.metadata or SubtitleMetadata()
                metadata.language = line[len('Language:'):].strip() or None
                subtitles.metadata = metadata

            elif line.isdigit():
                # Cue identifier for the next cue
                index = int(line)

        return subtitles

    def _read_header(self, scanner : Scanner) -> str|None:
        """
        Skip to the WEBVTT line and return any title text that follows it, or None if there is no header
        """
        while scanner.has_next():
            line = (scanner.next() or '').strip()
            if line.startswith('WEBVTT'):
                return line[len('WEBVTT'):].strip()
        return None

    def _get_default_css(self, subtitles : Subtitles) -> list[str]:
        style = subtitles.GetStyle(DEFAULT_STYLE_ID)
        if not style:
            style = SubtitleStyle(DEFAULT_STYLE_ID, StyleAttributes(webvtt=WebVttStyleAttributes()))
            subtitles.AddStyle(style)

        if not style.inline_style:
            style.inline_style = StyleAttributes()
        if not style.inline_style.webvtt:
            style.inline_style.webvtt = WebVttStyleAttributes()

        return style.inline_style.webvtt.styles

    def _parse_region(self, text : str) -> SubtitleRegion|None:
        attributes = WebVttStyleAttributes()
        region_id = None

        for setting in text.split():
            key, _sep, value = setting.partition('=')
            if not key or not value:
                continue

            key = key.lower()
            if key == 'id':
                region_id = value
            elif key == 'lines':
                attributes.lines = int(value) if value.isdigit() else None
            elif key == 'regionanchor':
                attributes.region_anchor = value
            elif key == 'scroll':
                attributes.scroll = value
            elif key == 'viewportanchor':
                attributes.viewport_anchor = value
            elif key == 'width':
                attributes.width = value

        if not region_id:
            logging.debug(f"Ignoring region without an id: {text}")
            return None

        return SubtitleRegion(region_id, StyleAttributes(webvtt=attributes))

    def _parse_timestamp_map(self, subtitles : Subtitles, line : str) -> None:
        """
        Parse a header like X-TIMESTAMP-MAP=LOCAL:00:00:00.000,MPEGTS:900000.
        A malformed header is dropped rather than failing the read.
        """
        try:
            _header, separator, values = line.partition('=')
            if not separator:
                raise ValueError(f"No '=' in {line}")

            timestamp_map = WebVttTimestampMap()
            for part in values.split(','):
                key, separator, value = part.partition(':')
                if not separator or not value:
                    raise ValueError(f"Invalid {TIMESTAMP_MAP_HEADER} part: {part}")

                key = key.strip().lower()
                if key == 'local':
                    timestamp_map.local = ParseWebVttDuration(value)
                elif key == 'mpegts':
                    timestamp_map.mpegts = int(value)

        except ValueError as e:
            logging.debug(f"Ignoring invalid {TIMESTAMP_MAP_HEADER} header: {e}")
            return

        metadata = subtitles.metadata or SubtitleMetadata()
        metadata.webvtt_timestamp_map = timestamp_map
        subtitles.metadata = metadata

    def _parse_cue(self, subtitles : Subtitles, line : str, line_number : int) -> SubtitleItem:
        start_text, _sep, remainder = line.partition(TIME_BOUNDARIES_SEPARATOR)
        tokens = remainder.split()
        if not tokens:
            raise SubtitleParseError(_("Line {line}: missing end time in '{text}'").format(line=line_number, text=line), line_number=line_number)

        try:
            item = SubtitleItem(ParseWebVttDuration(start_text.strip()), ParseWebVttDuration(tokens[0]))
        except ValueError as e:
            raise SubtitleParseError(_("Line {line}: failed to parse time boundaries: {error}").format(line=line_number, error=str(e)), e, line_number)

        for setting in tokens[1:]:
            key, _sep, value = setting.partition(':')
            if not key or not value:
                continue

            key = key.lower()
            if key == 'region':
                if value in subtitles.regions:
                    item.region_id = value
                continue

            if key not in _CUE_SETTINGS:
                continue

            if not item.inline_style:
                item.inline_style = StyleAttributes(webvtt=WebVttStyleAttributes())

            if key == 'position':
                item.inline_style.webvtt.position = WebVttPosition.Parse(value)
            else:
                setattr(item.inline_style.webvtt, key, value)

        return item

    def _parse_text_line(self, text : str, tag_stack : list[WebVttTag]) -> SubtitleLine:
        """
        Tokenize a line of cue text into runs, tracking open spans on the tag stack.
        The stack is shared by the lines of a cue, so a span may continue onto the next line.
        """
        line = SubtitleLine()
        position = 0

        for match in _TAG_PATTERN.finditer(text):
            if match.start() > position:
                line.items.extend(self._parse_text_token(text[position:match.start()], tag_stack))

            closing, name, classes, annotation = match.groups()
            if name == 'v':
                if not closing and line.voice_name is None:
                    line.voice_name = (annotation or '').strip() or None
            elif closing:
                _pop_tag(tag_stack, name)
            else:
                tag_stack.append(WebVttTag(name, (annotation or '').strip(), [ c for c in classes.split('.') if c ]))

            position = match.end()

        if position < len(text):
            line.items.extend(self._parse_text_token(text[position:], tag_stack))

        return line

    def _parse_text_token(self, text : str, tag_stack : list[WebVttTag]) -> list[LineItem]:
        """
        Split text between tags at inline timestamps. Text before the first timestamp has no start time.
        """
        matches = list(_INLINE_TIMESTAMP_PATTERN.finditer(text))
        if not matches:
            return [LineItem(UnescapeHtml(text), _tag_style(tag_stack))]

        items = []
        before = text[:matches[0].start()]
        if before.strip():
            items.append(LineItem(UnescapeHtml(before), _tag_style(tag_stack)))

        for i, match in enumerate(matches):
            end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
            after = text[match.end():end]
            if not after.strip():
                continue

            items.append(LineItem(UnescapeHtml(after), _tag_style(tag_stack), start=self._parse_inline_timestamp(match.group(1))))

        return items

    def _parse_inline_timestamp(self, text : str) -> int|None:
        try:
            return ParseWebVttDuration(text)
        except ValueError as e:
            logging.debug(f"Ignoring invalid inline timestamp <{text}>: {e}")
            return None

    def _compose_region(self, subtitles : Subtitles, region : SubtitleRegion) -> str:
        attributes = _effective_webvtt(region.inline_style, subtitles.GetParentStyle(region))

        text = f"Region: id={region.id}"
        if attributes('lines'):
            text += f" lines={attributes('lines')}"
        if attributes('region_anchor'):
            text += f" regionanchor={attributes('region_anchor')}"
        if attributes('scroll'):
            text += f" scroll={attributes('scroll')}"
        if attributes('viewport_anchor'):
            text += f" viewportanchor={attributes('viewport_anchor')}"
        if attributes('width'):
            text += f" width={attributes('width')}"
        return text

    def _compose_time_boundaries(self, subtitles : Subtitles, item : SubtitleItem) -> str:
        attributes = _effective_webvtt(item.inline_style, subtitles.GetParentStyle(item))

        text = f"{FormatWebVttDuration(item.start)} {TIME_BOUNDARIES_SEPARATOR} {FormatWebVttDuration(item.end)}"
        for setting in _CUE_SETTINGS:
            if setting == 'region':
                value = item.region_id if item.region_id in subtitles.regions else None
            else:
                value = attributes(setting)

            if value:
                text += f" {setting}:{value}"

        return text

    def _compose_line(self, line : SubtitleLine) -> str:
        text = f"<v {line.voice_name}>" if line.voice_name else ''

        for i, item in enumerate(line.items):
            previous_item = line.items[i - 1] if i > 0 else None
            next_item = line.items[i + 1] if i + 1 < len(line.items) else None
            text += self._compose_line_item(item, previous_item, next_item)

        return text

    def _compose_line_item(self, item : LineItem, previous_item : LineItem|None, next_item : LineItem|None) -> str:
        """
        Spans shared with the neighbouring runs at the same depth are left open between them
        """
        tags = _get_tags(item)
        color = _get_color_class(item, tags)

        opened = _shared_depth(tags, color, previous_item)
        closed = _shared_depth(tags, color, next_item)

        text = f"<{FormatWebVttDuration(item.start)}>" if item.start is not None else ''
        if color:
            text += f"<c.{color}>"

        text += ''.join(tag.start_tag for tag in tags[opened:])
        text += EscapeHtml(item.text)
        text += ''.join(tag.end_tag for tag in reversed(tags[closed:]))

        if color:
            text += "</c>"

        return text

def _pop_tag(tag_stack : list[WebVttTag], name : str) -> None:
    """
    Close the innermost open span with a matching name. Unmatched closing tags are ignored.
    """
    for i in range(len(tag_stack) - 1, -1, -1):
        if tag_stack[i].name == name:
            del tag_stack[i:]
            return

def _tag_style(tag_stack : list[WebVttTag]) -> StyleAttributes|None:
    if not tag_stack:
        return None

    attributes = WebVttStyleAttributes()
    attributes.tags = [ WebVttTag(tag.name, tag.annotation, list(tag.classes)) for tag in tag_stack ]
    return StyleAttributes(webvtt=attributes)

def _get_tags(item : LineItem) -> list[WebVttTag]:
    """
    Cue text spans for a run. Runs read from SRT get b/i/u spans from their SRT attributes.
    """
    inline_style = item.inline_style
    if not inline_style:
        return []

    if inline_style.webvtt:
        return inline_style.webvtt.tags

    if inline_style.srt:
        srt = inline_style.srt
        return [ WebVttTag(name) for name, enabled in (('b', srt.bold), ('i', srt.italics), ('u', srt.underline)) if enabled ]

    return []

def _shared_depth(tags : list[WebVttTag], color : str|None, neighbour : LineItem|None) -> int:
    """
    Number of outer spans a run shares with a neighbouring run
    """
    if not neighbour or color:
        return 0

    other = _get_tags(neighbour)
    # A colour span wraps the whole neighbouring run, so nothing inside it stays open
    if _get_color_class(neighbour, other):
        return 0

    depth = 0
    while depth < len(tags) and depth < len(other) and tags[depth] == other[depth]:
        depth += 1
    return depth

def _get_color_class(item : LineItem, tags : list[WebVttTag]) -> str|None:
    """
    WebVTT colour class for a TTML colour, unless a <c> span already sets the colour
    """
    if any(tag.name == 'c' for tag in tags):
        return None

    inline_style = item.inline_style
    if not inline_style or not inline_style.ttml or not inline_style.ttml.color:
        return None

    color = inline_style.ttml.color.lower()
    if color in _WEBVTT_COLOR_CLASSES:
        return color
    return _COLOR_NAMES.get(color)

def _effective_webvtt(inline_style : StyleAttributes|None, parent_style : StyleAttributes|None):
    """
    Lookup for WebVTT attributes, falling back to the linked style for anything not set inline
    """
    inline = inline_style.webvtt if inline_style else None
    parent = parent_style.webvtt if parent_style else None

    def lookup(name : str):
        value = getattr(inline, name, None) if inline else None
        if value is None and parent:
            value = getattr(parent, name, None)
        return value

    return lookup
