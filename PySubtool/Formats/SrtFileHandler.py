import logging
import regex

from PySubtool.Helpers.Html import EscapeHtml, ParseHtmlColor, UnescapeHtml
from PySubtool.Helpers.Localization import _
from PySubtool.Helpers.Scanner import Scanner
from PySubtool.Helpers.Text import AddBom, RemoveBom
from PySubtool.Helpers.Time import FormatSrtDuration, ParseDuration
from PySubtool.StyleAttributes import SrtStyleAttributes, StyleAttributes
from PySubtool.SubtitleError import NoSubtitlesToWriteError, SubtitleError, SubtitleParseError
from PySubtool.SubtitleFileHandler import SubtitleFileHandler
from PySubtool.SubtitleItem import SubtitleItem
from PySubtool.SubtitleLine import LineItem, SubtitleLine
from PySubtool.Subtitles import Subtitles

TIME_BOUNDARIES_SEPARATOR = '-->'

# SRT files in the wild use any of these before the milliseconds
_MILLISECOND_SEPARATORS = [',', '.', ':']

# Only these tags are interpreted, anything else is kept as literal text
_TAG_PATTERN = regex.compile(r'<(/?)(b|i|u|font)(?:\s+([^>]*))?>', regex.IGNORECASE)
_POSITION_PATTERN = regex.compile(r'^\{\\an(\d)\}')

class SrtFileHandler(SubtitleFileHandler):
    """
    File handler for the SubRip format.

    Inline <b>, <i>, <u> and <font color> tags are parsed into SRT style attributes
    and {\\anN} prefixes into a numpad position.
    """

    SUPPORTED_EXTENSIONS = {'.srt': 10}
    FORMAT_NAME = 'srt'

    def parse_string(self, content : str) -> Subtitles:
        """
        Parse SRT string content into Subtitles
        """
        try:
            subtitles = self._parse_srt(content)
            logging.debug(f"Parsed {subtitles.itemcount} items from SRT")
            return subtitles

        except SubtitleError:
            raise
        except Exception as e:
            raise SubtitleParseError(_("Unexpected error parsing SRT: {}").format(str(e)), e)

    def compose(self, subtitles : Subtitles) -> str:
        """
        Compose subtitles into SRT format, renumbering items from 1.

        Returns:
            str: SRT content with a leading byte order mark
        """
        if subtitles.is_empty:
            raise NoSubtitlesToWriteError()

        blocks : list[str] = []
        for number, item in enumerate(subtitles.items, start=1):
            cue = [
                str(number),
                f"{FormatSrtDuration(item.start)} {TIME_BOUNDARIES_SEPARATOR} {FormatSrtDuration(item.end)}"
            ]
            cue.extend(self._compose_line(line) for line in item.lines)
            blocks.append('\n'.join(cue))

        return AddBom('\n\n'.join(blocks) + '\n')

    def _parse_srt(self, content : str) -> Subtitles:
        subtitles = Subtitles()
        scanner = Scanner(RemoveBom(content))

        item = SubtitleItem()
        running_style = SrtStyleAttributes()
        after_blank_line = True

        while scanner.has_next():
            line_number = scanner.line_number
            line = (scanner.next() or '').strip()

            if TIME_BOUNDARIES_SEPARATOR in line:
                # The text line just before the boundary is the index of the new cue
                index = self._pop_index_line(item) if not after_blank_line else None
                self._flush_item(subtitles, item)

                item = SubtitleItem(index=index)
                item.start, item.end = self._parse_time_boundaries(line, line_number)
                running_style = SrtStyleAttributes()
                after_blank_line = False
            else:
                parsed = self._parse_text_line(line, running_style)
                if parsed.items:
                    item.lines.append(parsed)
                after_blank_line = not parsed.items

        self._flush_item(subtitles, item)
        return subtitles

    def _pop_index_line(self, item : SubtitleItem) -> int|None:
        if not item.lines:
            return None

        index_text = item.lines[-1].text.strip()
        if not index_text:
            return None

        item.lines.pop()
        return int(index_text) if index_text.isdigit() else None

    def _flush_item(self, subtitles : Subtitles, item : SubtitleItem) -> None:
        while item.lines and not item.lines[-1].text.strip():
            item.lines.pop()

        if item.lines or item.start > 0:
            subtitles.items.append(item)

    def _parse_time_boundaries(self, line : str, line_number : int) -> tuple[int, int]:
        parts = line.split(TIME_BOUNDARIES_SEPARATOR)
        if len(parts) < 2:
            raise SubtitleParseError(_("Line {line}: time boundaries has only {count} element(s)").format(line=line_number, count=len(parts)), line_number=line_number)

        start_text = parts[0].strip()
        end_tokens = parts[1].split()
        if not end_tokens:
            raise SubtitleParseError(_("Line {line}: missing end time in '{text}'").format(line=line_number, text=line), line_number=line_number)

        # Anything after the end time, such as legacy X1:Y1 position hints, is ignored
        start = self._parse_timestamp(start_text, line_number)
        end = self._parse_timestamp(end_tokens[0], line_number)
        return start, end

    def _parse_timestamp(self, text : str, line_number : int) -> int:
        for separator in _MILLISECOND_SEPARATORS:
            try:
                return ParseDuration(text, separator)
            except ValueError:
                continue

        raise SubtitleParseError(_("Line {line}: failed to parse timestamp '{text}'").format(line=line_number, text=text), line_number=line_number)

    def _parse_text_line(self, text : str, running_style : SrtStyleAttributes) -> SubtitleLine:
        """
        Split a line into runs of text at each recognised tag, updating the running style as tags open and close
        """
        items : list[LineItem] = []
        pending_position : int|None = None
        position = 0

        for match in _TAG_PATTERN.finditer(text):
            if match.start() > position:
                pending_position = self._add_text_run(items, text[position:match.start()], running_style, pending_position)

            closing = bool(match.group(1))
            tag_name = match.group(2).lower()
            if tag_name == 'b':
                running_style.bold = not closing
            elif tag_name == 'i':
                running_style.italics = not closing
            elif tag_name == 'u':
                running_style.underline = not closing
            elif closing:
                running_style.color = None
            else:
                running_style.color = ParseHtmlColor(match.group(3) or '') or running_style.color

            position = match.end()

        if position < len(text):
            self._add_text_run(items, text[position:], running_style, pending_position)

        if all(not item.text.strip() for item in items):
            return SubtitleLine()

        return SubtitleLine(items)

    def _add_text_run(self, items : list[LineItem], text : str, running_style : SrtStyleAttributes, position : int|None = None) -> int|None:
        """
        Add a run of text with a snapshot of the running style.
        A {\\anN} prefix applies to this run only, or to the next one if no text follows it.
        Returns a position that is still waiting for text.
        """
        position_match = _POSITION_PATTERN.match(text)
        if position_match:
            position = int(position_match.group(1))
            text = text[position_match.end():]

        if not text:
            return position

        style = running_style.Copy()
        if position:
            style.position = position

        # Unstyled runs carry no attributes at all
        inline_style = StyleAttributes(srt=style) if style.any_set else None
        items.append(LineItem(UnescapeHtml(text), inline_style))
        return None

    def _compose_line(self, line : SubtitleLine) -> str:
        return ''.join(self._compose_line_item(item) for item in line.items)

    def _compose_line_item(self, item : LineItem) -> str:
        attributes = _get_srt_attributes(item)
        if not attributes:
            return EscapeHtml(item.text)

        opening = ''
        closing = ''
        if attributes.color:
            opening += f'<font color="{attributes.color}">'
            closing = '</font>' + closing
        if attributes.bold:
            opening += '<b>'
            closing = '</b>' + closing
        if attributes.italics:
            opening += '<i>'
            closing = '</i>' + closing
        if attributes.underline:
            opening += '<u>'
            closing = '</u>' + closing
        if attributes.position:
            opening += f'{{\\an{attributes.position}}}'

        return opening + EscapeHtml(item.text) + closing

def _get_srt_attributes(item : LineItem) -> SrtStyleAttributes|None:
    """
    SRT attributes of a line item. When the item came from another format they are derived
    from WebVTT b/i/u spans and a TTML colour.
    """
    inline_style = item.inline_style
    if not inline_style:
        return None

    if inline_style.srt:
        return inline_style.srt

    attributes = SrtStyleAttributes()
    if inline_style.webvtt and inline_style.webvtt.tags:
        names = { tag.name.lower() for tag in inline_style.webvtt.tags }
        attributes.bold = 'b' in names
        attributes.italics = 'i' in names
        attributes.underline = 'u' in names

    if inline_style.ttml and inline_style.ttml.color:
        attributes.color = inline_style.ttml.color

    return attributes if attributes.any_set else None
