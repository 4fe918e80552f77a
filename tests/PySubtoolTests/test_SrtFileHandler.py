import os
import tempfile
import unittest
from datetime import timedelta

import srt

from PySubtool.Formats.SrtFileHandler import SrtFileHandler
from PySubtool.Helpers.TestCases import ItemSummary, LoggedTestCase
from PySubtool.Helpers.Tests import log_input_expected_error, skip_if_debugger_attached
from PySubtool.Helpers.Text import BOM, RemoveBom
from PySubtool.StyleAttributes import SrtStyleAttributes, StyleAttributes, TtmlStyleAttributes
from PySubtool.SubtitleError import NoSubtitlesToWriteError, SubtitleParseError
from PySubtool.SubtitleItem import SubtitleItem
from PySubtool.SubtitleLine import LineItem, SubtitleLine
from PySubtool.Subtitles import Subtitles

class TestSrtFileHandler(LoggedTestCase):
    """Test cases for the SubRip file handler."""

    styled_srt = (
        "1\n"
        "00:00:01,000 --> 00:00:02,500\n"
        "<b>Bold</b> and <i>italic</i>\n"
        "\n"
        "2\n"
        "00:00:03,000 --> 00:00:04,000\n"
        '<font color="#ff0000">Red text</font>\n'
        "Second line\n"
        "\n"
        "3\n"
        "00:00:05.000 --> 00:00:06.000 X1:100 X2:200 Y1:10 Y2:20\n"
        "{\\an8}Top &amp; centre\n"
    )

    def setUp(self):
        super().setUp()
        self.handler = SrtFileHandler()

    def test_get_file_extensions(self):
        self.assertLoggedSequenceEqual("extensions", ['.srt'], self.handler.get_file_extensions())

    def test_ParseSimpleCue(self):
        content = "1\n00:01:00,000 --> 00:02:00,000\nHello World\n"
        subtitles = self.handler.parse_string(content)

        self.assertLoggedEqual("item count", 1, subtitles.itemcount, input_value=content)
        item = subtitles.items[0]
        self.assertLoggedEqual("start", 60000, item.start)
        self.assertLoggedEqual("end", 120000, item.end)
        self.assertLoggedEqual("index", 1, item.index)
        self.assertLoggedEqual("text", "Hello World", item.text)
        self.assertLoggedIsNone("no inline style", item.lines[0].items[0].inline_style)

    def test_ComposeSimpleCue(self):
        content = "1\n00:01:00,000 --> 00:02:00,000\nHello World\n"
        composed = self.handler.compose(self.handler.parse_string(content))
        self.assertLoggedEqual("composed", BOM + content, composed, input_value=content)

    def test_ParseStyledCues(self):
        subtitles = self.handler.parse_string(self.styled_srt)

        expected = [
            (1000, 2500, "Bold and italic"),
            (3000, 4000, "Red text - Second line"),
            (5000, 6000, "Top & centre"),
        ]
        self.assertLoggedSequenceEqual("items", expected, ItemSummary(subtitles.items))
        self.assertLoggedSequenceEqual("indexes", [1, 2, 3], [ item.index for item in subtitles.items ])

        runs = subtitles.items[0].lines[0].items
        self.assertLoggedSequenceEqual("runs", ["Bold", " and ", "italic"], [ run.text for run in runs ])
        self.assertLoggedEqual("bold run", SrtStyleAttributes(bold=True), runs[0].inline_style.srt)
        self.assertLoggedIsNone("plain run", runs[1].inline_style)
        self.assertLoggedEqual("italic run", SrtStyleAttributes(italics=True), runs[2].inline_style.srt)

        red_line, plain_line = subtitles.items[1].lines
        self.assertLoggedEqual("font color", "#ff0000", red_line.items[0].inline_style.srt.color)
        self.assertLoggedIsNone("color closed", plain_line.items[0].inline_style)

        positioned = subtitles.items[2].lines[0].items[0]
        self.assertLoggedEqual("position", 8, positioned.inline_style.srt.position)

    def test_ComposeStyledCues(self):
        expected = (
            BOM +
            "1\n"
            "00:00:01,000 --> 00:00:02,500\n"
            "<b>Bold</b> and <i>italic</i>\n"
            "\n"
            "2\n"
            "00:00:03,000 --> 00:00:04,000\n"
            '<font color="#ff0000">Red text</font>\n'
            "Second line\n"
            "\n"
            "3\n"
            "00:00:05,000 --> 00:00:06,000\n"
            "{\\an8}Top &amp; centre\n"
        )
        composed = self.handler.compose(self.handler.parse_string(self.styled_srt))
        self.assertLoggedEqual("composed", expected, composed)

    def test_ComposedOutputReadBySrtLibrary(self):
        composed = self.handler.compose(self.handler.parse_string(self.styled_srt))
        parsed = list(srt.parse(RemoveBom(composed)))

        self.assertLoggedEqual("cue count", 3, len(parsed))
        self.assertLoggedSequenceEqual("indexes", [1, 2, 3], [ cue.index for cue in parsed ])
        self.assertLoggedEqual("first start", timedelta(seconds=1), parsed[0].start)
        self.assertLoggedEqual("first end", timedelta(seconds=2, milliseconds=500), parsed[0].end)
        self.assertLoggedEqual("multiline content", '<font color="#ff0000">Red text</font>\nSecond line', parsed[1].content)

    def test_ParseSrtLibraryOutput(self):
        cues = [
            srt.Subtitle(index=1, start=timedelta(seconds=1), end=timedelta(seconds=2), content="First"),
            srt.Subtitle(index=2, start=timedelta(minutes=1, milliseconds=5), end=timedelta(minutes=1, seconds=3), content="Second\nwith two lines"),
            srt.Subtitle(index=3, start=timedelta(hours=1), end=timedelta(hours=1, seconds=1), content="<i>Third</i>"),
        ]
        subtitles = self.handler.parse_string(srt.compose(cues))

        expected = [
            (1000, 2000, "First"),
            (60005, 63000, "Second - with two lines"),
            (3600000, 3601000, "Third"),
        ]
        self.assertLoggedSequenceEqual("items", expected, ItemSummary(subtitles.items))

    def test_NestedAndCaseInsensitiveTags(self):
        content = "1\n00:00:01,000 --> 00:00:02,000\n<B><I>Both</I></B>\n"
        subtitles = self.handler.parse_string(content)

        run = subtitles.items[0].lines[0].items[0]
        self.assertLoggedEqual("bold and italic", SrtStyleAttributes(bold=True, italics=True), run.inline_style.srt, input_value=content)

        composed = self.handler.compose(subtitles)
        self.assertLoggedIn("nested tags", "<b><i>Both</i></b>\n", composed)

    def test_StyleContinuesAcrossLines(self):
        content = "1\n00:00:01,000 --> 00:00:02,000\n<i>first\nsecond</i>\n"
        subtitles = self.handler.parse_string(content)

        lines = subtitles.items[0].lines
        self.assertLoggedTrue("first line italic", lines[0].items[0].inline_style.srt.italics)
        self.assertLoggedTrue("second line italic", lines[1].items[0].inline_style.srt.italics)

        composed = self.handler.compose(subtitles)
        self.assertLoggedIn("each line tagged", "<i>first</i>\n<i>second</i>\n", composed)

    def test_UnknownTagsAreText(self):
        content = "1\n00:00:01,000 --> 00:00:02,000\n<s>strike</s>\n"
        subtitles = self.handler.parse_string(content)
        self.assertLoggedEqual("literal text", "<s>strike</s>", subtitles.items[0].text, input_value=content)

        reparsed = self.handler.parse_string(self.handler.compose(subtitles))
        self.assertLoggedEqual("text survives round trip", "<s>strike</s>", reparsed.items[0].text)

    def test_BomAndLineEndings(self):
        content = BOM + "1\r\n00:00:01,000 --> 00:00:02,000\r\nHello\r\n\r\n2\r00:00:03,000 --> 00:00:04,000\rWorld\r"
        subtitles = self.handler.parse_string(content)

        expected = [(1000, 2000, "Hello"), (3000, 4000, "World")]
        self.assertLoggedSequenceEqual("items", expected, ItemSummary(subtitles.items))

    def test_MissingIndexes(self):
        content = "00:00:01,000 --> 00:00:02,000\nHello\n\n00:00:03,000 --> 00:00:04,000\nWorld\n"
        subtitles = self.handler.parse_string(content)

        expected = [(1000, 2000, "Hello"), (3000, 4000, "World")]
        self.assertLoggedSequenceEqual("items", expected, ItemSummary(subtitles.items), input_value=content)
        self.assertLoggedSequenceEqual("no indexes", [None, None], [ item.index for item in subtitles.items ])

    def test_ExtraBlankLines(self):
        content = "\n\n1\n00:00:01,000 --> 00:00:02,000\nHello\n\n\n\n2\n00:00:03,000 --> 00:00:04,000\nWorld\n\n\n"
        subtitles = self.handler.parse_string(content)

        expected = [(1000, 2000, "Hello"), (3000, 4000, "World")]
        self.assertLoggedSequenceEqual("items", expected, ItemSummary(subtitles.items))

    def test_ParseEmpty(self):
        subtitles = self.handler.parse_string("")
        self.assertLoggedTrue("no items", subtitles.is_empty)

    @skip_if_debugger_attached
    def test_InvalidTimestamp(self):
        content = "1\n00:00:0a,000 --> 00:00:02,000\nText\n"
        with self.assertRaises(SubtitleParseError) as e:
            self.handler.parse_string(content)

        log_input_expected_error(content, SubtitleParseError, e.exception)
        self.assertLoggedEqual("line number", 2, e.exception.line_number)

    @skip_if_debugger_attached
    def test_MissingEndTime(self):
        content = "1\n00:00:01,000 -->\nText\n"
        with self.assertRaises(SubtitleParseError) as e:
            self.handler.parse_string(content)

        log_input_expected_error(content, SubtitleParseError, e.exception)

    @skip_if_debugger_attached
    def test_ComposeEmpty(self):
        with self.assertRaises(NoSubtitlesToWriteError) as e:
            self.handler.compose(Subtitles())

        log_input_expected_error("empty subtitles", NoSubtitlesToWriteError, e.exception)

    def test_ComposeRenumbers(self):
        subtitles = Subtitles([
            SubtitleItem.Construct(1000, 2000, "First", index=10),
            SubtitleItem.Construct(3000, 4000, "Second", index=20),
        ])
        composed = self.handler.compose(subtitles)

        parsed = list(srt.parse(RemoveBom(composed)))
        self.assertLoggedSequenceEqual("renumbered", [1, 2], [ cue.index for cue in parsed ])

    def test_ComposeStyledLineItems(self):
        line = SubtitleLine([
            LineItem("Warning", StyleAttributes(srt=SrtStyleAttributes(bold=True, underline=True, color="yellow"))),
            LineItem(": a < b"),
        ])
        subtitles = Subtitles([SubtitleItem(0, 1500, [line])])

        composed = self.handler.compose(subtitles)
        self.assertLoggedIn("styled line", '<font color="yellow"><b><u>Warning</u></b></font>: a &lt; b\n', composed)

    def test_PositionAppliesToOneRun(self):
        content = "1\n00:00:01,000 --> 00:00:02,000\n{\\an8}Top\nBottom\n"
        subtitles = self.handler.parse_string(content)

        top, bottom = subtitles.items[0].lines
        self.assertLoggedEqual("positioned run", SrtStyleAttributes(position=8), top.items[0].inline_style.srt, input_value=content)
        self.assertLoggedIsNone("next line unpositioned", bottom.items[0].inline_style)

        composed = self.handler.compose(subtitles)
        self.assertLoggedIn("position written once", "{\\an8}Top\nBottom\n", composed)

    def test_PositionBeforeTag(self):
        content = "1\n00:00:01,000 --> 00:00:02,000\n{\\an2}<i>Low</i> text\n"
        runs = self.handler.parse_string(content).items[0].lines[0].items

        self.assertLoggedSequenceEqual("runs", ["Low", " text"], [ run.text for run in runs ], input_value=content)
        self.assertLoggedEqual("tagged run", SrtStyleAttributes(italics=True, position=2), runs[0].inline_style.srt)
        self.assertLoggedIsNone("trailing run", runs[1].inline_style)

    def test_ComposeTtmlColor(self):
        line = SubtitleLine([
            LineItem("Red", StyleAttributes(ttml=TtmlStyleAttributes(color="red"))),
            LineItem(" plain"),
        ])
        subtitles = Subtitles([SubtitleItem(0, 1000, [line])])

        composed = self.handler.compose(subtitles)
        self.assertLoggedIn("font from ttml colour", '<font color="red">Red</font> plain\n', composed)

    def test_LoadFile(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "latin1.srt")
            with open(path, 'w', encoding='iso-8859-1') as f:
                f.write("1\n00:00:01,000 --> 00:00:02,000\nCafé\n")

            subtitles = self.handler.load_file(path)

        self.assertLoggedEqual("fallback encoding", "Café", subtitles.items[0].text)

if __name__ == '__main__':
    unittest.main()
