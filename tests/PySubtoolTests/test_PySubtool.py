import os
import tempfile
import unittest

from PySubtool import (
    init_settings,
    init_subtitles,
    process_subtitles,
    read_subtitles,
    write_subtitles,
)
from PySubtool.Helpers.TestCases import ItemSummary, LoggedTestCase
from PySubtool.Helpers.Tests import (
    log_input_expected_error,
    skip_if_debugger_attached,
)
from PySubtool.Helpers.Text import HasBom
from PySubtool.SettingsType import SettingsType
from PySubtool.SubtitleError import InvalidExtensionError, NoSubtitlesToWriteError, SubtitleError
from PySubtool.Subtitles import Subtitles


class PySubtoolConvenienceTests(LoggedTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.srt_content = "1\n00:00:01,000 --> 00:00:04,000\nHello world\n\n2\n00:00:06,000 --> 00:00:09,000\n<i>How are you?</i>\nFine\n"
        self.vtt_content = "WEBVTT\n\n1\n00:00:01.000 --> 00:00:04.000\nHello world\n\n2\n00:00:06.000 --> 00:00:09.000\n<i>How are you?</i>\nFine\n"
        self.expected = [
            (1000, 4000, "Hello world"),
            (6000, 9000, "How are you? - Fine"),
        ]

    def test_read_subtitles(self) -> None:
        for format_name, content in [('srt', self.srt_content), ('webvtt', self.vtt_content)]:
            with self.subTest(format=format_name):
                subtitles = read_subtitles(content, format_name)
                self.assertLoggedSequenceEqual(format_name, self.expected, ItemSummary(subtitles.items))
                self.assertLoggedEqual("file format", format_name, subtitles.file_format)

    def test_read_subtitles_detects_format(self) -> None:
        subtitles = read_subtitles(self.vtt_content)
        self.assertLoggedEqual("detected format", 'webvtt', subtitles.file_format)
        self.assertLoggedSequenceEqual("items", self.expected, ItemSummary(subtitles.items))

    def test_round_trip(self) -> None:
        for format_name, content in [('srt', self.srt_content), ('webvtt', self.vtt_content)]:
            with self.subTest(format=format_name):
                written = write_subtitles(read_subtitles(content, format_name), format_name)
                reread = read_subtitles(written, format_name)
                self.assertLoggedSequenceEqual(format_name, self.expected, ItemSummary(reread.items))

    def test_convert_between_formats(self) -> None:
        vtt = write_subtitles(read_subtitles(self.srt_content, 'srt'), 'webvtt')
        self.assertLoggedEqual("srt to webvtt", self.vtt_content, vtt)

        srt = write_subtitles(read_subtitles(self.vtt_content, 'webvtt'), 'srt')
        self.assertLoggedTrue("srt has bom", HasBom(srt))
        self.assertLoggedSequenceEqual("webvtt to srt", self.expected, ItemSummary(read_subtitles(srt, 'srt').items))

    @skip_if_debugger_attached
    def test_unsupported_formats(self) -> None:
        for format_name in ['ttml', 'ssa', 'stl', 'teletext', 'docx']:
            with self.subTest(format=format_name):
                with self.assertRaises(InvalidExtensionError) as e:
                    read_subtitles(self.srt_content, format_name)
                log_input_expected_error(format_name, InvalidExtensionError, e.exception)

                with self.assertRaises(InvalidExtensionError) as e:
                    write_subtitles(read_subtitles(self.srt_content, 'srt'), format_name)
                log_input_expected_error(format_name, InvalidExtensionError, e.exception)

    @skip_if_debugger_attached
    def test_write_empty_subtitles(self) -> None:
        with self.assertRaises(NoSubtitlesToWriteError) as e:
            write_subtitles(Subtitles(), 'srt')
        log_input_expected_error("empty", NoSubtitlesToWriteError, e.exception)

    def test_init_subtitles_from_content(self) -> None:
        subtitles = init_subtitles(content=self.srt_content)
        self.assertLoggedEqual("item count", 2, subtitles.itemcount)
        self.assertLoggedEqual("format", 'srt', subtitles.file_format)

    def test_init_subtitles_empty(self) -> None:
        subtitles = init_subtitles()
        self.assertLoggedTrue("no items", subtitles.is_empty)

    @skip_if_debugger_attached
    def test_init_subtitles_with_filepath_and_content(self) -> None:
        with self.assertRaises(SubtitleError) as e:
            init_subtitles(filepath="movie.srt", content=self.srt_content)
        log_input_expected_error("filepath and content", SubtitleError, e.exception)

    @skip_if_debugger_attached
    def test_init_subtitles_no_items(self) -> None:
        with self.assertRaises(SubtitleError) as e:
            init_subtitles(content="WEBVTT\n\nNOTE nothing here\n", format='webvtt')
        log_input_expected_error("no cues", SubtitleError, e.exception)

    def test_load_and_save_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            source_path = os.path.join(tmpdir, "movie.srt")
            with open(source_path, 'w', encoding='utf-8') as f:
                f.write(self.srt_content)

            subtitles = init_subtitles(filepath=source_path)
            self.assertLoggedEqual("source path", source_path, subtitles.sourcepath)
            self.assertLoggedEqual("file format", 'srt', subtitles.file_format)

            output_path = os.path.join(tmpdir, "movie.vtt")
            subtitles.SaveSubtitles(output_path)

            with open(output_path, 'r', encoding='utf-8') as f:
                self.assertLoggedEqual("saved webvtt", self.vtt_content, f.read())

            reloaded = init_subtitles(filepath=output_path)
            self.assertLoggedSequenceEqual("reloaded", self.expected, ItemSummary(reloaded.items))

    @skip_if_debugger_attached
    def test_load_unknown_extension(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "movie.txt")
            with open(path, 'w', encoding='utf-8') as f:
                f.write(self.srt_content)

            with self.assertRaises(InvalidExtensionError) as e:
                init_subtitles(filepath=path)
            log_input_expected_error(path, InvalidExtensionError, e.exception)

            subtitles = init_subtitles(filepath=path, format='srt')
            self.assertLoggedEqual("format override", 2, subtitles.itemcount)

    def test_process_subtitles(self) -> None:
        subtitles = read_subtitles(self.srt_content, 'srt')
        process_subtitles(subtitles, init_settings(sync_offset=-2000), force_duration="00:00:05.000")

        self.assertLoggedSequenceEqual("processed", [(0, 2000, "Hello world"), (4000, 5000, "How are you? - Fine")], ItemSummary(subtitles.items))

    def test_init_settings(self) -> None:
        settings = init_settings(sync_offset=-1500, unfragment=True)
        self.assertLoggedIsInstance("settings type", settings, SettingsType)
        self.assertLoggedEqual("offset", -1500, settings.get_duration('sync_offset'))
        self.assertLoggedTrue("unfragment", settings.get_bool('unfragment'))

if __name__ == '__main__':
    unittest.main()
