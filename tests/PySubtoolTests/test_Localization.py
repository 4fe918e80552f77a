import os
import unittest
from unittest.mock import patch

from PySubtool.Helpers.TestCases import LoggedTestCase
from PySubtool.Helpers.Tests import skip_if_debugger_attached
from PySubtool.Helpers.Localization import initialize_localization, _

class TestLocalization(LoggedTestCase):
    def tearDown(self):
        initialize_localization()
        super().tearDown()

    def test_untranslated_by_default(self):
        environment = { key: value for key, value in os.environ.items() if key != 'PYSUBTOOL_LANGUAGE' }
        with patch.dict(os.environ, environment, clear=True):
            initialize_localization()

        text = "No subtitles to write"
        self.assertLoggedEqual("identity translation", text, _(text))

    @skip_if_debugger_attached
    def test_missing_language_fallback(self):
        initialize_localization("zz")  # non-existent locale
        text = "Could not detect subtitle format"
        self.assertLoggedEqual("fallback translation", text, _(text))

    def test_language_from_environment(self):
        with patch.dict(os.environ, {'PYSUBTOOL_LANGUAGE': 'zz'}):
            initialize_localization()

        text = "Ordering subtitles"
        self.assertLoggedEqual("fallback translation", text, _(text))

    def test_placeholder_formatting(self):
        initialize_localization("en")
        msgid = "Loaded {count} subtitles from {path}"
        formatted = _(msgid).format(count=3, path="ABC.srt")
        self.assertLoggedEqual("formatted message", "Loaded 3 subtitles from ABC.srt", formatted, input_value=msgid)

if __name__ == '__main__':
    unittest.main()
