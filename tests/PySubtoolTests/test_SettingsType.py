import unittest

from PySubtool.SettingsType import SettingsError, SettingsType
from PySubtool.Helpers.TestCases import LoggedTestCase
from PySubtool.Helpers.Tests import log_input_expected_error, skip_if_debugger_attached

class TestSettingsType(LoggedTestCase):
    def setUp(self):
        super().setUp()
        self.settings = SettingsType({
            'flag': True,
            'flag_text': 'False',
            'flag_upper': 'TRUE',
            'count': 5,
            'name': 'subtitles',
            'offset': -1500,
            'offset_float': 250.75,
            'offset_timestamp': '00:01:30.500',
            'offset_srt_timestamp': '00:00:02,250',
            'offset_text': '750',
        })

    def test_get_bool(self):
        self.assertLoggedTrue("bool", self.settings.get_bool('flag'))
        self.assertLoggedFalse("bool from text", self.settings.get_bool('flag_text'))
        self.assertLoggedTrue("bool from upper case text", self.settings.get_bool('flag_upper'))
        self.assertLoggedFalse("missing bool", self.settings.get_bool('missing'))
        self.assertLoggedTrue("missing bool with default", self.settings.get_bool('missing', True))

    def test_get_duration(self):
        cases = [
            ('offset', -1500),
            ('offset_float', 250),
            ('offset_timestamp', 90500),
            ('offset_srt_timestamp', 2250),
            ('offset_text', 750),
            ('missing', None),
        ]
        for key, expected in cases:
            with self.subTest(key=key):
                self.assertLoggedEqual(key, expected, self.settings.get_duration(key), input_value=self.settings.get(key))

    def test_get_duration_default(self):
        self.assertLoggedEqual("default duration", 1000, self.settings.get_duration('missing', 1000))

    @skip_if_debugger_attached
    def test_invalid_values(self):
        invalid_cases = [
            (self.settings.get_bool, 'count'),
            (self.settings.get_bool, 'name'),
            (self.settings.get_duration, 'name'),
            (self.settings.get_duration, 'flag'),
        ]
        for getter, key in invalid_cases:
            with self.subTest(getter=getter.__name__, key=key):
                with self.assertRaises(SettingsError) as e:
                    getter(key)
                log_input_expected_error(self.settings.get(key), SettingsError, e.exception)

    def test_update_ignores_none(self):
        self.settings.update({'offset': None, 'extra': '00:00:03.000'})

        self.assertLoggedEqual("offset kept", -1500, self.settings.get_duration('offset'))
        self.assertLoggedEqual("extra added", 3000, self.settings.get_duration('extra'))

    def test_copy_from_settings(self):
        copy = SettingsType(self.settings)
        copy['offset'] = 1

        self.assertLoggedIsInstance("type", copy, SettingsType)
        self.assertLoggedEqual("original unchanged", -1500, self.settings.get_duration('offset'))

if __name__ == '__main__':
    unittest.main()
