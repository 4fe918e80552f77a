from collections.abc import Sequence
import unittest
from typing import Any

from PySubtool.Helpers.Tests import log_input_expected_result, log_test_name
from PySubtool.SubtitleItem import SubtitleItem
from PySubtool.Subtitles import Subtitles

class LoggedTestCase(unittest.TestCase):
    """
    Test case that logs the test name and the inputs and results of each assertion
    """
    @classmethod
    def setUpClass(cls) -> None:
        super().setUpClass()
        log_test_name(f"{cls.__name__}")

    def setUp(self) -> None:
        super().setUp()
        log_test_name(self._testMethodName)

    def assertLoggedEqual(self, description : str, expected : Any, actual : Any, msg : str|None = None, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, expected, actual)
        self.assertEqual(expected, actual, msg or description)

    def assertLoggedTrue(self, description : str, actual : Any, msg : str|None = None, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, True, actual)
        self.assertTrue(actual, msg or description)

    def assertLoggedFalse(self, description : str, actual : Any, msg : str|None = None, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, False, actual)
        self.assertFalse(actual, msg or description)

    def assertLoggedIs(self, description : str, expected : Any, actual : Any, msg : str|None = None, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, expected, actual)
        self.assertIs(actual, expected, msg or description)

    def assertLoggedIsNone(self, description : str, actual : Any, msg : str|None = None, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, None, actual)
        self.assertIsNone(actual, msg or description)

    def assertLoggedIsNotNone(self, description : str, actual : Any, msg : str|None = None, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, "not None", actual)
        self.assertIsNotNone(actual, msg or description)

    def assertLoggedIsInstance(self, description : str, actual : Any, expected_type : type, msg : str|None = None, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, expected_type.__name__, type(actual).__name__)
        self.assertIsInstance(actual, expected_type, msg or description)

    def assertLoggedGreater(self, description : str, first : Any, second : Any, msg : str|None = None, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, f"> {second!r}", first)
        self.assertGreater(first, second, msg or description)

    def assertLoggedIn(self,description : str, member : Any, container : Any, msg : str|None = None, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, member, container)
        self.assertIn(member, container, msg or description)

    def assertLoggedNotIn(self, description : str, member : Any, container : Any, msg : str|None = None, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, f"not {member!r}", container)
        self.assertNotIn(member, container, msg or description)

    def assertLoggedSequenceEqual(self, description : str, expected : Sequence[Any], actual : Sequence[Any], msg : str|None = None, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, expected, actual)
        self.assertSequenceEqual(list(expected), list(actual), msg or description)


class SubtitleTestCase(LoggedTestCase):
    """
    Helpers for comparing the timing and text of subtitle items
    """
    def assertItemTimings(self, description : str, expected : Sequence[tuple[int, int]], subtitles : Subtitles) -> None:
        self.assertLoggedSequenceEqual(description, expected, [ (item.start, item.end) for item in subtitles.items ])


def ItemSummary(items : Sequence[SubtitleItem]) -> list[tuple[int, int, str]]:
    """
    Start, end and text of each item, for comparing subtitles independent of formatting
    """
    return [ (item.start, item.end, item.text) for item in items ]

def BuildSubtitles(*items : tuple[int, int, str]) -> Subtitles:
    """
    Create unstyled subtitles from (start, end, text) tuples
    """
    return Subtitles([ SubtitleItem.Construct(start, end, text, index=i) for i, (start, end, text) in enumerate(items, start=1) ])
