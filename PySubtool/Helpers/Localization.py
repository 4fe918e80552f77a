import gettext
import logging
import os

locale_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'locales')

_translation : gettext.NullTranslations = gettext.NullTranslations()

def initialize_localization(language : str|None = None) -> None:
    """
    Load the message catalogue for a language, falling back to untranslated messages.
    The language defaults to the PYSUBTOOL_LANGUAGE environment variable.
    """
    global _translation
    language = language or os.getenv('PYSUBTOOL_LANGUAGE')
    if not language:
        _translation = gettext.NullTranslations()
        return

    _translation = gettext.translation('pysubtool', localedir=locale_dir, languages=[language], fallback=True)
    if isinstance(_translation, gettext.GNUTranslations):
        logging.debug(f"Loaded message catalogue for {language}")

def _(text : str) -> str:
    """ Translate a user-facing message """
    return _translation.gettext(text)
