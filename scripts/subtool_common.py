import os
import logging

from argparse import ArgumentParser, Namespace
from dataclasses import dataclass

from PySubtool import init_subtitles
from PySubtool.Helpers import GetOutputPath
from PySubtool.Helpers.Localization import _, initialize_localization
from PySubtool.SubtitleFormatRegistry import SubtitleFormatRegistry
from PySubtool.Subtitles import Subtitles

log_dir = os.getenv('PYSUBTOOL_LOG_DIR', os.path.join(os.path.expanduser('~'), '.pysubtool'))

@dataclass
class LoggerOptions():
    file_handler: logging.FileHandler|None
    log_path: str

def InitLogger(logfilename: str, debug: bool = False) -> LoggerOptions:
    """ Initialise the logger with a file handler and return the path to the log file """
    log_path = os.path.join(log_dir, f"{logfilename}.log")
    file_handler = None

    if debug:
        logging_level = logging.DEBUG
    else:
        level_name = os.getenv('LOG_LEVEL', 'INFO').upper()
        logging_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(format='%(levelname)s: %(message)s', encoding='utf-8', level=logging_level)

    if debug:
        logging.debug("Debug logging enabled")

    initialize_localization()

    try:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8', mode='w')
        file_handler.setLevel(logging_level)
        file_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logging.getLogger('').addHandler(file_handler)
    except OSError as e:
        logging.warning(f"Unable to create log file at {log_path}: {e}")

    return LoggerOptions(file_handler=file_handler, log_path=log_path)

def CreateArgParser(description : str) -> ArgumentParser:
    """
    Create the argument parser with options shared by every subcommand
    """
    pre_parser = ArgumentParser(add_help=False)
    pre_parser.add_argument('--list-formats', action='store_true')
    pre_args, _unknown = pre_parser.parse_known_args()
    if pre_args.list_formats:
        HandleFormatListing(pre_args)

    parser = ArgumentParser(description=description)
    parser.add_argument('--list-formats', action='store_true', help="List supported subtitle formats and exit")
    parser.add_argument('--debug', action='store_true', help="Run with DEBUG log level")
    return parser

def AddInputOutputArguments(parser : ArgumentParser) -> None:
    """
    Arguments for a subcommand that reads one subtitle file and writes another
    """
    parser.add_argument('input', help="Path to subtitle file (see --list-formats for supported formats)")
    parser.add_argument('-o', '--output', help="Output subtitle file path; format inferred from extension")
    parser.add_argument('--format', type=str, default=None, help="Input format name, if it cannot be deduced from the extension")

def HandleFormatListing(args: Namespace) -> None:
    """Print supported subtitle formats and exit if requested."""
    if getattr(args, "list_formats", False):
        formats = SubtitleFormatRegistry.list_available_formats()
        if formats:
            print(f"Supported subtitle formats: {formats}")
        else:
            print("No subtitle formats available.")
        raise SystemExit(0)

def LoadSubtitles(args : Namespace) -> Subtitles:
    """
    Load the input file named on the command line
    """
    return init_subtitles(filepath=args.input, format=args.format)

def SaveSubtitles(subtitles : Subtitles, args : Namespace, suffix : str) -> str:
    """
    Save the subtitles to the output path, or next to the input with a suffix describing the operation
    """
    output_path = args.output or GetOutputPath(subtitles.sourcepath, suffix)
    if not output_path:
        raise ValueError(_("No output path could be determined"))

    subtitles.SaveSubtitles(output_path)
    return output_path
