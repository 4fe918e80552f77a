import logging

from check_imports import check_required_imports
check_required_imports(['PySubtool', 'regex', 'pysubs2'])

from subtool_common import (
    InitLogger,
    CreateArgParser,
    AddInputOutputArguments,
    LoadSubtitles,
    SaveSubtitles,
)

from PySubtool import init_settings, init_subtitles, process_subtitles
from PySubtool.SubtitleEditor import SubtitleEditor

parser = CreateArgParser("Converts subtitles between formats and adjusts their timing")
commands = parser.add_subparsers(dest='command', required=True)

convert_parser = commands.add_parser('convert', help="Convert subtitles to the format of the output file")
AddInputOutputArguments(convert_parser)

sync_parser = commands.add_parser('sync', help="Shift every subtitle by an offset")
AddInputOutputArguments(sync_parser)
sync_parser.add_argument('--offset', type=str, required=True, help="Offset in milliseconds or as a timestamp, e.g. -1500 or 00:00:02.000")

fragment_parser = commands.add_parser('fragment', help="Split subtitles at fixed intervals")
AddInputOutputArguments(fragment_parser)
fragment_parser.add_argument('--duration', type=str, required=True, help="Fragment duration in milliseconds or as a timestamp")

unfragment_parser = commands.add_parser('unfragment', help="Merge touching subtitles with identical text")
AddInputOutputArguments(unfragment_parser)

merge_parser = commands.add_parser('merge', help="Merge the subtitles of a second file into the first")
AddInputOutputArguments(merge_parser)
merge_parser.add_argument('other', help="Path to the subtitle file to merge in")

optimize_parser = commands.add_parser('optimize', help="Remove unused styles and regions")
AddInputOutputArguments(optimize_parser)

correction_parser = commands.add_parser('apply-linear-correction', help="Remap timestamps so two reference points line up")
AddInputOutputArguments(correction_parser)
correction_parser.add_argument('--actual1', type=str, required=True, help="First reference time in the subtitles")
correction_parser.add_argument('--desired1', type=str, required=True, help="Time the first reference should move to")
correction_parser.add_argument('--actual2', type=str, required=True, help="Second reference time in the subtitles")
correction_parser.add_argument('--desired2', type=str, required=True, help="Time the second reference should move to")

remove_styling_parser = commands.add_parser('remove-styling', help="Remove all styles, regions and inline formatting")
AddInputOutputArguments(remove_styling_parser)

force_duration_parser = commands.add_parser('force-duration', help="Clip or extend the subtitles to a duration")
AddInputOutputArguments(force_duration_parser)
force_duration_parser.add_argument('--duration', type=str, required=True, help="Target duration in milliseconds or as a timestamp")
force_duration_parser.add_argument('--add-dummy-item', action='store_true', help="Add a placeholder subtitle at the end if the subtitles are shorter")

args = parser.parse_args()

logger_options = InitLogger("subtool", args.debug)

def GetSettings(args) -> dict:
    """ Map the subcommand and its arguments to processor settings """
    if args.command == 'sync':
        return { 'sync_offset': args.offset }
    if args.command == 'fragment':
        return { 'fragment_duration': args.duration }
    if args.command == 'unfragment':
        return { 'unfragment': True }
    if args.command == 'optimize':
        return { 'optimize': True }
    if args.command == 'apply-linear-correction':
        return { 'actual1': args.actual1, 'desired1': args.desired1, 'actual2': args.actual2, 'desired2': args.desired2 }
    if args.command == 'remove-styling':
        return { 'remove_styling': True }
    if args.command == 'force-duration':
        return { 'force_duration': args.duration, 'add_dummy_item': args.add_dummy_item }
    return {}

try:
    subtitles = LoadSubtitles(args)

    if args.command == 'merge':
        other = init_subtitles(filepath=args.other)
        with SubtitleEditor(subtitles) as editor:
            editor.Merge(other)
    else:
        settings = init_settings(**GetSettings(args))
        process_subtitles(subtitles, settings)

    suffix = 'converted' if args.command == 'convert' else args.command
    output_path = SaveSubtitles(subtitles, args, suffix)
    logging.info(f"Wrote {subtitles.itemcount} subtitles to {output_path}")

except Exception as e:
    print("Error:", e)
    raise
