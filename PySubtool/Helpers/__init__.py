import os

def GetInputPath(filepath : str|None) -> str|None:
    """
    Normalize the input file path for cross-platform compatibility.

    Args:
        filepath: Input file path

    Returns:
        str: Normalized path preserving original extension
        None: If filepath is None
    """
    if not filepath:
        return None
    return os.path.normpath(filepath)

def GetOutputPath(filepath : str|None, suffix : str|None = None, format_extension : str|None = None) -> str|None:
    """
    Generate an output path for a transformed subtitle file.

    Args:
        filepath: Input file path to base output path on
        suffix: Optional suffix to add to the basename (e.g. "synced")
        format_extension: Target format extension (e.g. '.vtt'). If None, keeps the input extension.

    Returns:
        str: Output path with format: "basename.suffix.extension"
        None: If filepath is None
    """
    if not filepath:
        return None

    directory = os.path.dirname(filepath)
    basename, current_extension = os.path.splitext(os.path.basename(filepath))

    if format_extension:
        target_extension = format_extension if format_extension.startswith('.') else f'.{format_extension}'
    else:
        target_extension = current_extension or '.srt'

    if suffix and not basename.endswith(f".{suffix}"):
        basename = f"{basename}.{suffix}"

    output_path = os.path.join(directory, f"{basename}{target_extension}")

    # Never silently overwrite the input file
    if os.path.normpath(output_path) == os.path.normpath(filepath):
        output_path = os.path.join(directory, f"{basename}.out{target_extension}")

    return os.path.normpath(output_path)

