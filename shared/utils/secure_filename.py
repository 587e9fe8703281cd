import os
from urllib.parse import quote

from slugify import slugify

MAX_STEM_LENGTH = 80


def secure_filename(input_str: str, uri_safe: bool = False) -> str:
    """
    Generates a secure, cross-platform-safe filename from user input.

    The stem is slugified (ASCII, lowercase, hyphen separated) and the
    extension is kept in lowercase. Directory components are dropped.

    Parameters:
    - input_str (str): The raw input string.
    - uri_safe (bool): If True, returns URI-encoded filename using percent encoding.

    Returns:
    - str: A safe filename suitable for file saving. ``"file"`` when nothing
      usable is left of the stem.
    """
    # Remove directory traversal, including Windows separators
    input_str = os.path.basename(input_str.replace("\\", "/"))

    stem, ext = os.path.splitext(input_str)
    safe_stem = slugify(stem, max_length=MAX_STEM_LENGTH) or "file"
    safe_ext = slugify(ext.lstrip("."), separator="")
    filename = f"{safe_stem}.{safe_ext}" if safe_ext else safe_stem

    if uri_safe:
        filename = quote(filename)

    return filename
