import re

_RESERVED_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f\x80-\x9f]')
_WINDOWS_RESERVED = re.compile(r"^(con|prn|aux|nul|com[0-9]|lpt[0-9])(\..*)?$", re.IGNORECASE)
_SEPARATORS = re.compile(r"[/\\]")
_MAX_NAME_BYTES = 255


def sanitize_filename(name: str) -> str:
    """
    Reduce an uploaded filename to a safe basename.

    Directory components are dropped, reserved and control characters removed.
    Returns "" when nothing usable remains (e.g. ".", "..").
    """
    basename = _SEPARATORS.split(name)[-1]
    cleaned = _RESERVED_CHARS.sub("", basename)
    cleaned = cleaned.rstrip(". ")

    if cleaned in ("", ".", ".."):
        return ""

    if _WINDOWS_RESERVED.match(cleaned):
        cleaned = f"_{cleaned}"

    encoded = cleaned.encode("utf-8")
    if len(encoded) > _MAX_NAME_BYTES:
        cleaned = encoded[:_MAX_NAME_BYTES].decode("utf-8", errors="ignore")

    return cleaned


def sanitize_postfolder(folder: str) -> str:
    """
    Constrain a post folder to a relative path below the content root.

    Empty, "." and ".." segments are dropped; every remaining segment is
    sanitized like a filename. The result never starts with a separator.
    """
    segments = []
    for segment in _SEPARATORS.split(folder):
        if segment in ("", ".", ".."):
            continue
        safe = sanitize_filename(segment)
        if safe:
            segments.append(safe)
    return "/".join(segments)


def build_logical_path(content_root: str, postfolder: str, name: str) -> str:
    """Join already-sanitized parts into a destination-relative path."""
    root = content_root.strip("/")
    parts = [p for p in (root, postfolder, name) if p]
    return "/".join(parts)
