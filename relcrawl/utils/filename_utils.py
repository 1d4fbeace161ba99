import re
from datetime import datetime
from typing import Optional

_UNSAFE = re.compile(r'[\\/:*?"<>|\x00-\x1f\x7f]')


def replace_unsafe_str(value: str, replacement: str = "_") -> str:
    """Replace characters that are not allowed in file names on common filesystems."""
    if value is None:
        return ""
    return _UNSAFE.sub(replacement, value).strip()


def timestamp_for_filename(now: Optional[datetime] = None) -> str:
    """Local time in a human-readable form, already safe for file names."""
    now = now or datetime.now()
    return replace_unsafe_str(now.strftime("%Y/%m/%d %H:%M:%S"))
