"""
Writing generated files only when their content changed
"""

from enum import Enum
from pathlib import Path


class WriteEvent(Enum):
    """What write_if_changed did with a file"""
    UNCHANGED = "No need to update file"
    CREATED = "Creating file"
    OVERWRITTEN = "Overwriting file"
    FORCED = "Forcefully writing file"

    @property
    def wrote(self) -> bool:
        return self is not WriteEvent.UNCHANGED


def write_if_changed(path, data: bytes, force: bool = False, verbose: bool = False) -> WriteEvent:
    """Write data to path if forced, missing, or different from what is there

    Keeps timestamps of unchanged files so native builds don't recompile them.
    I/O errors propagate to the caller.
    """
    path = Path(path)

    if force:
        event = WriteEvent.FORCED
    elif not path.exists():
        event = WriteEvent.CREATED
    elif path.stat().st_size != len(data):
        event = WriteEvent.OVERWRITTEN
    elif path.read_bytes() != data:
        event = WriteEvent.OVERWRITTEN
    else:
        event = WriteEvent.UNCHANGED

    if event.wrote:
        path.write_bytes(data)
    if verbose:
        print(f"[{event.value} {path}]")
    return event
