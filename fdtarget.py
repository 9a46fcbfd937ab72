import os
import stat
from dataclasses import dataclass
from enum import Enum

from logging_config import get_logger

log = get_logger(__name__)


'''
file type of the resource a descriptor points at
'''
class FileType(str, Enum):
    NONE = "none"
    NOT_FOUND = "not_found"
    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    BLOCK = "block"
    CHARACTER = "character"
    FIFO = "fifo"
    SOCKET = "socket"
    UNKNOWN = "unknown"

    def __str__(self):
        return self.value


MODE_TESTS = [
    (stat.S_ISREG, FileType.REGULAR),
    (stat.S_ISDIR, FileType.DIRECTORY),
    (stat.S_ISLNK, FileType.SYMLINK),
    (stat.S_ISBLK, FileType.BLOCK),
    (stat.S_ISCHR, FileType.CHARACTER),
    (stat.S_ISFIFO, FileType.FIFO),
    (stat.S_ISSOCK, FileType.SOCKET),
]

# hardlinks and bind mounts give these types more than one path
ALIASABLE = (FileType.REGULAR, FileType.DIRECTORY)


def file_type_from_mode(mode):
    for test, file_type in MODE_TESTS:
        if test(mode):
            return file_type
    return FileType.UNKNOWN


def file_type_of(path):
    '''
    Type of whatever `path` resolves to. Symlinks are followed, so for
    /proc/<pid>/fd/<n> this is the type of the descriptor's target.
    '''
    try:
        st = os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return FileType.NOT_FOUND
    except OSError:
        return FileType.NONE
    return file_type_from_mode(st.st_mode)


@dataclass(frozen=True)
class TargetIdentity:
    path: str
    type: FileType

    @property
    def label(self):
        return f"{self.path} ({self.type})"


def equivalent(a, b, same_file=os.path.samefile):
    '''
    Whether two targets are the same resource. Path equality decides for
    every type; regular files and directories also get a device/inode check
    through `same_file`. A failing check counts as not equivalent.
    '''
    if a.type != b.type:
        return False
    if a.path == b.path:
        return True
    if a.type not in ALIASABLE:
        return False
    try:
        return bool(same_file(a.path, b.path))
    except OSError as e:
        log.debug("same file check failed", a=a.path, b=b.path, error=str(e))
        return False
