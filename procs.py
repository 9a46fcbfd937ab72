import os

from fdgroups import DescriptorRecord
from fdtarget import TargetIdentity, file_type_of
from logging_config import get_logger

log = get_logger(__name__)

PROC_ROOT = "/proc"


def is_number(text):
    return text.isascii() and text.isdigit()


def parse_pid(text):
    if is_number(text) and int(text) > 0:
        return int(text)
    return None


def read_argv0(pid, proc_root=PROC_ROOT):
    with open(f"{proc_root}/{pid}/cmdline", "rb") as f:
        raw = f.read()
    return raw.split(b"\0", 1)[0].decode(errors="replace")


'''
pid of a running process by name, matched against argv[0] or its basename
'''
def find_pid(name, proc_root=PROC_ROOT):
    found = None
    for pid in sorted(map(int, filter(is_number, os.listdir(proc_root)))):
        try:
            argv0 = read_argv0(pid, proc_root)
        except (PermissionError, FileNotFoundError, ProcessLookupError):
            continue
        if argv0 and (argv0 == name or os.path.basename(argv0) == name):
            found = pid
    if found is not None:
        log.info("found process", name=name, pid=found)
    return found


'''
open fds of a process, sorted by descriptor number
'''
def list_descriptors(pid, proc_root=PROC_ROOT):
    fd_dir = f"{proc_root}/{pid}/fd"
    entries = []
    for name in os.listdir(fd_dir):
        if not is_number(name):
            log.warning("entry is not a file descriptor", entry=f"{fd_dir}/{name}")
            continue
        entries.append((int(name), name))

    records = []
    for number, name in sorted(entries):
        path = f"{fd_dir}/{name}"
        file_type = file_type_of(path)
        if not os.path.islink(path):
            if os.path.lexists(path):
                log.warning("entry is not a symlink", entry=path, type=str(file_type))
            else:
                log.debug("descriptor closed while listing", entry=path)
            continue
        try:
            target = os.readlink(path)
        except OSError as e:
            log.debug("descriptor unreadable", entry=path, error=str(e))
            continue
        records.append(DescriptorRecord(number, TargetIdentity(target, file_type)))
    return records
