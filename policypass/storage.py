import os
import json
from typing import Iterable


def ensure_dir_exists(path: str) -> None:
    d = os.path.dirname(path)
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)


def atomic_write_bytes(path: str, data: bytes) -> None:
    """
    Atomically write bytes to 'path' by writing to a temp file and renaming.
    """
    ensure_dir_exists(path)
    tmp = path + ".tmp"
    with open(tmp, "wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp, path)


def write_passwords(path: str, passwords: Iterable[str]) -> int:
    """
    Write one password per line to 'path'. Returns the number written.
    The file is replaced only once the whole batch is on disk.
    """
    lines = list(passwords)
    body = "".join(pw + "\n" for pw in lines)
    atomic_write_bytes(path, body.encode("utf-8"))
    return len(lines)


def dump_json_bytes(obj: dict) -> bytes:
    return json.dumps(obj, ensure_ascii=False, indent=2).encode("utf-8")
