import contextlib
import os
import tempfile

from pngsmith.kernel.errors import PngError


class IoFailure(PngError, OSError):
    def __init__(self, path: str, reason: OSError) -> None:
        super().__init__(f'{path}: {reason.strerror or reason}')
        self.path = path
        self.reason = reason


def read_file(path: str) -> bytes:
    try:
        with open(path, 'rb') as res:
            return res.read()
    except OSError as exc:
        raise IoFailure(path, exc) from exc


def default_mode() -> int:
    """Mode a plain open() would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_file(path: str, data: bytes) -> int:
    """Write data next to path and rename into place.

    On failure the destination keeps its previous content.
    """
    dirname = os.path.dirname(os.path.abspath(path))
    try:
        fd, tmpname = tempfile.mkstemp(dir=dirname, prefix='.tmp-')
    except OSError as exc:
        raise IoFailure(path, exc) from exc
    try:
        with os.fdopen(fd, 'wb') as res:
            written = res.write(data)
        try:
            mode = os.stat(path).st_mode & 0o7777
        except FileNotFoundError:
            mode = default_mode()
        os.chmod(tmpname, mode)
        os.replace(tmpname, path)
    except OSError as exc:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmpname)
        raise IoFailure(path, exc) from exc
    return written
