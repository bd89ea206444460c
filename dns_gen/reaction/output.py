"""
Responsibility: put rendered content in place, either on stdout or by
atomically replacing the destination file

The destination is only replaced when the content actually changed, so
anything watching it (e.g. a proxy reloading on file change) does not see
spurious updates. An existing destination's mode and ownership are copied
onto the replacement before the swap.
"""

import os
import sys
import tempfile
import time
from pathlib import Path
from typing import BinaryIO

from ..errors import OutputWriteError
from ..logger import logger


class OutputWriter:
    def __init__(
        self,
        dest: str | Path | None,
        tmp_dir: str | Path | None = None,
        stdout: BinaryIO | None = None,
    ) -> None:
        self._dest = Path(dest) if dest is not None else None
        self._tmp_dir = Path(tmp_dir) if tmp_dir is not None else None
        self._stdout = stdout

    @property
    def dest(self) -> Path | None:
        return self._dest

    def _scratch_dir(self, dest: Path) -> str:
        if self._tmp_dir is not None:
            return str(self._tmp_dir)
        # same directory as the destination so the rename never crosses filesystems
        return str(dest.parent)

    def _write_stdout(self, content: bytes):
        stream = self._stdout if self._stdout is not None else sys.stdout.buffer
        stream.write(content)
        stream.flush()

    def write(self, content: bytes) -> bool:
        """
        :return: True if the destination was replaced, False otherwise
        :raises OutputWriteError: naming the stage that failed; the
            destination is left untouched in that case
        """
        if self._dest is None:
            self._write_stdout(content)
            return False

        start = time.monotonic()
        try:
            fd, tmp_name = tempfile.mkstemp(prefix="dns-gen-", dir=self._scratch_dir(self._dest))
        except OSError as e:
            raise OutputWriteError("create", e) from e

        renamed = False
        try:
            with os.fdopen(fd, "wb") as tmp:
                try:
                    tmp.write(content)
                    tmp.flush()
                    os.fsync(tmp.fileno())
                except OSError as e:
                    raise OutputWriteError("write", e) from e

                old_content = None
                if self._dest.exists():
                    try:
                        st = os.stat(self._dest)
                    except OSError as e:
                        raise OutputWriteError("stat", e) from e
                    try:
                        os.fchmod(tmp.fileno(), st.st_mode & 0o7777)
                    except OSError as e:
                        raise OutputWriteError("chmod", e) from e
                    try:
                        os.fchown(tmp.fileno(), st.st_uid, st.st_gid)
                    except OSError as e:
                        raise OutputWriteError("chown", e) from e
                    try:
                        old_content = self._dest.read_bytes()
                    except OSError as e:
                        raise OutputWriteError("read", e) from e

            if old_content == content:
                return False

            try:
                os.replace(tmp_name, self._dest)
            except OSError as e:
                raise OutputWriteError("rename", e) from e
            renamed = True
        finally:
            if not renamed:
                try:
                    os.unlink(tmp_name)
                except FileNotFoundError:
                    pass

        logger.info(
            f"output file [{self._dest}] created in {time.monotonic() - start:.3f}s"
        )
        return True
