"""
JSON File Storage Implementation

Each key is stored as `<data_dir>/<key>.json`.

TRADEOFFS:
- One file per key, rewritten in full on every save (fine for a personal
  ledger of a few hundred records)
- Writes go to a temporary file that is then renamed over the target, so a
  crash mid-write never leaves a half-written ledger behind
- No locking; a single process is expected to own the data directory
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

import structlog
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from debt_tracker.config import get_settings
from debt_tracker.services.storage.interface import (
    CorruptDataError,
    KeyValueStorage,
    StorageError,
)


logger = structlog.get_logger(__name__)


class JsonFileStorage(KeyValueStorage):
    """
    Disk-backed key-value storage.

    Transient OS errors on write (a file briefly locked by a backup tool or
    an antivirus scanner) are retried before being reported.
    """

    def __init__(
        self,
        data_dir: Optional[str | Path] = None,
        write_retries: Optional[int] = None,
    ):
        settings = get_settings().storage
        self._data_dir = Path(data_dir if data_dir is not None else settings.data_dir)
        self._write_retries = write_retries or settings.write_retries

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _path_for(self, key: str) -> Path:
        return self._data_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.warning("storage_read_undecodable", path=str(path), error=str(e))
            raise CorruptDataError(f"{path} is not valid UTF-8") from e
        except OSError as e:
            raise StorageError(f"Could not read {path}: {e}") from e

    def _write_atomically(self, path: Path, value: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.stem}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        retrying = Retrying(
            stop=stop_after_attempt(self._write_retries),
            wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )
        try:
            for attempt in retrying:
                with attempt:
                    self._write_atomically(path, value)
        except OSError as e:
            raise StorageError(f"Could not write {path}: {e}") from e

    def remove_item(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Could not remove {path}: {e}") from e
