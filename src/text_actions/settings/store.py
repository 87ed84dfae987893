# SPDX-License-Identifier: MIT
# Copyright (c) 2025-2026 Soroush Yousefpour
"""
JSON file store for user settings.

Writes are atomic (temp file + rename) and serialized: a thread lock inside
the process, an exclusive flock on a sidecar lock file across processes.
The file is private to the user (0600). A directory the store creates
for it is 0700; an existing directory keeps its mode.
"""

import fcntl
import json
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Union

from ..errors import SettingsError
from .defaults import default_settings
from .models import Settings

FILE_MODE = 0o600
DIR_MODE = 0o700


class SettingsStore:
    """Load and save Settings as JSON at a fixed path."""

    def __init__(self, path: Union[str, Path], defaults: Callable[[], Settings] = default_settings):
        self._path = Path(path).expanduser()
        self._lock_path = self._path.with_name(self._path.name + ".lock")
        self._defaults = defaults
        self._thread_lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> Settings:
        """
        Read settings from disk.

        Raises:
            SettingsError: If the file is missing, unreadable, or not valid JSON
        """
        with self._locked(fcntl.LOCK_SH):
            return self._read()

    def save(self, settings: Settings) -> None:
        """
        Write settings to disk atomically.

        Raises:
            SettingsError: If the file cannot be written
        """
        with self._locked(fcntl.LOCK_EX):
            self._write(settings)

    def update(self, mutate: Callable[[Settings], Settings]) -> Settings:
        """
        Read, change and write settings under one exclusive lock.

        mutate receives the stored settings (defaults if there is no file yet)
        and returns the settings to write. Anything it raises aborts the
        update with the file untouched.
        """
        with self._locked(fcntl.LOCK_EX):
            current = self._read() if self._path.exists() else self._defaults()
            updated = mutate(current)
            self._write(updated)
            return updated

    # ─────────────────────────────────────────────────────────────────
    # Private methods (callers hold the lock)
    # ─────────────────────────────────────────────────────────────────

    def _read(self) -> Settings:
        try:
            raw = self._path.read_text(encoding='utf-8')
        except FileNotFoundError:
            raise SettingsError(f"settings file not found: {self._path}") from None
        except OSError as e:
            raise SettingsError(f"cannot read settings file {self._path}: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise SettingsError(f"settings file {self._path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise SettingsError(f"settings file {self._path} must contain a JSON object")

        try:
            return Settings.from_dict(data, self._defaults())
        except (AttributeError, TypeError, ValueError) as e:
            raise SettingsError(f"settings file {self._path} has an unexpected shape: {e}") from e

    def _write(self, settings: Settings) -> None:
        payload = json.dumps(settings.to_dict(), indent=2, ensure_ascii=False) + "\n"
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self._path.parent), prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, FILE_MODE)
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as e:
            raise SettingsError(f"cannot write settings file {self._path}: {e}") from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass

    def _ensure_dir(self) -> None:
        """Create the settings directory if needed. Only a directory made here gets DIR_MODE."""
        parent = self._path.parent
        if parent.is_dir():
            return
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SettingsError(f"cannot create settings directory {parent}: {e}") from e
        try:
            parent.chmod(DIR_MODE)
        except OSError:
            pass

    @contextmanager
    def _locked(self, mode: int):
        """Hold the thread lock and a flock on the sidecar lock file."""
        with self._thread_lock:
            self._ensure_dir()
            try:
                fd = os.open(str(self._lock_path), os.O_RDWR | os.O_CREAT, FILE_MODE)
            except OSError as e:
                raise SettingsError(f"cannot open settings lock {self._lock_path}: {e}") from e
            try:
                fcntl.flock(fd, mode)
                yield
            finally:
                fcntl.flock(fd, fcntl.LOCK_UN)
                os.close(fd)
