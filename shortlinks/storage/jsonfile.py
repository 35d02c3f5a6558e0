"""JSON file backend for the link registry."""

import json
import logging
import os
import tempfile
from typing import Dict, Optional

from .base import KeyValueBackend
from ..errors import StorageError


class JsonFileBackend(KeyValueBackend):
    """Persists every key in a single JSON document on disk.
    
    The file stands in for browser localStorage: one flat mapping of
    key -> string value. Writes go to a temporary file that is then renamed
    over the target.
    """
    
    name = "file"
    
    def __init__(self, path: str, logger: Optional[logging.Logger] = None):
        """Initialize file backend.
        
        Args:
            path: Location of the JSON document (created on first write)
            logger: Optional logger instance
        """
        self.path = os.path.abspath(path)
        self.logger = logger or logging.getLogger(__name__)
    
    def _read_all(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            self.logger.warning(f"Ignoring unreadable store file {self.path}: {e}")
            return {}
        except OSError as e:
            raise StorageError(f"Failed to read {self.path}: {e}") from e
        
        if not isinstance(data, dict):
            self.logger.warning(f"Ignoring store file {self.path}: top level is not an object")
            return {}
        return data
    
    def _write_all(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(self.path)
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".shortlinks-", suffix=".json", dir=directory)
        except OSError as e:
            raise StorageError(f"Failed to write {self.path}: {e}") from e
        
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(f"Failed to write {self.path}: {e}") from e
    
    async def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            # Hand-edited documents may hold raw JSON instead of a string
            value = json.dumps(value)
        return value
    
    async def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)
    
    async def close(self) -> None:
        pass
    
    async def health_check(self) -> bool:
        # Missing directories are created on first write, so check the nearest existing one
        directory = os.path.dirname(self.path)
        while not os.path.exists(directory):
            parent = os.path.dirname(directory)
            if parent == directory:
                return False
            directory = parent
        return os.path.isdir(directory) and os.access(directory, os.W_OK)
