import copy
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    pass


class ReadError(PersistenceError):
    pass


class WriteError(PersistenceError):
    pass


def reject_constant(token: str):
    # json accepts NaN, Infinity and -Infinity, which are not valid JSON
    raise ValueError(f"Invalid JSON constant: {token}")


class LinkStore(ABC):
    """Whole-collection persistence: read everything or replace everything."""

    @abstractmethod
    def load_all(self) -> Any:
        ...

    @abstractmethod
    def save_all(self, items: List[Any]) -> None:
        ...

    @abstractmethod
    def ensure_initialized(self) -> None:
        ...


class JsonFileStore(LinkStore):
    def __init__(self, path: Path):
        self.path = Path(path)

    def load_all(self) -> Any:
        # missing and corrupt files are reported the same way
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f, parse_constant=reject_constant)
        except (OSError, ValueError) as exc:
            raise ReadError(str(exc)) from exc

    def save_all(self, items: List[Any]) -> None:
        try:
            payload = json.dumps(items, indent=2, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise WriteError(str(exc)) from exc
        self._replace(payload)

    def ensure_initialized(self) -> None:
        if self.path.exists():
            return
        logger.info("Creating empty link file at %s", self.path)
        self._replace(json.dumps([]))

    def _replace(self, payload: str) -> None:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise WriteError(str(exc)) from exc


class MemoryStore(LinkStore):
    def __init__(self, items: List[Any] | None = None):
        self._items = copy.deepcopy(items)

    def load_all(self) -> Any:
        if self._items is None:
            raise ReadError("store has not been initialized")
        return copy.deepcopy(self._items)

    def save_all(self, items: List[Any]) -> None:
        self._items = copy.deepcopy(items)

    def ensure_initialized(self) -> None:
        if self._items is None:
            self._items = []
