"""
Incident store - JSON persistence for announced incidents.

The store file holds the whole TrackedIncident list. It is read once at
startup and rewritten wholesale after every change.
"""

from __future__ import annotations

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Dict, List

from statushook.models import TrackedIncident

# Empty store shipped with the package, copied in on first run
DEFAULT_TEMPLATE = Path(__file__).resolve().parent / "data" / "default.json"


class StoreError(Exception):
    """Raised when the store cannot be read or written. Retryable."""


class IncidentStore:
    """
    File-backed list of TrackedIncident.

    Attributes:
        path: Location of the JSON store file.
    """

    def __init__(self, path: str | Path, template: Path = DEFAULT_TEMPLATE) -> None:
        self.path = Path(path)
        self.template = template

    def ensure(self) -> bool:
        """
        Seed the store from the bundled template if it does not exist.

        Returns:
            True if the file was created.
        """
        if self.path.exists():
            return False
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(self.template, self.path)
        except OSError as exc:
            raise StoreError(f"Cannot create {self.path}: {exc}") from exc
        return True

    def load(self) -> List[TrackedIncident]:
        """Read every tracked incident; a missing file reads as empty."""
        if not self.path.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                raw = json.load(fh)
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Cannot read {self.path}: {exc}") from exc

        if not isinstance(raw, list):
            raise StoreError(f"{self.path} must contain a JSON list")

        # One entry per incident id; the last occurrence wins
        by_id: Dict[str, TrackedIncident] = {}
        for entry in raw:
            try:
                tracked = TrackedIncident.from_dict(entry)
            except (KeyError, TypeError, ValueError) as exc:
                raise StoreError(f"Invalid entry in {self.path}: {exc}") from exc
            by_id.pop(tracked.incident_id, None)
            by_id[tracked.incident_id] = tracked
        return list(by_id.values())

    def save(self, incidents: List[TrackedIncident]) -> None:
        """Replace the store file with ``incidents``."""
        data = [incident.to_dict() for incident in incidents]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise StoreError(f"Cannot write {self.path}: {exc}") from exc
