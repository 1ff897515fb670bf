import json
import re
from datetime import datetime
from pathlib import Path
from typing import Any

from gfx_interpreter.config import settings


class DebugSaver:
    """Saves each interpretation stage for debugging.

    Disabled (every save is a no-op) unless a debug directory is given or
    configured with ``GFX_DEBUG_DIR``.
    """

    def __init__(self, label: str = "turn", base_dir: str | Path | None = None) -> None:
        base_dir = base_dir or settings.debug_dir
        self.session_dir: Path | None = None
        if base_dir:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            safe_label = re.sub(r"[^\w\-.]", "_", label)
            self.session_dir = Path(base_dir) / f"{timestamp}_{safe_label}"
            self.session_dir.mkdir(parents=True, exist_ok=True)

    @property
    def enabled(self) -> bool:
        return self.session_dir is not None

    def save_response(self, text: str) -> None:
        """Save the raw AI reply."""
        if self.session_dir is None:
            return
        (self.session_dir / "00_response.txt").write_text(text, encoding="utf-8")

    def save_stage(self, index: int, stage: str, data: Any) -> None:
        """Save the output of one pipeline stage."""
        if self.session_dir is None:
            return
        self._save_json(data, self.session_dir / f"{index:02d}_{stage}.json")

    def save_final_result(self, result: dict) -> None:
        """Save the final ChangeSet."""
        if self.session_dir is None:
            return
        self._save_json(result, self.session_dir / "final_result.json")

    def _save_json(self, data: Any, path: Path) -> None:
        """Save JSON data to file."""
        with open(path, "w") as f:
            json.dump(data, f, indent=2, default=str)
