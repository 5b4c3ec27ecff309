"""Runtime configuration for formgate."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class FormgateConfig:
    """Settings shared by the CLI and the API.

    Attributes:
        forms_path: Directory holding form definition YAML files
        log_level: Logging level name (DEBUG, INFO, WARNING, ...)
        port: Port for the local API dev server
    """

    forms_path: Path
    log_level: str = "INFO"
    port: int = 8000

    @classmethod
    def from_env(cls, base_path: Path | None = None) -> FormgateConfig:
        """Create config from environment variables.

        Resolution order for the forms directory:
        1. FORMGATE_FORMS_PATH env var
        2. {base_path}/forms
        3. ./forms
        """
        forms_path = os.environ.get("FORMGATE_FORMS_PATH")
        if forms_path:
            path = Path(forms_path)
        elif base_path:
            path = base_path / "forms"
        else:
            path = Path.cwd() / "forms"

        return cls(
            forms_path=path,
            log_level=os.environ.get("FORMGATE_LOG_LEVEL", "INFO").upper(),
            port=int(os.environ.get("FORMGATE_PORT", "8000")),
        )


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once; later calls only adjust the level."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=numeric, format=LOG_FORMAT)
    root.setLevel(numeric)
