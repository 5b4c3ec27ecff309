"""Local dev entrypoint for the formgate API."""

from __future__ import annotations

import sys
from pathlib import Path


def _ensure_src_on_path() -> None:
    root_dir = Path(__file__).resolve().parent
    src_dir = root_dir / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


if __name__ == "__main__":
    _ensure_src_on_path()

    import uvicorn

    from formgate.config import FormgateConfig

    config = FormgateConfig.from_env(Path(__file__).resolve().parent)
    uvicorn.run(
        "formgate.api:app",
        host="127.0.0.1",
        port=config.port,
        reload=True,
        log_level=config.log_level.lower(),
    )
