from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

PROJECT_DOTENV = Path(__file__).resolve().parents[2] / ".env"


def load_project_dotenv(path: Path = PROJECT_DOTENV) -> bool:
    """
    Export the repo-level `.env` into `os.environ` without overriding real env vars.

    Settings reads `.env` on its own; this is for code (and uvicorn reload
    workers) that looks at `os.environ` directly. Returns False when absent.
    """
    if not path.is_file():
        return False
    return bool(load_dotenv(path, override=False))
