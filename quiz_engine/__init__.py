from __future__ import annotations

from quiz_engine.utils.env import load_project_dotenv

# Export the repo `.env` before anything reads os.environ.
load_project_dotenv()
