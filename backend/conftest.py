"""Test setup: throwaway SQLite database and no AI credentials."""

import os
import tempfile

_tmp_dir = tempfile.mkdtemp(prefix="expo_planner_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_tmp_dir, 'test.db')}"
os.environ["EXPORT_DIR"] = os.path.join(_tmp_dir, "exports")
os.environ["AI_API_KEY"] = ""
