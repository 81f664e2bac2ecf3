from __future__ import annotations

import os

os.environ.setdefault("CODEPULSE_DATABASE_URL", "sqlite://")
