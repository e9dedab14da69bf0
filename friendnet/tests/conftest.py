from __future__ import annotations

import os

# Cheap hashes for tests; must be set before friendnet.config is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SESSION_SECRET", "friendnet-test-secret")
