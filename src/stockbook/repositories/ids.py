from __future__ import annotations

import secrets
from datetime import datetime


def new_id() -> str:
    return secrets.token_hex(6)


def now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")
