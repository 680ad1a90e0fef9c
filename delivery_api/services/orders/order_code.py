"""
Order code generator: ``ORD`` + 8 digit millisecond time component + 4 digit random suffix.
"""

import secrets
import time

ORDER_CODE_PREFIX = 'ORD'


def generate_order_code(now_ms: int = None) -> str:
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    timestamp = str(now_ms)[-8:].zfill(8)
    suffix = str(secrets.randbelow(10_000)).zfill(4)
    return f"{ORDER_CODE_PREFIX}{timestamp}{suffix}"
