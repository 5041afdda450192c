"""
Record id generation
"""

import random
from typing import Callable, Optional

def generate_id(prefix: str) -> str:
    """Prefix followed by a random 6-digit number, e.g. FILE483920"""
    return f"{prefix}{random.randint(100000, 999999)}"

def generate_unique_id(prefix: str, exists: Optional[Callable[[str], bool]] = None,
                       max_attempts: int = 20) -> str:
    """Generate a prefixed id not already taken according to ``exists``"""
    for _ in range(max_attempts):
        candidate = generate_id(prefix)
        if exists is None or not exists(candidate):
            return candidate
    raise RuntimeError(f"Could not generate a unique id with prefix {prefix}")
