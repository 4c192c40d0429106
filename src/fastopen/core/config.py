"""Runtime configuration, read from the environment at import time."""

import os
from typing import Optional, Union

DEFAULT_BUFFER_SIZE = 64 * 1024  # 64 KiB


def parse_quantity(quantity: Union[str, int]) -> int:
    """
    Parse a size like 64Ki or 1M to an int number of bytes.
    Supported suffixes:
    base1024: Ki | Mi | Gi
    base1000: "" | k | M | G

    Raises:
    ValueError on invalid or unknown input
    """
    if isinstance(quantity, int):
        return quantity

    exponents = {"K": 1, "k": 1, "M": 2, "G": 3}

    number = quantity
    suffix = None
    if len(quantity) >= 2 and quantity[-1] == "i":
        if quantity[-2] in exponents:
            number = quantity[:-2]
            suffix = quantity[-2:]
    elif len(quantity) >= 1 and quantity[-1] in exponents:
        number = quantity[:-1]
        suffix = quantity[-1:]

    try:
        number = int(number)
    except ValueError:
        raise ValueError("Invalid number format: {}".format(number))

    if suffix is None:
        return number

    # handle SI inconsistency
    if suffix == "ki":
        raise ValueError("{} has unknown suffix".format(quantity))

    base = 1024 if suffix.endswith("i") else 1000
    return number * (base ** exponents[suffix[0]])


def _parse_timeout(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    return float(value)


BUFFER_SIZE = parse_quantity(os.getenv("FASTOPEN_BUFFER_SIZE", DEFAULT_BUFFER_SIZE))

# No timeout unless asked for; callers needing deadlines can also pass their own session
HTTP_TIMEOUT = _parse_timeout(os.getenv("FASTOPEN_HTTP_TIMEOUT"))

GZIP_LEVEL = int(os.getenv("FASTOPEN_GZIP_LEVEL", 6))
XZ_PRESET = int(os.getenv("FASTOPEN_XZ_PRESET", 6))
ZSTD_LEVEL = int(os.getenv("FASTOPEN_ZSTD_LEVEL", 3))


def get_buffer_size() -> int:
    return BUFFER_SIZE


def set_buffer_size(size: Union[str, int]) -> None:
    """Change the buffer size used by handles opened from now on."""
    global BUFFER_SIZE
    size = parse_quantity(size)
    if size <= 0:
        raise ValueError(f"buffer size must be positive, got {size}")
    BUFFER_SIZE = size
