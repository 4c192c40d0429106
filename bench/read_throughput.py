"""Throughput sanity benchmark for ropen/wopen.

Writes the same payload with every supported compression and times reading it back.
This is skipped in CI and meant for manual runs.
"""

import os
import sys
import tempfile
import time
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fastopen import ropen, wopen

PAYLOAD = b"".join(b"%08d\tchr1\t%d\t+\n" % (i, i * 37) for i in range(500_000))


def bench(suffix: str, directory: str) -> None:
    path = os.path.join(directory, f"bench{suffix}")

    t0 = time.perf_counter()
    with wopen(path) as w:
        w.write(PAYLOAD)
    t1 = time.perf_counter()

    total = 0
    with ropen(path) as rdr:
        for line in rdr:
            total += len(line)
    t2 = time.perf_counter()

    assert total == len(PAYLOAD), f"{suffix}: read {total} of {len(PAYLOAD)} bytes"
    mb = len(PAYLOAD) / 1e6
    print(f"{suffix or 'plain':>6}: {os.path.getsize(path):>10} bytes on disk, "
          f"write {mb / (t1 - t0):7.1f} MB/s, read {mb / (t2 - t1):7.1f} MB/s")


if __name__ == "__main__":
    print("fastopen read/write throughput")
    print("=" * 40)
    with tempfile.TemporaryDirectory() as d:
        for suffix in ("", ".gz", ".xz", ".zst"):
            bench(suffix, d)
