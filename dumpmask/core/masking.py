# dumpmask/core/masking.py
# Masking Transform -- rewrites a dump so every always-unknown word of the
# block layout holds the sentinel.
#
# MT-01: Blocks are consecutive, non-overlapping block_size_bytes windows.
# MT-02: In the trailing short block a run is applied only if it fits
#        entirely; runs past end-of-stream are skipped, never padded.
# MT-03: Output length equals input length. Input is never mutated.
# MT-04: Idempotent: mask(mask(x)) == mask(x).

from typing import Iterator, Tuple

from dumpmask.core.layout import BlockLayout
from dumpmask.core.pattern import SentinelPattern


def masked_spans(length: int, layout: BlockLayout) -> Iterator[Tuple[int, int]]:
    """
    Yield (start, end) absolute byte spans that mask() overwrites in a
    stream of `length` bytes.
    """
    for block_start in range(0, length, layout.block_size_bytes):
        for run in layout.runs:
            start = block_start + run.offset
            end   = block_start + run.end
            if end > length:
                # MT-02: run does not fit in the trailing block.
                continue
            yield start, end


def mask(data: bytes, pattern: SentinelPattern, layout: BlockLayout) -> bytes:
    """
    Return a copy of `data` with every masked word set to `pattern`.
    """
    out = bytearray(data)
    for start, end in masked_spans(len(out), layout):
        out[start:end] = pattern.raw * ((end - start) // len(pattern.raw))
    return bytes(out)
