# dumpmask/compare/comparator.py
# Comparator -- wildcard-aware word comparison of two or more dumps.
#
# CMP-01: All validation happens before any word is compared.
# CMP-02: Every stream is truncated to the effective length first; no byte
#         beyond it is inspected.
# CMP-03: A word position where ANY stream holds the sentinel is a wildcard.
#         It is never reported, whatever the other streams contain there.
# CMP-04: At every other position each stream pair (i, j), i < j, with
#         differing values yields one MismatchRecord.
# CMP-05: The walk is total unless stop_at_first is set, in which case the
#         report carries exactly the first record.
#
# Word arrays are built with numpy; values are decoded in the sentinel's
# word order so reports read like the view output.

from typing import List, Sequence

import numpy as np

from dumpmask.compare.data_models.compare_spec import CompareSpec
from dumpmask.compare.data_models.dump_stream import DumpStream
from dumpmask.compare.data_models.mismatch_report import MismatchRecord, MismatchReport
from dumpmask.core.exceptions import (
    InsufficientInputs,
    InvalidFilename,
    InvalidLength,
    LengthExceedsInput,
)
from dumpmask.utils.constants import KILOBYTE, MIN_LENGTH_KB, WORD_SIZE_BYTES


def check_input_count(count: int) -> None:
    if count < 2:
        raise InsufficientInputs(count)


def check_names(names: Sequence[str]) -> None:
    """Raise InvalidFilename for the first name containing whitespace."""
    for name in names:
        if any(ch.isspace() for ch in name):
            raise InvalidFilename(name)


def resolve_effective_length(
    streams:          Sequence[DumpStream],
    length_kb:        object,
    block_size_bytes: int,
) -> int:
    """
    Return the number of bytes to compare from every stream.

    Explicit length_kb: length_kb * 1024, which must not exceed any stream.
    Implicit: shortest stream floored to whole blocks, which must be > 0.
    """
    if length_kb is not None:
        if isinstance(length_kb, bool) or not isinstance(length_kb, int):
            raise InvalidLength(length_kb, "must be an integer number of KiB")
        if length_kb < MIN_LENGTH_KB:
            raise InvalidLength(length_kb, "must be >= " + str(MIN_LENGTH_KB) + " KiB")
        requested = length_kb * KILOBYTE
        for stream in streams:
            if requested > len(stream.data):
                raise LengthExceedsInput(stream.name, requested, len(stream.data))
        return requested

    shortest = min(len(stream.data) for stream in streams)
    effective = shortest - shortest % block_size_bytes
    if effective == 0:
        raise InvalidLength(
            shortest,
            "shortest input must hold at least one "
            + str(block_size_bytes)
            + "-byte block",
        )
    return effective


class Comparator:
    """
    Compares masked dumps word by word, treating sentinel words as wildcards.

    Method:
      compare(spec) -> MismatchReport

    Raises (before any comparison work):
      InsufficientInputs  -- fewer than two streams.
      InvalidFilename     -- a stream name contains whitespace.
      InvalidLength       -- length_kb < 1, or no whole block to compare.
      LengthExceedsInput  -- length_kb * 1024 is larger than some stream.
    """

    def compare(self, spec: CompareSpec) -> MismatchReport:
        streams = tuple(spec.streams)
        check_input_count(len(streams))
        check_names([s.name for s in streams])
        length = resolve_effective_length(streams, spec.length_kb, spec.block_size_bytes)

        # CMP-02: truncate before building the word matrix.
        dtype = np.dtype("<u4" if spec.pattern.word_order == "little" else ">u4")
        words = np.stack([
            np.frombuffer(s.data[:length], dtype=dtype) for s in streams
        ])
        word_count = words.shape[1]

        # CMP-03: wildcard positions.
        wildcard = (words == spec.pattern.value).any(axis=0)
        differs  = (words != words[0]).any(axis=0) & ~wildcard

        records: List[MismatchRecord] = []
        n = len(streams)
        for pos in np.flatnonzero(differs):
            column = [int(v) for v in words[:, pos]]
            for i in range(n):
                for j in range(i + 1, n):
                    if column[i] == column[j]:
                        continue
                    records.append(MismatchRecord(
                        offset=int(pos) * WORD_SIZE_BYTES,
                        stream_i=i,
                        stream_j=j,
                        value_i=column[i],
                        value_j=column[j],
                    ))
                    if spec.stop_at_first:
                        # CMP-05
                        inspected = int(pos) + 1
                        return MismatchReport(
                            any_mismatch=True,
                            mismatches=tuple(records),
                            stream_names=tuple(s.name for s in streams),
                            effective_length=length,
                            words_compared=inspected,
                            wildcard_words=int(wildcard[:inspected].sum()),
                            stopped_early=True,
                        )

        return MismatchReport(
            any_mismatch=len(records) > 0,
            mismatches=tuple(records),
            stream_names=tuple(s.name for s in streams),
            effective_length=length,
            words_compared=word_count,
            wildcard_words=int(wildcard.sum()),
            stopped_early=False,
        )


def compare(spec: CompareSpec) -> MismatchReport:
    """Shortcut for Comparator().compare(spec)."""
    return Comparator().compare(spec)
