# dumpmask/compare/data_models/mismatch_report.py
# MismatchRecord and MismatchReport data classes produced by the Comparator.

from dataclasses import dataclass


@dataclass(frozen=True)
class MismatchRecord:
    """
    One disagreeing word between two streams.

    Values are the words decoded in the sentinel's word order, so they read
    the same way the view formatter prints them.
    """
    offset:   int    # absolute byte offset of the word
    stream_i: int    # index into MismatchReport.stream_names
    stream_j: int    # index into MismatchReport.stream_names, > stream_i
    value_i:  int
    value_j:  int


@dataclass(frozen=True)
class MismatchReport:
    """
    Result of one wildcard-aware comparison.

    Fields:
      any_mismatch     -- True iff at least one record was produced.
      mismatches       -- Tuple of MismatchRecord ordered by offset, then
                          by stream pair.
      stream_names     -- Names of the compared streams, primary first.
      effective_length -- Number of bytes compared from each stream.
      words_compared   -- Word positions inspected.
      wildcard_words   -- Word positions skipped because some stream held
                          the sentinel there.
      stopped_early    -- True when stop-at-first mode cut the walk short.
    """
    any_mismatch:     bool
    mismatches:       tuple    # tuple of MismatchRecord, immutable
    stream_names:     tuple    # tuple of str, immutable
    effective_length: int
    words_compared:   int
    wildcard_words:   int
    stopped_early:    bool = False

    @property
    def first_mismatch(self):
        return self.mismatches[0] if self.mismatches else None
