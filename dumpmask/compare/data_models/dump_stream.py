# dumpmask/compare/data_models/dump_stream.py
# DumpStream data class -- one fully buffered firmware dump.

from dataclasses import dataclass


@dataclass(frozen=True)
class DumpStream:
    """
    A single immutable firmware dump (full image or partial extraction).

    Fields:
      name -- Where the bytes came from: the file path as given by the
              caller, or "<stdin>". Used in error messages and reports.
      data -- The dump contents. Never mutated; masking produces new bytes.
    """
    name: str
    data: bytes

    def __len__(self) -> int:
        return len(self.data)
