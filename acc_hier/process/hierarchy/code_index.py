# Path: acc_hier/process/hierarchy/code_index.py
"""
Code Index - per-report lookup structure for hierarchy resolution.

Parent resolution depends on which other codes exist in the same report,
not on a global schema. The index is built once per report and answers
every "does code X exist" question with a set lookup.

Holds:
- known canonical codes (valid codes only)
- numeric-sequence runs per first segment
- resolved levels and same-level sibling groups (after level resolution)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from acc_hier.core.logger.ipo_logging import get_process_logger
from .account_code import AccountCode, is_zero_segment
from .constants import SEGMENT_SEPARATOR, ZERO_S3, ZERO_S4


@dataclass(frozen=True)
class SequenceRun:
    """
    s2 numerals of one first segment that form a consecutive run.

    Attributes:
        s1: Shared first segment
        members: s2 texts sorted by numeric value
    """
    s1: str
    members: tuple

    @property
    def parent_s2(self) -> str:
        return self.members[0]

    @property
    def parent_code(self) -> str:
        return SEGMENT_SEPARATOR.join((self.s1, self.parent_s2, ZERO_S3, ZERO_S4))


class CodeIndex:
    """
    Hash-set index over the valid codes of one report.

    Example:
        index = CodeIndex(parsed_codes)
        index.contains('5000-1000-001-000')
        index.sequence_parent(code)
    """

    def __init__(self, codes: Iterable[AccountCode]):
        """
        Build the index.

        Args:
            codes: Parsed codes of the report (invalid ones are ignored)
        """
        self.logger = get_process_logger('code_index')
        self._codes: dict[str, AccountCode] = {}
        for code in codes:
            if code.is_valid and code.code not in self._codes:
                self._codes[code.code] = code

        self._sequences = self._detect_sequences()
        self._levels: dict[str, int] = {}
        self._level_groups: dict[tuple, tuple] = {}

        self.logger.debug(
            f"Indexed {len(self._codes)} codes, "
            f"{len(self._sequences)} numeric sequences"
        )

    def __contains__(self, code: str) -> bool:
        return code in self._codes

    def __len__(self) -> int:
        return len(self._codes)

    def contains(self, code: Optional[str]) -> bool:
        """True if the canonical code exists in this report."""
        return code is not None and code in self._codes

    @property
    def codes(self) -> frozenset:
        return frozenset(self._codes)

    # ------------------------------------------------------------------
    # Numeric sequences
    # ------------------------------------------------------------------

    def _detect_sequences(self) -> dict[str, SequenceRun]:
        """
        Find, per first segment, s2 numerals forming a consecutive run.

        Only family-root shaped codes (s3 == s4 == zero) take part and
        the zero s2 sentinel is excluded. Non-numeric s2 values are
        skipped. A first segment whose numerals are not consecutive has
        no run.
        """
        by_s1: dict[str, dict[int, str]] = {}
        for code in self._codes.values():
            if not code.is_family_root_shape or is_zero_segment(code.s2):
                continue
            if not code.s2.isdigit():
                continue
            by_s1.setdefault(code.s1, {})[int(code.s2)] = code.s2

        runs = {}
        for s1, numerals in by_s1.items():
            if len(numerals) < 2:
                continue
            ordered = sorted(numerals)
            consecutive = all(b - a == 1 for a, b in zip(ordered, ordered[1:]))
            if not consecutive:
                self.logger.debug(f"s2 values under {s1} are not consecutive: {ordered}")
                continue
            runs[s1] = SequenceRun(s1=s1, members=tuple(numerals[n] for n in ordered))
        return runs

    def sequence_role(self, code: AccountCode) -> Optional[str]:
        """
        Role of a code in its first segment's run.

        Returns:
            'parent' for the smallest member, 'child' for the others,
            None when the code is not part of a run
        """
        if not code.is_valid or not code.is_family_root_shape:
            return None
        run = self._sequences.get(code.s1)
        if run is None or code.s2 not in run.members:
            return None
        return 'parent' if code.s2 == run.parent_s2 else 'child'

    def sequence_parent(self, code: AccountCode) -> Optional[str]:
        """Code of the run's structural parent when `code` is a child."""
        if self.sequence_role(code) != 'child':
            return None
        return self._sequences[code.s1].parent_code

    # ------------------------------------------------------------------
    # Levels and sibling groups
    # ------------------------------------------------------------------

    def set_levels(self, levels: dict[str, int]) -> None:
        """
        Record resolved levels and build same-level sibling groups.

        Level-3 codes group by (s1, s2); level-2 codes group by s1.
        Members of each group are sorted so the first is the anchor.
        """
        self._levels = {code: level for code, level in levels.items() if code in self._codes}

        groups: dict[tuple, list] = {}
        for code_str, level in self._levels.items():
            code = self._codes[code_str]
            if level == 3:
                key = (3, code.s1, code.s2)
            elif level == 2:
                key = (2, code.s1)
            else:
                continue
            groups.setdefault(key, []).append(code_str)

        self._level_groups = {key: tuple(sorted(members)) for key, members in groups.items()}

    def level_of(self, code: str) -> Optional[int]:
        return self._levels.get(code)

    def group_anchor(self, code: AccountCode, level: int) -> Optional[str]:
        """
        Anchor (smallest member) of the same-level group of `code`.

        Returns None when the code is alone in its group. The anchor is
        returned for every member, including the anchor itself.
        """
        if level == 3:
            key = (3, code.s1, code.s2)
        elif level == 2:
            key = (2, code.s1)
        else:
            return None
        members = self._level_groups.get(key, ())
        if len(members) < 2:
            return None
        return members[0]


__all__ = ['CodeIndex', 'SequenceRun']
