"""
Primer placement on a target gene.

Composite inner primers (FIP = F1c + F2, BIP = B1c + B2) are split into their
two binding halves; simple primers (F3, B3, LF, LB, ...) are located as a whole.
Matching is exact: a primer either occurs verbatim on the gene, forward or as
its reverse complement, or it does not bind.
"""

from dataclasses import dataclass
from typing import Optional

from analyzer_config import logger as app_logger
from reverse_complement import reverse_complement

logger = app_logger.getChild("binding")

UNBOUND = -1

# Orientations reported for a primer
FORWARD = "forward"
REVERSE = "reverse (RC)"
NOT_FOUND = "not found"
NOT_SPLIT = "not split"


@dataclass(frozen=True)
class BoundFragment:
    """One binding half of an inner primer"""
    sequence: str
    role: str      # 'F1c', 'F2', 'B1c', 'B2'
    bound_as: str  # FORWARD or REVERSE
    start: int = UNBOUND
    end: int = UNBOUND

    @property
    def length(self) -> int:
        return len(self.sequence)


@dataclass(frozen=True)
class SplitResult:
    """Outcome of splitting an inner primer.

    `left` is always the reverse-complement-bound half (F1c/B1c) and `right`
    the forward-bound half (F2/B2). `swapped` is set when the primer reads
    right + left from 5' to 3'.
    """
    found: bool
    left: Optional[BoundFragment] = None
    right: Optional[BoundFragment] = None
    swapped: bool = False


@dataclass(frozen=True)
class BindingSite:
    start: int
    end: int
    orientation: str

    @property
    def found(self) -> bool:
        return self.orientation in (FORWARD, REVERSE)


def inner_roles(is_fip: bool):
    """(reverse-complement role, forward role) for FIP or BIP"""
    return ("F1c", "F2") if is_fip else ("B1c", "B2")


def split_inner_primer(inner_primer: str, gene: str, is_fip: bool,
                       right_min: int = 15, right_max: int = 35,
                       left_min: int = 10) -> SplitResult:
    """
    Split FIP/BIP into F1c+F2 or B1c+B2.

    Candidate right-half lengths are tried in ascending order; the first one
    for which one half occurs forward on the gene and the other half's reverse
    complement also occurs wins.

    Args:
        inner_primer: Full FIP/BIP sequence
        gene: Target sequence
        is_fip: Label the halves F1c/F2 (True) or B1c/B2 (False)
        right_min, right_max: Range of right-half lengths to try
        left_min: The left half must stay longer than this

    Returns:
        SplitResult; found=False when no split binds
    """
    seq = inner_primer.upper()
    gene = gene.upper()
    rc_role, fwd_role = inner_roles(is_fip)
    logger.debug("splitting %s (%d nt): %s", "FIP" if is_fip else "BIP", len(seq), seq)

    for right_len in range(right_min, right_max + 1):
        if right_len >= len(seq) - left_min:
            break
        left_part = seq[:len(seq) - right_len]
        right_part = seq[len(seq) - right_len:]

        # Right part binds forward, left part as RC
        right_idx = gene.find(right_part)
        if right_idx != -1:
            left_idx = gene.find(reverse_complement(left_part))
            if left_idx != -1:
                logger.debug("split found: %s=%s at %d, %s=%s at %d",
                             rc_role, left_part, left_idx, fwd_role, right_part, right_idx)
                return SplitResult(
                    found=True,
                    left=BoundFragment(left_part, rc_role, REVERSE,
                                       left_idx, left_idx + len(left_part)),
                    right=BoundFragment(right_part, fwd_role, FORWARD,
                                        right_idx, right_idx + len(right_part)),
                )

        # Reverse order: left part binds forward, right part as RC
        left_idx = gene.find(left_part)
        if left_idx != -1:
            right_idx = gene.find(reverse_complement(right_part))
            if right_idx != -1:
                logger.debug("split found (reversed binding): %s=%s at %d, %s=%s at %d",
                             fwd_role, left_part, left_idx, rc_role, right_part, right_idx)
                return SplitResult(
                    found=True,
                    left=BoundFragment(right_part, rc_role, REVERSE,
                                       right_idx, right_idx + len(right_part)),
                    right=BoundFragment(left_part, fwd_role, FORWARD,
                                        left_idx, left_idx + len(left_part)),
                    swapped=True,
                )

    logger.debug("no valid split for %s", seq)
    return SplitResult(found=False)


def locate_binding(seq: str, gene: str) -> BindingSite:
    """First forward hit, else first reverse-complement hit, else not found."""
    seq = seq.upper()
    gene = gene.upper()
    if not seq:
        return BindingSite(UNBOUND, UNBOUND, NOT_FOUND)

    forward_idx = gene.find(seq)
    if forward_idx != -1:
        return BindingSite(forward_idx, forward_idx + len(seq), FORWARD)

    reverse_idx = gene.find(reverse_complement(seq))
    if reverse_idx != -1:
        return BindingSite(reverse_idx, reverse_idx + len(seq), REVERSE)

    return BindingSite(UNBOUND, UNBOUND, NOT_FOUND)
