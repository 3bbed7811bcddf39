from dataclasses import dataclass
from itertools import combinations
from typing import List, Sequence

from analyzer_config import logger as app_logger
from reverse_complement import reverse_complement

logger = app_logger.getChild("dimer")


@dataclass(frozen=True)
class DimerRecord:
    """3' end of primer_a pairing inside primer_b"""
    primer_a: str
    primer_b: str
    tail: str         # 3' terminal bases of primer_a
    tail_rc: str      # what primer_b carries at binding_pos
    binding_pos: int
    match_length: int


def _tail_into(name_a: str, seq_a: str, name_b: str, seq_b: str,
               min_match: int, max_match: int):
    for match_len in range(max_match, min_match - 1, -1):
        if match_len > len(seq_a):
            continue
        tail = seq_a[-match_len:]
        tail_rc = reverse_complement(tail)
        pos = seq_b.find(tail_rc)
        if pos != -1:
            logger.debug("dimer: %s 3' %s pairs with %s at %d (%d bp)",
                         name_a, tail, name_b, pos, match_len)
            return DimerRecord(name_a, name_b, tail, tail_rc, pos, match_len)
    return None


def check_dimer_pair(name_a: str, seq_a: str, name_b: str, seq_b: str,
                     min_match: int = 3, max_match: int = 8) -> List[DimerRecord]:
    """Check both 3' ends of a primer pair; at most one record per direction."""
    if min_match < 1 or max_match < min_match:
        raise ValueError(f"invalid match range {min_match}..{max_match}")
    seq_a = seq_a.upper()
    seq_b = seq_b.upper()

    records = []
    for args in ((name_a, seq_a, name_b, seq_b), (name_b, seq_b, name_a, seq_a)):
        record = _tail_into(*args, min_match, max_match)
        if record is not None:
            records.append(record)
    return records


def check_all_dimers(primers: Sequence, min_match: int = 3,
                     max_match: int = 8) -> List[DimerRecord]:
    # Full sequences, FIP/BIP included as a whole
    dimers = []
    for p1, p2 in combinations(primers, 2):
        dimers.extend(check_dimer_pair(p1.name, p1.seq, p2.name, p2.seq,
                                       min_match, max_match))
    return dimers
