from dataclasses import dataclass
from typing import Optional, Tuple

from analyzer_config import logger as app_logger
from reverse_complement import reverse_complement

logger = app_logger.getChild("hairpin")

THREE_PRIME = "3prime"
FIVE_PRIME = "5prime"


@dataclass(frozen=True)
class HairpinResult:
    """Stem-loop found near one end of a primer.

    `terminal_*` is the 3' tail (or 5' head) of the stem, `partner_*` the
    complementary stretch upstream (or downstream) of it. Both ranges are
    half-open and index the full primer that was scanned.
    """
    end: str
    stem_seq: str
    stem_rc: str
    stem_len: int
    loop_len: int
    terminal_start: int
    terminal_end: int
    partner_start: int
    partner_end: int


def _check_args(max_stem: int, min_stem: int, window: int):
    if min_stem < 1:
        raise ValueError(f"min_stem must be >= 1, got {min_stem}")
    if max_stem < min_stem:
        raise ValueError(f"max_stem ({max_stem}) must be >= min_stem ({min_stem})")
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")


def _scan_region(primer: str, window: int, three_prime: bool) -> Tuple[str, int]:
    """Return the terminal scan region and its offset within `primer`."""
    n = len(primer)
    if n <= window:
        return primer, 0
    if three_prime:
        return primer[-window:], n - window
    return primer[:window], 0


def check_hairpin_3prime(primer: str, max_stem=6, min_stem=2, max_loop=12,
                         window=15) -> Optional[HairpinResult]:
    _check_args(max_stem, min_stem, window)
    primer = primer.upper()
    scan_region, offset = _scan_region(primer, window, three_prime=True)
    logger.debug("3' hairpin check: %s (scan region %s at %d)", primer, scan_region, offset)

    for stem_len in range(max_stem, min_stem - 1, -1):
        if stem_len >= len(scan_region):
            continue
        stem = scan_region[-stem_len:]  # 3' tail
        rc_stem = reverse_complement(stem)

        # search upstream (avoid trivial overlap)
        search_region = scan_region[:-stem_len]
        for loop in range(3, max_loop + 1):
            start = len(search_region) - stem_len - loop
            if start < 0:
                break
            if search_region[start:start + stem_len] == rc_stem:
                partner_start = offset + start
                logger.debug("3' hairpin found: stem=%s loop=%d stem_len=%d",
                             stem, loop, stem_len)
                return HairpinResult(
                    end=THREE_PRIME,
                    stem_seq=stem,
                    stem_rc=rc_stem,
                    stem_len=stem_len,
                    loop_len=loop,
                    terminal_start=offset + len(scan_region) - stem_len,
                    terminal_end=offset + len(scan_region),
                    partner_start=partner_start,
                    partner_end=partner_start + stem_len,
                )

    logger.debug("no 3' hairpin in %s", primer)
    return None


def check_hairpin_5prime(primer: str, max_stem=6, min_stem=2, max_loop=12,
                         window=15) -> Optional[HairpinResult]:
    _check_args(max_stem, min_stem, window)
    primer = primer.upper()
    scan_region, offset = _scan_region(primer, window, three_prime=False)
    logger.debug("5' hairpin check: %s (scan region %s)", primer, scan_region)

    for stem_len in range(max_stem, min_stem - 1, -1):
        if stem_len >= len(scan_region):
            continue
        stem = scan_region[:stem_len]  # 5' head
        rc_stem = reverse_complement(stem)

        # search downstream, mirroring the loop lengths of the 3' check
        for loop in range(3, max_loop + 1):
            start = stem_len + loop
            end = start + stem_len
            if end > len(scan_region):
                break
            if scan_region[start:end] == rc_stem:
                logger.debug("5' hairpin found: stem=%s loop=%d stem_len=%d",
                             stem, loop, stem_len)
                return HairpinResult(
                    end=FIVE_PRIME,
                    stem_seq=stem,
                    stem_rc=rc_stem,
                    stem_len=stem_len,
                    loop_len=loop,
                    terminal_start=offset,
                    terminal_end=offset + stem_len,
                    partner_start=offset + start,
                    partner_end=offset + end,
                )

    logger.debug("no 5' hairpin in %s", primer)
    return None


def check_hairpin(primer: str, max_stem=6, min_stem=2, max_loop=12, window=15
                  ) -> Tuple[Optional[HairpinResult], Optional[HairpinResult]]:
    """Scan both ends; returns (3' result, 5' result)."""
    return (check_hairpin_3prime(primer, max_stem, min_stem, max_loop, window),
            check_hairpin_5prime(primer, max_stem, min_stem, max_loop, window))
