"""
Settings and logging for the LAMP primer checker.

All thresholds used by the hairpin, split, and dimer scans live in
AnalyzerSettings so the CLI and library callers tune them in one place.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

# Get debug mode from environment variable
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() in ("true", "1", "yes")

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(module)s - %(message)s"

# Centralized logger; modules log through children of it.
logger = logging.getLogger("LampPrimerCheck")


def configure_logging(debug: Optional[bool] = None) -> None:
    """Configure root logging once, for command-line use."""
    if debug is None:
        debug = DEBUG_MODE
    logging.basicConfig(format=LOG_FORMAT,
                        level=logging.DEBUG if debug else logging.INFO)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class AnalyzerSettings:
    """Scan parameters for one analysis run"""
    # Hairpin scan
    hairpin_max_stem: int = 6
    hairpin_min_stem: int = 2
    hairpin_max_loop: int = 12
    hairpin_window: int = 15

    # FIP/BIP split: candidate right-half lengths, left half must stay longer
    split_right_min: int = 15
    split_right_max: int = 35
    split_left_min: int = 10

    # 3' dimer scan
    dimer_min_match: int = 3
    dimer_max_match: int = 8

    inner_primer_names: Tuple[str, ...] = ("FIP", "BIP")

    # FIP/BIP primers that fail to split get no hairpin scan unless set
    scan_unsplit_hairpins: bool = False

    def __post_init__(self):
        if self.hairpin_min_stem < 1:
            raise ValueError("hairpin_min_stem must be >= 1")
        if self.hairpin_max_stem < self.hairpin_min_stem:
            raise ValueError("hairpin_max_stem must be >= hairpin_min_stem")
        if self.hairpin_max_loop < 3:
            raise ValueError("hairpin_max_loop must be >= 3")
        if self.hairpin_window < 1:
            raise ValueError("hairpin_window must be >= 1")
        if self.split_right_min < 1 or self.split_right_max < self.split_right_min:
            raise ValueError("split_right_max must be >= split_right_min >= 1")
        if self.split_left_min < 0:
            raise ValueError("split_left_min must be >= 0")
        if self.dimer_min_match < 1:
            raise ValueError("dimer_min_match must be >= 1")
        if self.dimer_max_match < self.dimer_min_match:
            raise ValueError("dimer_max_match must be >= dimer_min_match")

    def is_inner(self, name: str) -> bool:
        return name.upper() in {n.upper() for n in self.inner_primer_names}

    def is_forward_inner(self, name: str) -> bool:
        """FIP-family names (leading F) take F1c/F2 roles, the rest B1c/B2"""
        return name.strip().upper().startswith("F")

    @classmethod
    def from_env(cls) -> "AnalyzerSettings":
        """Build settings from LAMP_* environment variables, falling back to defaults."""
        defaults = cls()
        names = os.getenv("LAMP_INNER_PRIMERS")
        return cls(
            hairpin_max_stem=_env_int("LAMP_HAIRPIN_MAX_STEM", defaults.hairpin_max_stem),
            hairpin_min_stem=_env_int("LAMP_HAIRPIN_MIN_STEM", defaults.hairpin_min_stem),
            hairpin_max_loop=_env_int("LAMP_HAIRPIN_MAX_LOOP", defaults.hairpin_max_loop),
            hairpin_window=_env_int("LAMP_HAIRPIN_WINDOW", defaults.hairpin_window),
            split_right_min=_env_int("LAMP_SPLIT_RIGHT_MIN", defaults.split_right_min),
            split_right_max=_env_int("LAMP_SPLIT_RIGHT_MAX", defaults.split_right_max),
            split_left_min=_env_int("LAMP_SPLIT_LEFT_MIN", defaults.split_left_min),
            dimer_min_match=_env_int("LAMP_DIMER_MIN_MATCH", defaults.dimer_min_match),
            dimer_max_match=_env_int("LAMP_DIMER_MAX_MATCH", defaults.dimer_max_match),
            inner_primer_names=(tuple(n.strip() for n in names.split(",") if n.strip())
                                if names else defaults.inner_primer_names),
            scan_unsplit_hairpins=_env_bool("LAMP_SCAN_UNSPLIT_HAIRPINS",
                                            defaults.scan_unsplit_hairpins),
        )
