"""
LAMP Primer Analyzer - binding, hairpin and dimer check for an existing primer set

Places each primer of a LAMP set on its target gene (splitting FIP/BIP into
their two binding halves), flags hairpins near either primer end and reports
3' end complementarity between every pair of primers.
"""

import argparse
import json
import sys
from dataclasses import asdict, dataclass, replace
from typing import List, Optional, Tuple

from analyzer_config import AnalyzerSettings, configure_logging
from analyzer_config import logger as app_logger
from dimer_check import DimerRecord, check_all_dimers
from hairpin_check import HairpinResult, check_hairpin
from primer_binding import (FORWARD, NOT_SPLIT, REVERSE, UNBOUND, BoundFragment,
                            locate_binding, split_inner_primer)
from reverse_complement import reverse_complement

logger = app_logger.getChild("analyzer")

# ==================== DATA CLASSES ====================


class PrimerRecordError(ValueError):
    """A primer record is missing its name or sequence"""


@dataclass
class Primer:
    """A named primer and what was derived from placing it on the gene"""
    name: str
    seq: str
    is_inner: bool = False
    orientation: Optional[str] = None
    start: int = UNBOUND
    end: int = UNBOUND
    # FIP/BIP halves: left binds as reverse complement, right binds forward
    left: Optional[BoundFragment] = None
    right: Optional[BoundFragment] = None
    swapped: bool = False
    hairpin3: Optional[HairpinResult] = None
    hairpin5: Optional[HairpinResult] = None

    @property
    def length(self) -> int:
        return len(self.seq)

    @property
    def has_hairpin(self) -> bool:
        return self.hairpin3 is not None or self.hairpin5 is not None

    @property
    def is_bound(self) -> bool:
        if self.is_inner:
            return self.left is not None and self.right is not None
        return self.orientation in (FORWARD, REVERSE)

# ==================== INPUT PARSING ====================


def clean_sequence(text: str) -> str:
    """Uppercase and drop everything that is not A, C, G or T"""
    return ''.join(c for c in text.upper() if c in "ACGT")


def parse_primers(text: str) -> List[Primer]:
    """Parse NAME=SEQUENCE lines; lines without '=' are ignored"""
    primers = []
    for line in text.splitlines():
        if "=" not in line:
            continue
        name, seq = line.split("=", 1)
        primers.append(Primer(name=name.strip(), seq=seq.strip().upper()))
    return primers


def read_gene(text: str) -> str:
    """Raw sequence or FASTA content; header lines are dropped"""
    lines = [line for line in text.splitlines() if not line.startswith(">")]
    return clean_sequence(''.join(lines))

# ==================== ANALYSIS ====================


def _check_record(primer) -> None:
    name = getattr(primer, "name", None)
    seq = getattr(primer, "seq", None)
    if not isinstance(name, str) or not name.strip():
        raise PrimerRecordError(f"primer record without a name: {primer!r}")
    if not isinstance(seq, str) or not seq.strip():
        raise PrimerRecordError(f"primer {name} has no sequence")


def _scan_hairpins(seq: str, settings: AnalyzerSettings
                   ) -> Tuple[Optional[HairpinResult], Optional[HairpinResult]]:
    return check_hairpin(seq,
                         max_stem=settings.hairpin_max_stem,
                         min_stem=settings.hairpin_min_stem,
                         max_loop=settings.hairpin_max_loop,
                         window=settings.hairpin_window)


def _reset(primer: Primer, settings: AnalyzerSettings) -> None:
    primer.seq = primer.seq.strip().upper()
    primer.is_inner = settings.is_inner(primer.name)
    primer.orientation = None
    primer.start = UNBOUND
    primer.end = UNBOUND
    primer.left = None
    primer.right = None
    primer.swapped = False
    primer.hairpin3 = None
    primer.hairpin5 = None


def _place_inner(primer: Primer, gene: str, settings: AnalyzerSettings) -> None:
    split = split_inner_primer(primer.seq, gene,
                               is_fip=settings.is_forward_inner(primer.name),
                               right_min=settings.split_right_min,
                               right_max=settings.split_right_max,
                               left_min=settings.split_left_min)
    if not split.found:
        primer.orientation = NOT_SPLIT
        logger.info("%s: no split binds the gene", primer.name)
        if settings.scan_unsplit_hairpins:
            primer.hairpin3, primer.hairpin5 = _scan_hairpins(primer.seq, settings)
        return

    primer.left = split.left
    primer.right = split.right
    primer.swapped = split.swapped
    primer.hairpin3, primer.hairpin5 = _scan_hairpins(primer.seq, settings)


def _place_simple(primer: Primer, gene: str, settings: AnalyzerSettings) -> None:
    site = locate_binding(primer.seq, gene)
    primer.start = site.start
    primer.end = site.end
    primer.orientation = site.orientation
    if not site.found:
        logger.info("%s: not found on gene", primer.name)
    # Hairpins are checked whether or not the primer binds
    primer.hairpin3, primer.hairpin5 = _scan_hairpins(primer.seq, settings)


def analyze(gene: str, primers: List[Primer],
            settings: Optional[AnalyzerSettings] = None) -> List[DimerRecord]:
    """
    Place every primer on the gene and check the set for dimers.

    Primers are updated in place (positions, orientation, halves, hairpins).
    Records without a name or sequence are logged and skipped.

    Args:
        gene: Target sequence (A/C/G/T)
        primers: Primer records, in the order they should be reported
        settings: Scan parameters; defaults when omitted

    Returns:
        Dimer records for every unordered primer pair
    """
    settings = settings or AnalyzerSettings()
    gene = gene.upper()

    placed = []
    for primer in primers:
        try:
            _check_record(primer)
        except PrimerRecordError as exc:
            logger.warning("skipping primer record: %s", exc)
            continue

        _reset(primer, settings)
        if primer.is_inner:
            _place_inner(primer, gene, settings)
        else:
            _place_simple(primer, gene, settings)
        placed.append(primer)

    return check_all_dimers(placed, settings.dimer_min_match, settings.dimer_max_match)

# ==================== POSITION EDITS ====================


def _check_range(start: int, end: int, gene: str, what: str) -> None:
    if start == UNBOUND or end == UNBOUND:
        raise ValueError(f"{what} is not bound to the gene")
    if end < start:
        raise ValueError(f"{what}: end ({end}) < start ({start})")
    if start < 0 or end > len(gene):
        raise ValueError(f"{what}: range {start}-{end} outside gene of {len(gene)} bp")


def _rederive(fragment: BoundFragment, gene: str, name: str) -> BoundFragment:
    _check_range(fragment.start, fragment.end, gene, f"{name} {fragment.role}")
    sequence = gene[fragment.start:fragment.end]
    if fragment.bound_as == REVERSE:
        sequence = reverse_complement(sequence)
    return replace(fragment, sequence=sequence)


def recompute(primer: Primer, gene: str,
              settings: Optional[AnalyzerSettings] = None) -> Primer:
    """
    Re-derive a primer's sequence from its gene coordinates.

    Returns a new Primer; the one passed in is left untouched. Reverse-bound
    pieces (F1c/B1c, or a primer found as its reverse complement) are taken
    as the reverse complement of the gene slice. Hairpins are re-scanned on
    the rebuilt sequence.
    """
    settings = settings or AnalyzerSettings()
    gene = gene.upper()

    if primer.is_inner:
        if primer.left is None or primer.right is None:
            raise ValueError(f"{primer.name} was not split; it has no positions to edit")
        left = _rederive(primer.left, gene, primer.name)
        right = _rederive(primer.right, gene, primer.name)
        # keep 5'->3' order: a swapped split reads F2/B2 first
        seq = right.sequence + left.sequence if primer.swapped else left.sequence + right.sequence
        updated = replace(primer, seq=seq, left=left, right=right)
    else:
        if primer.orientation not in (FORWARD, REVERSE):
            raise ValueError(f"{primer.name} is not bound to the gene")
        _check_range(primer.start, primer.end, gene, primer.name)
        fragment = gene[primer.start:primer.end]
        seq = reverse_complement(fragment) if primer.orientation == REVERSE else fragment
        updated = replace(primer, seq=seq)

    hairpin3, hairpin5 = _scan_hairpins(updated.seq, settings)
    return replace(updated, hairpin3=hairpin3, hairpin5=hairpin5)


def reposition(primer: Primer, gene: str, start: Optional[int] = None,
               end: Optional[int] = None, part: Optional[str] = None,
               settings: Optional[AnalyzerSettings] = None) -> Primer:
    """
    Move a primer (or one FIP/BIP half) to new 0-based, end-exclusive
    coordinates and recompute it. `part` is 'left' or 'right' for FIP/BIP.
    """
    if primer.is_inner:
        if part not in ("left", "right"):
            raise ValueError(f"{primer.name}: part must be 'left' or 'right', got {part!r}")
        fragment = getattr(primer, part)
        if fragment is None:
            raise ValueError(f"{primer.name} was not split; it has no positions to edit")
        fragment = replace(fragment,
                           start=fragment.start if start is None else start,
                           end=fragment.end if end is None else end)
        moved = replace(primer, **{part: fragment})
    else:
        if part is not None:
            raise ValueError(f"{primer.name} is not an inner primer; part must be omitted")
        moved = replace(primer,
                        start=primer.start if start is None else start,
                        end=primer.end if end is None else end)

    logger.debug("repositioning %s %s", primer.name, part or "")
    return recompute(moved, gene, settings)

# ==================== RESULTS ====================


def _hairpin_text(hp: Optional[HairpinResult]) -> str:
    if hp is None:
        return "none"
    return (f"stem={hp.stem_seq} ({hp.stem_len} bp) loop={hp.loop_len} "
            f"at {hp.terminal_start + 1}-{hp.terminal_end} / "
            f"{hp.partner_start + 1}-{hp.partner_end}")


def print_results(gene: str, primers: List[Primer], dimers: List[DimerRecord]):
    """Print the analysis in human-readable format"""

    print("\n" + "=" * 70)
    print("LAMP PRIMER CHECK RESULTS")
    print("=" * 70)
    print(f"Gene length: {len(gene)} bp")

    print("\n--- Primers ---")
    for p in primers:
        print(f"\n{p.name:4s} ({p.length:2d} nt): 5'-{p.seq}-3'")
        if p.is_inner and p.is_bound:
            print(f"     {p.left.role}={p.left.sequence} ⊕ {p.right.role}={p.right.sequence}")
            print(f"     {p.left.role}: {p.left.start + 1:4d}-{p.left.end:4d} (RC) | "
                  f"{p.right.role}: {p.right.start + 1:4d}-{p.right.end:4d} (Fwd)")
        elif p.is_inner:
            print("     Split not found")
        elif p.is_bound:
            print(f"     Position: {p.start + 1:4d}-{p.end:4d} | {p.orientation}")
        else:
            print(f"     Position: - | {p.orientation}")
        print(f"     3' hairpin: {_hairpin_text(p.hairpin3)}")
        print(f"     5' hairpin: {_hairpin_text(p.hairpin5)}")

    print("\n--- Primer Dimers (3' end) ---")
    if not dimers:
        print("None detected")
    for d in dimers:
        print(f"{d.primer_a} 3'-{d.tail} -> {d.primer_b} at {d.binding_pos + 1} "
              f"({d.match_length} bp, {d.tail_rc})")


def export_results(gene: str, primers: List[Primer], dimers: List[DimerRecord],
                   filename: str = "lamp_primer_check.json"):
    """Export primers and dimers to JSON"""
    results = {
        "gene_length": len(gene),
        "primers": [],
        "dimers": [asdict(d) for d in dimers],
    }
    for p in primers:
        data = asdict(p)
        data["has_hairpin"] = p.has_hairpin
        results["primers"].append(data)

    with open(filename, 'w') as f:
        json.dump(results, f, indent=2, ensure_ascii=False)

    print(f"\nResults exported to {filename}")

# ==================== COMMAND LINE ====================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lamp-primer-check",
        description="Locate LAMP primers on a gene and check hairpins and 3' dimers.")
    parser.add_argument("gene", help="Gene sequence file (raw or FASTA)")
    parser.add_argument("primers", help="Primer file, one NAME=SEQUENCE per line")
    parser.add_argument("--json", metavar="OUT", help="Write results as JSON")
    parser.add_argument("--plot", metavar="OUT", help="Save a binding map image")
    parser.add_argument("--min-dimer", type=int, metavar="N",
                        help="Shortest 3' match reported as a dimer")
    parser.add_argument("--scan-unsplit-hairpins", action="store_true",
                        help="Also scan FIP/BIP primers that could not be split")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(True if args.verbose else None)

    try:
        settings = AnalyzerSettings.from_env()
        if args.min_dimer is not None:
            settings = replace(settings, dimer_min_match=args.min_dimer)
        if args.scan_unsplit_hairpins:
            settings = replace(settings, scan_unsplit_hairpins=True)

        with open(args.gene) as f:
            gene = read_gene(f.read())
        with open(args.primers) as f:
            primers = parse_primers(f.read())
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not gene:
        print("Error: the gene file contains no A/C/G/T sequence.", file=sys.stderr)
        return 1

    dimers = analyze(gene, primers, settings)
    print_results(gene, primers, dimers)

    if args.json:
        export_results(gene, primers, dimers, args.json)
    if args.plot:
        from primer_visualizer import plot_lamp_primers
        plot_lamp_primers(gene, primers, filename=args.plot)
        print(f"Binding map saved to {args.plot}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
