from dataclasses import dataclass
from typing import List, Optional, Tuple

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches

from primer_binding import FORWARD, BoundFragment

PRIMER_COLORS = {
    # Forward primers
    'F3': '#90EE90', 'F2': '#87CEEB', 'F1c': '#FFD700', 'FIP': '#DDA0DD',
    # Backward primers
    'B3': '#FFB6C1', 'B2': '#FFA500', 'B1c': '#E0BBE4', 'BIP': '#B0E0E6',
    # Loop primers
    'LoopF': '#6F8E6F', 'LF': '#6F8E6F', 'LoopB': '#FFDAB9', 'LB': '#FFDAB9',
}
_COLOR_BY_NAME = {k.upper(): v for k, v in PRIMER_COLORS.items()}
FALLBACK_COLORS = ['#e49461', '#7ec9da', '#f6d43b', '#a94f2e', '#b39ddb', '#90caf9']

HAIRPIN_COLORS = {
    'hairpin3_tail': '#FF1493', 'hairpin3_comp': '#C71585',
    'hairpin5_head': '#1E90FF', 'hairpin5_comp': '#4169E1',
}


@dataclass(frozen=True)
class GeneHighlight:
    """A hairpin stem strand projected onto the gene"""
    primer: str
    kind: str  # key of HAIRPIN_COLORS
    start: int
    end: int


def primer_color(name: str, index: int = 0) -> str:
    return _COLOR_BY_NAME.get(name.upper(), FALLBACK_COLORS[index % len(FALLBACK_COLORS)])


def bound_pieces(primer) -> List[Tuple[BoundFragment, int]]:
    """Bound pieces of a primer with their offset inside primer.seq."""
    if not primer.is_bound:
        return []
    if not primer.is_inner:
        whole = BoundFragment(primer.seq, primer.name, primer.orientation,
                              primer.start, primer.end)
        return [(whole, 0)]
    if primer.swapped:
        return [(primer.right, 0), (primer.left, primer.right.length)]
    return [(primer.left, 0), (primer.right, primer.left.length)]


def _to_gene(start: int, end: int, fragment: BoundFragment,
             offset: int) -> Optional[Tuple[int, int]]:
    # clip to this piece, then map; reverse-bound pieces run backwards on the gene
    lo = max(start, offset)
    hi = min(end, offset + fragment.length)
    if lo >= hi:
        return None
    if fragment.bound_as == FORWARD:
        return fragment.start + lo - offset, fragment.start + hi - offset
    return (fragment.start + fragment.length - (hi - offset),
            fragment.start + fragment.length - (lo - offset))


def hairpin_gene_ranges(primer) -> List[GeneHighlight]:
    highlights = []
    pieces = bound_pieces(primer)
    for hp, terminal_kind, partner_kind in ((primer.hairpin3, 'hairpin3_tail', 'hairpin3_comp'),
                                            (primer.hairpin5, 'hairpin5_head', 'hairpin5_comp')):
        if hp is None:
            continue
        for kind, (s, e) in ((terminal_kind, (hp.terminal_start, hp.terminal_end)),
                             (partner_kind, (hp.partner_start, hp.partner_end))):
            for fragment, offset in pieces:
                mapped = _to_gene(s, e, fragment, offset)
                if mapped is not None:
                    highlights.append(GeneHighlight(primer.name, kind, *mapped))
    return highlights


def plot_lamp_primers(gene: str, primers, filename: Optional[str] = None):
    sequence_length = len(gene)
    fig, ax = plt.subplots(figsize=(10, 2.5))

    # Draw the black sequence line
    ax.plot([0, sequence_length], [0, 0], color='black')

    head_length = max(1.0, sequence_length * 0.02)
    handles = []
    i = 0
    for primer in primers:
        for fragment, _ in bound_pieces(primer):
            if fragment.end <= fragment.start:
                continue
            color = primer_color(fragment.role, i)
            # Arrow points 5'->3' along the strand the piece binds
            if fragment.bound_as == FORWARD:
                x, dx = fragment.start, fragment.end - fragment.start
            else:
                x, dx = fragment.end, fragment.start - fragment.end
            ax.arrow(x, 0, dx, 0, width=0.02, head_width=0.07,
                     head_length=min(head_length, abs(dx)), length_includes_head=True,
                     color=color, zorder=2)
            y = 0.12 if i % 2 == 0 else 0.2
            ax.text((fragment.start + fragment.end) / 2, y, fragment.role,
                    bbox=dict(boxstyle="round,pad=0.3", fc="w", ec="0.5"),
                    ha='center', va='bottom', fontsize=8)
            i += 1

        for h in hairpin_gene_ranges(primer):
            ax.add_patch(mpatches.Rectangle((h.start, -0.16), h.end - h.start, 0.08,
                                            color=HAIRPIN_COLORS[h.kind], zorder=3))

    for kind, color in HAIRPIN_COLORS.items():
        handles.append(mpatches.Patch(color=color, label=kind.replace('_', ' ')))

    # Formatting
    ax.set_xlim(0, max(sequence_length, 1))
    ax.set_ylim(-0.3, 0.35)
    ax.set_yticks([])
    ax.set_xlabel('Position')
    ax.legend(handles=handles, loc='lower right', fontsize=6, ncol=4)
    plt.tight_layout()

    if filename:
        fig.savefig(filename)
        plt.close(fig)
    return fig
