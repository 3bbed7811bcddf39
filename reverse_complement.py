COMPLEMENT = {'A': 'T', 'T': 'A', 'C': 'G', 'G': 'C'}


def reverse_complement(dna_sequence: str) -> str:
    # Reverse the DNA sequence
    reversed_sequence = dna_sequence[::-1]
    # Complement each base; anything outside ACGT stays where it lands
    return ''.join(COMPLEMENT.get(base, base) for base in reversed_sequence)
