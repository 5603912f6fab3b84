"""
Re-encoding of field elements across prime fields.

A source element's canonical little-endian bits are cut into chunks, one per
requested width w. Each chunk is read with `margin` extra bits and reduced
modulo the target prime n. Chunks start w bits apart, so the margin bits of
one chunk are also the lowest bits of the next one, matching existing
arkworks based signers. A signature challenge is a single chunk.

Bias of one chunk. Let k = w + margin and U be uniform over [0, 2^k). With
2^k = m n + s (0 <= s < n), residues below s occur m + 1 times and the rest
m times, so the statistical distance of U mod n from uniform is exactly

  s (n - s) / (n 2^k)  <=  n / 2^(k + 2)

and for the largest allowed width (w = bits(n) - 1, so n < 2^(w + 1)) this
is below 2^-(margin + 1). The margin is a tunable parameter: the default of
2 bounds the distance by 1/8, not by a negligible amount. Signature
security only needs the challenge to be unpredictable, which is measured by
min-entropy; see `min_entropy_bits`. Callers that need a statistically
uniform output must raise the margin, which a single source element can
only afford when bits(source) is well above the width.
"""
from fractions import Fraction
from math import ceil, log2
from typing import List, Sequence

from .exceptions import ChunkWidthError
from .field import PrimeField, fe

MARGIN_BITS = 2


def reencode(x: fe, widths: Sequence[int], target: PrimeField, margin: int = MARGIN_BITS) -> List[fe]:
  """Split x into len(widths) elements of the target field."""
  if not widths:
    return []
  if margin < 0:
    raise ChunkWidthError(f"Margin must not be negative, got {margin}")
  for w in widths:
    if not 0 < w <= target.capacity:
      raise ChunkWidthError(f"Chunk width {w} does not fit the capacity {target.capacity} of {target}")
  if sum(widths) + margin > x.field.bits:
    raise ChunkWidthError(
      f"Chunks of {sum(widths)} bits + {margin} margin bits exceed the {x.field.bits} bits of {x.field}"
    )
  bits = x.bits_le()
  out = []
  pos = 0
  for w in widths:
    out.append(target.from_bits_le(bits[pos:pos + w + margin]))
    pos += w
  return out


def bias_bound(width: int, modulus: int, margin: int = MARGIN_BITS) -> Fraction:
  """Exact statistical distance of (w + margin) uniform bits reduced mod n from uniform."""
  k = width + margin
  s = (1 << k) % modulus
  return Fraction(s * (modulus - s), modulus << k)


def min_entropy_bits(source: PrimeField, width: int, modulus: int, margin: int = MARGIN_BITS) -> float:
  """
  Lower bound on the min-entropy of a chunk when the source element is
  uniform over its own field: a chunk value has at most 2^(bits - k) source
  preimages per k-bit pattern, and at most ceil(2^k / n) patterns map to each
  residue.
  """
  k = width + margin
  preimages = (1 << source.bits - k) * ceil((1 << k) / modulus)
  return log2(source.p) - log2(preimages)
