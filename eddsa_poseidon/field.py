from __future__ import annotations

from functools import cached_property
from typing import List

# Deterministic below 3.3e24, a probable prime test above
_MR_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)


def is_probable_prime(n: int) -> bool:
  """Miller-Rabin with fixed bases"""
  if n < 2: return False
  for p in _MR_BASES:
    if n % p == 0: return n == p
  d, s = n - 1, 0
  while not d & 1:
    d, s = d >> 1, s + 1
  for a in _MR_BASES:
    x = pow(a, d, n)
    if x in (1, n - 1): continue
    for _ in range(s - 1):
      x = x * x % n
      if x == n - 1: break
    else:
      return False
  return True


class PrimeField:
  """A prime field GF(p), serialized little-endian in a fixed width."""

  def __init__(self, modulus: int, name: str = ""):
    if modulus < 3 or not modulus & 1 or not is_probable_prime(modulus):
      raise ValueError(f"Field modulus must be an odd prime, got {modulus}")
    self.p = modulus
    self.name = name or f"GF({modulus})"
    self.bits = modulus.bit_length()
    self.nbytes = (self.bits + 7) // 8
    # Precalculate commonly needed parts of the prime
    self.p2 = (modulus - 1) // 2
    # p - 1 = q * 2^s with q odd, for Tonelli-Shanks
    q, s = modulus - 1, 0
    while not q & 1:
      q, s = q >> 1, s + 1
    self.two_adicity = s
    self.odd_part = q

  @property
  def capacity(self) -> int:
    """Number of bits that always fit in an element without reduction."""
    return self.bits - 1

  def __call__(self, x: int) -> fe: return fe(x, self)
  def __repr__(self): return self.name
  def __hash__(self): return self.p
  def __contains__(self, x): return isinstance(x, fe) and x.field == self

  def __eq__(self, other):
    if not isinstance(other, PrimeField): return NotImplemented
    return self.p == other.p

  @cached_property
  def zero(self) -> fe: return fe(0, self)

  @cached_property
  def one(self) -> fe: return fe(1, self)

  @cached_property
  def nonresidue(self) -> fe:
    """The smallest quadratic non-residue, used by sqrt"""
    z = fe(2, self)
    while z.is_square: z += self.one
    return z

  def from_bytes(self, b: bytes) -> fe:
    """Strict decoding of a canonical little-endian encoding."""
    if len(b) != self.nbytes:
      raise ValueError(f"Should be exactly {self.nbytes} bytes for {self.name}")
    val = int.from_bytes(b, "little")
    if val >= self.p:
      raise ValueError(f"Non-canonical encoding of an element of {self.name}")
    return fe(val, self)

  def from_bytes_mod_order(self, b: bytes) -> fe:
    """Interpret any number of bytes as a little-endian integer mod p."""
    return fe(int.from_bytes(b, "little"), self)

  def from_bits_le(self, bits) -> fe:
    return fe(sum(1 << i for i, bit in enumerate(bits) if bit), self)


class fe:
  """An element of a prime field"""
  def __init__(self, x: int, field: PrimeField):
    self.field = field
    self.val = x % field.p

  def __hash__(self): return hash((self.val, self.field.p))
  def __repr__(self): return f"fe({self.val})"
  def __str__(self): return bytes(self).hex()
  def __bytes__(self): return self.val.to_bytes(self.field.nbytes, "little")
  def __int__(self): return self.val
  def __index__(self): return self.val
  def __bool__(self): return self.val != 0
  def bit(self, n: int): return bool(self.val & 1 << n)

  def bits_le(self) -> List[bool]:
    """Canonical little-endian bit decomposition, field.bits long."""
    return [bool(self.val >> i & 1) for i in range(self.field.bits)]

  def _check(self, o) -> fe:
    if not isinstance(o, fe): raise TypeError(f"Cannot combine fe with {o!r}")
    if o.field != self.field: raise TypeError(f"Cannot combine elements of {self.field} and {o.field}")
    return o

  def __eq__(self, other):
    # Note: if we return NotImplemented, Python does object comparison and returns False
    self._check(other)
    return self.val == other.val

  def __neg__(self): return fe(-self.val, self.field)
  def __add__(self, o: fe): return fe(self.val + self._check(o).val, self.field)
  def __sub__(self, o: fe): return fe(self.val - self._check(o).val, self.field)
  def __mul__(self, o: fe):
    # Scalar times point is handled by EdPoint.__rmul__
    if not isinstance(o, fe): return NotImplemented
    return fe(self.val * self._check(o).val, self.field)

  def __truediv__(self, o: fe) -> fe:
    """Division mod p"""
    return self * self._check(o).inv

  def __pow__(self, s: int) -> fe:
    # Use faster cached .sq for x**2 because it is a very common operation
    return self.sq if s == 2 else fe(pow(self.val, s, self.field.p), self.field)

  @cached_property
  def inv(self) -> fe:
    if not self.val: raise ZeroDivisionError(f"Zero has no inverse in {self.field}")
    return self**-1

  @cached_property
  def sq(self) -> fe:
    """Squared"""
    return self * self

  # Legendre symbol: zero, one or minus one
  @cached_property
  def chi(self) -> fe:
    """Legendre symbol"""
    return self**self.field.p2

  @cached_property
  def is_square(self) -> bool: return not self.val or self.chi.val == 1

  @cached_property
  def sqrt(self) -> fe:
    """The square root with an even least significant bit. Raises ValueError otherwise."""
    if not self.is_square: raise ValueError('Not a square!')
    if not self.val: return self
    F = self.field
    # Tonelli-Shanks
    m, c = F.two_adicity, F.nonresidue**F.odd_part
    t, root = self**F.odd_part, self**((F.odd_part + 1) // 2)
    while t.val != 1:
      i, t2 = 0, t
      while t2.val != 1:
        t2, i = t2.sq, i + 1
      b = c**(1 << (m - i - 1))
      m, c = i, b.sq
      t, root = t * c, root * b
    assert root.sq == self
    return -root if root.bit(0) else root
