from __future__ import annotations

from functools import cached_property
from typing import Optional, Tuple, Union

from .field import PrimeField, fe, is_probable_prime

# Twisted Edwards curve: a x2 + y2 = 1 + d x2 y2

# Points are represented as tuples (X, Y, Z, T) of extended
# coordinates, with x = X/Z, y = Y/Z, x*y = T/Z


class Curve:
  """
  Parameters of a twisted Edwards curve usable for signatures.

  The constructor checks the contract that the parameters must satisfy: a
  and d distinct and non-zero, an odd prime-sized subgroup order and a
  generator of exactly that order. Finding such parameters is not done here.

  `target` names the scalar field of a pairing-friendly curve whose circuits
  consume this curve's coordinates. A curve whose base field equals its
  target is a twist variant: points are native circuit witnesses, while the
  curve's own scalars (keys, nonces, challenges) are not and must be
  re-encoded with `nonnative.reencode` when they re-enter the target field.
  """

  def __init__(self, name: str, field: PrimeField, a: int, d: int, order: int, cofactor: int,
               generator: Tuple[int, int], target: Optional[PrimeField] = None):
    self.name = name
    self.field = field
    self.a = field(a)
    self.d = field(d)
    self.order = order
    self.cofactor = cofactor
    self.target = target
    if not self.a or not self.d or self.a == self.d:
      raise ValueError(f"{name}: a and d must be distinct and non-zero")
    if order < 3 or not order & 1 or cofactor < 1:
      raise ValueError(f"{name}: subgroup order must be odd and cofactor positive")
    if not order > cofactor:
      raise ValueError(f"{name}: subgroup order must exceed the cofactor")
    if not is_probable_prime(order):
      raise ValueError(f"{name}: subgroup order must be prime")
    self.scalar = PrimeField(order, f"{name}.Fr")
    # Neutral element
    self.zero = EdPoint(self, field.zero, field.one)
    gx, gy = generator
    if not self.is_on_curve(field(gx), field(gy)):
      raise ValueError(f"{name}: generator is not on the curve")
    # Base point (prime group generator)
    self.G = EdPoint(self, field(gx), field(gy))
    if self.G == self.zero or not self.G.is_prime_group:
      raise ValueError(f"{name}: generator does not have the subgroup order")

  def __repr__(self): return f"Curve({self.name})"

  def is_native_to(self, field: PrimeField) -> bool:
    """Coordinates are native elements of the given (circuit) field."""
    return self.field == field

  def is_on_curve(self, x: fe, y: fe) -> bool:
    x2, y2 = x.sq, y.sq
    return self.a * x2 + y2 == self.field.one + self.d * x2 * y2

  def point(self, x: Union[int, fe], y: Union[int, fe]) -> EdPoint:
    """Validated affine point, must be in the prime order subgroup."""
    x, y = self.field(int(x)), self.field(int(y))
    if not self.is_on_curve(x, y):
      raise ValueError(f"Not a curve point on {self.name}")
    P = EdPoint(self, x, y)
    if not P.is_prime_group:
      raise ValueError(f"Point is not in the prime order subgroup of {self.name}")
    return P

  def from_y(self, y: fe, negative=False) -> EdPoint:
    """Restore from a y coordinate and an is_negative flag (x parity)"""
    x2 = (y.sq - self.field.one) / (self.d * y.sq - self.a)
    if not x2.is_square: raise ValueError(f"Not a curve point on {self.name}")
    x = x2.sqrt
    if negative and not x: raise ValueError(f"Not a curve point on {self.name}")
    return self.point(-x if negative else x, y)

  def point_from_bytes(self, b: bytes) -> EdPoint:
    """Read a point in uncompressed (x || y) or compressed (y with sign) format"""
    n = self.field.nbytes
    if len(b) == 2 * n:
      x, y = self.field.from_bytes(b[:n]), self.field.from_bytes(b[n:])
      return self.point(x, y)
    if len(b) == n:
      val = int.from_bytes(b, "little")
      sign = val >> 8 * n - 1
      return self.from_y(self.field.from_bytes((val ^ sign << 8 * n - 1).to_bytes(n, "little")), bool(sign))
    raise ValueError(f"Invalid length {len(b)} for a point on {self.name}")


class EdPoint:
  def __init__(self, curve: Curve, x: fe, y: fe, z: Optional[fe] = None, t: Optional[fe] = None):
    # Expand to projective coordinates for faster adds
    self.curve = curve
    self.X = x
    self.Y = y
    self.Z = curve.field.one if z is None else z
    self.T = x * y if t is None else t

  def __repr__(self): return point_name(self)
  def __str__(self): return bytes(self).hex()
  def __hash__(self): return hash(self.norm.xy)

  def __bytes__(self):
    """Compressed: y little-endian with the x parity in the highest bit"""
    n = self.curve.field.nbytes
    return (self.y.val | self.is_negative << 8 * n - 1).to_bytes(n, "little")

  @cached_property
  def uncompressed(self) -> bytes:
    return bytes(self.x) + bytes(self.y)

  @cached_property
  def norm(self) -> EdPoint:
    """Return a normalized point, with Z=1."""
    return EdPoint(self.curve, self.x, self.y)

  @cached_property
  def is_negative(self) -> bool:
    """Return the parity of the x coordinate, aka the sign."""
    return self.x.bit(0)

  @cached_property
  def is_on_curve(self) -> bool:
    return bool(self.Z) and self.curve.is_on_curve(self.x, self.y)

  @cached_property
  def is_prime_group(self) -> bool:
    return self.is_on_curve and self.curve.order * self == self.curve.zero

  @cached_property
  def x(self) -> fe: return self.X / self.Z

  @cached_property
  def y(self) -> fe: return self.Y / self.Z

  @property
  def xy(self) -> Tuple[fe, fe]: return self.x, self.y

  def __add__(self, othr: EdPoint) -> EdPoint:
    if not isinstance(othr, EdPoint): return NotImplemented
    if othr.curve is not self.curve: raise TypeError(f"Cannot add points of {self.curve} and {othr.curve}")
    # Unified add-2008-hwcd, complete within the odd order subgroup
    A = self.X * othr.X
    B = self.Y * othr.Y
    C = self.T * self.curve.d * othr.T
    D = self.Z * othr.Z
    E = (self.X + self.Y) * (othr.X + othr.Y) - A - B
    F, G, H = D - C, D + C, B - self.curve.a * A
    return EdPoint(self.curve, E * F, G * H, F * G, E * H)

  def __sub__(self, othr: EdPoint) -> EdPoint:
    return self + -othr

  def __neg__(self) -> EdPoint:
    return EdPoint(self.curve, -self.X, self.Y, self.Z, -self.T)

  def __mul__(self, s: Union[int, fe]) -> EdPoint:
    """Multiply the point by a scalar (int or element of the scalar field)."""
    if isinstance(s, fe):
      if s.field != self.curve.scalar: raise TypeError(f"Scalar of {s.field} used on {self.curve}")
      s = s.val
    if not isinstance(s, int): return NotImplemented
    Q = self.curve.zero  # Neutral element
    P = self
    # Modulo the full group order first to make multiplication faster
    s %= self.curve.cofactor * self.curve.order
    while s > 0:
      if s & 1: Q += P
      P += P
      s >>= 1
    # Exceptional additions (only outside the prime group) leave Z = 0
    return Q.norm if Q.Z else Q

  def __rmul__(self, s: Union[int, fe]) -> EdPoint:
    return self * s

  def __eq__(self, othr):
    if not isinstance(othr, EdPoint): raise TypeError(f"EdPoints cannot be compared with {type(othr)}")
    if othr.curve is not self.curve: return False
    # A point with Z = 0 has no affine coordinates and equals nothing
    if not self.Z or not othr.Z: return False
    # x1 / z1 == x2 / z2  <==>  x1 * z2 == x2 * z1
    return (
      not (self.X * othr.Z - othr.X * self.Z) and
      not (self.Y * othr.Z - othr.Y * self.Z)
    )


def point_name(P: EdPoint) -> str:
  """Return a name rather than xy coordinates for the well known points"""
  if P == P.curve.zero: return "ZERO"
  if P == P.curve.G: return "G"
  if not P.Z: return "EdPoint(<exceptional>)"
  return f"EdPoint({P.x!r}, {P.y!r})"
