from __future__ import annotations

import logging
from secrets import token_bytes
from typing import TYPE_CHECKING, Callable, Tuple

from .curves import DEFAULT_CURVE
from .digest import SHA512, Digest
from .ed import Curve, EdPoint
from .exceptions import BadDigestOutput
from .field import fe

if TYPE_CHECKING:
  from .eddsa import Signature
  from .poseidon import PoseidonConfig

logger = logging.getLogger(__name__)


def check_digest(digest: Digest, curve: Curve) -> None:
  """The digest output must cover the whole scalar field before reduction mod n."""
  if digest.bits < curve.order.bit_length():
    raise BadDigestOutput(
      f"Bad digest output size: {digest.name} gives {digest.bits} bits but {curve.name} scalars need {curve.order.bit_length()}"
    )


class SigningKey:
  """
  A private scalar together with the seed and the domain parameters it was
  derived with. The scalar is digest(seed) mod n, where n is the subgroup
  order of the curve.

  Immutable. Use `export_seed` to get the secret material out explicitly.
  """

  def __init__(self, seed: bytes, curve: Curve = DEFAULT_CURVE, digest: Digest = SHA512):
    check_digest(digest, curve)
    if len(seed) < curve.scalar.nbytes:
      raise ValueError(f"Seed of {len(seed)} bytes is too short, {curve.scalar.nbytes} needed for {curve.name}")
    self._seed = bytes(seed)
    self._curve = curve
    self._digest = digest
    self._scalar = curve.scalar.from_bytes_mod_order(digest(self._seed))

  @classmethod
  def generate(cls, curve: Curve = DEFAULT_CURVE, digest: Digest = SHA512,
               randomness: Callable[[int], bytes] = token_bytes) -> SigningKey:
    """Create a key from a fresh random seed of the scalar field's byte length."""
    check_digest(digest, curve)
    size = curve.scalar.nbytes
    seed = randomness(size)
    if len(seed) != size:
      raise ValueError(f"Randomness source returned {len(seed)} bytes instead of {size}")
    logger.debug("Generated a %s signing key using %s", curve.name, digest.name)
    return cls(seed, curve, digest)

  @property
  def curve(self) -> Curve: return self._curve

  @property
  def digest(self) -> Digest: return self._digest

  @property
  def scalar(self) -> fe: return self._scalar

  def export_seed(self) -> bytes:
    return self._seed

  def public_key(self) -> VerifyingKey:
    return VerifyingKey(self._scalar * self._curve.G)

  def sign(self, config: PoseidonConfig, message: fe) -> Signature:
    from .eddsa import sign
    return sign(self, config, message)

  def __eq__(self, other):
    if not isinstance(other, SigningKey): return NotImplemented
    return (self._curve, self._digest.name, self._seed) == (other._curve, other._digest.name, other._seed)

  def __hash__(self):
    return hash(self.public_key())

  def __repr__(self):
    return f"SigningKey[{self._curve.name}:{self._digest.name}:{str(self.public_key())[:8]}]"


class VerifyingKey:
  """A public key: a point of the prime order subgroup."""

  def __init__(self, point: EdPoint):
    if not point.is_prime_group or point == point.curve.zero:
      raise ValueError(f"Invalid public key for {point.curve.name}")
    self.point = point.norm

  @classmethod
  def from_bytes(cls, curve: Curve, data: bytes) -> VerifyingKey:
    """Read the uncompressed x || y form or the compressed form."""
    return cls(curve.point_from_bytes(bytes(data)))

  @property
  def curve(self) -> Curve: return self.point.curve

  @property
  def xy(self) -> Tuple[fe, fe]: return self.point.xy

  @property
  def compressed(self) -> bytes: return bytes(self.point)

  def verify(self, config: PoseidonConfig, message: fe, signature: Signature) -> None:
    from .eddsa import verify
    verify(self, config, message, signature)

  def __bytes__(self): return self.point.uncompressed
  def __str__(self): return bytes(self).hex()
  def __hash__(self): return hash(self.point)
  def __repr__(self): return f"VerifyingKey[{self.curve.name}:{str(self)[:8]}]"

  def __eq__(self, other):
    if not isinstance(other, VerifyingKey): return NotImplemented
    return self.point == other.point


def generate_key(curve: Curve = DEFAULT_CURVE, digest: Digest = SHA512,
                 randomness: Callable[[int], bytes] = token_bytes) -> SigningKey:
  return SigningKey.generate(curve, digest, randomness)


def public_key(sk: SigningKey) -> VerifyingKey:
  return sk.public_key()
