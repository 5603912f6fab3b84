"""
EdDSA with a Poseidon challenge.

  r = digest(bytes(x) || bytes(m)) mod n     deterministic nonce
  R = r G
  c = Poseidon(R.x, R.y, A.x, A.y, m)        re-encoded into the scalar field
  s = r + c x mod n

The verifier checks s G == R + c A. Only the challenge is hashed with
Poseidon, so a circuit over the curve's base field verifies a signature with
field operations alone. The byte digest is used only for the nonce, with the
private scalar bytes first and the message bytes second.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from .ed import Curve, EdPoint
from .exceptions import VerifyError
from .field import fe
from .keys import SigningKey, VerifyingKey
from .nonnative import reencode
from .poseidon import PoseidonConfig, PoseidonSponge

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Signature:
  R: EdPoint
  s: fe

  def __post_init__(self):
    if not isinstance(self.R, EdPoint) or not isinstance(self.s, fe):
      raise TypeError("Signature needs an EdPoint and a scalar field element")
    if self.s.field != self.R.curve.scalar:
      raise TypeError(f"Signature scalar of {self.s.field} does not match {self.R.curve}")
    if not self.R.is_prime_group:
      raise ValueError(f"Invalid R point on signature, not in the prime order subgroup of {self.R.curve.name}")
    object.__setattr__(self, "R", self.R.norm)

  @property
  def curve(self) -> Curve:
    return self.R.curve

  def __bytes__(self):
    """Fixed width R.x || R.y || s, each little-endian"""
    return self.R.uncompressed + bytes(self.s)

  def __str__(self):
    return bytes(self).hex()

  @classmethod
  def from_bytes(cls, curve: Curve, data: bytes) -> Signature:
    n = 2 * curve.field.nbytes
    if len(data) != n + curve.scalar.nbytes:
      raise ValueError("Invalid signature length")
    R = curve.point_from_bytes(data[:n])
    try:
      s = curve.scalar.from_bytes(data[n:])
    except ValueError:
      raise ValueError("Invalid s value on signature") from None
    return cls(R, s)


def _check_domain(curve: Curve, config: PoseidonConfig, message: fe):
  if not isinstance(message, fe) or message.field != curve.field:
    raise TypeError(f"Message must be an element of {curve.field}, got {message!r}")
  if config.field != curve.field:
    raise TypeError(f"Sponge over {config.field} cannot hash points of {curve.name}")


def challenge(config: PoseidonConfig, R: EdPoint, A: EdPoint, message: fe) -> fe:
  """Hash (R, A, m) with Poseidon into a scalar of R's curve."""
  curve = R.curve
  sponge = PoseidonSponge(config)
  sponge.absorb(R.x, R.y, A.x, A.y, message)
  c = sponge.squeeze()
  if c.field == curve.scalar:
    return c
  return reencode(c, [curve.order.bit_length() - 1], curve.scalar)[0]


def sign(sk: SigningKey, config: PoseidonConfig, message: fe) -> Signature:
  curve = sk.curve
  _check_domain(curve, config, message)
  x = sk.scalar
  A = x * curve.G
  r = curve.scalar.from_bytes_mod_order(sk.digest(bytes(x) + bytes(message)))
  R = r * curve.G
  c = challenge(config, R, A, message)
  return Signature(R, r + c * x)


def verify(pk: VerifyingKey, config: PoseidonConfig, message: fe, signature: Signature) -> None:
  """Raises VerifyError unless the signature is valid for the message and key."""
  curve = pk.curve
  _check_domain(curve, config, message)
  if signature.curve is not curve:
    raise TypeError(f"Signature on {signature.curve.name} cannot be checked with a {curve.name} key")
  A, R = pk.point, signature.R
  c = challenge(config, R, A, message)
  # Finally we confirm that (r + c * x) * G == R + c * A
  if signature.s * curve.G != R + c * A:
    logger.debug("Signature mismatch for key %s", pk)
    raise VerifyError
