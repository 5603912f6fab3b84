from dataclasses import dataclass
from typing import Callable, Dict

import nacl.bindings as sodium


@dataclass(frozen=True)
class Digest:
  """A hash-to-bytes function of fixed output size, used for key and nonce derivation only."""
  name: str
  size: int
  fn: Callable[[bytes], bytes]

  @property
  def bits(self) -> int:
    return 8 * self.size

  def __call__(self, data: bytes) -> bytes:
    h = self.fn(bytes(data))
    if len(h) != self.size:
      raise ValueError(f"Digest {self.name} returned {len(h)} bytes instead of {self.size}")
    return h


def _blake2b(data: bytes) -> bytes:
  return sodium.crypto_generichash_blake2b_salt_personal(data, digest_size=64)


SHA512 = Digest("sha512", 64, sodium.crypto_hash_sha512)
SHA256 = Digest("sha256", 32, sodium.crypto_hash_sha256)
BLAKE2B = Digest("blake2b", 64, _blake2b)

DIGESTS: Dict[str, Digest] = {d.name: d for d in (SHA512, BLAKE2B, SHA256)}


def get_digest(name: str) -> Digest:
  try:
    return DIGESTS[name.lower()]
  except KeyError:
    raise ValueError(f"Unknown digest {name!r}, should be one of: {', '.join(DIGESTS)}") from None
