"""
Storage and text formats for keys and signatures.

Secret key files are msgpack maps {"v": 1, "curve", "digest", "seed"}: the
seed plus the domain parameters it was generated for, so that the signer
always derives the same scalar with the same digest. Public keys travel as
`curve:hex(x || y)` and signatures as plain hex of their fixed width bytes.
"""
import logging
import os
from pathlib import Path
from typing import Optional, Union

import msgpack

from .curves import get_curve
from .digest import get_digest
from .ed import Curve
from .eddsa import Signature
from .exceptions import MalformedKeyError
from .keys import SigningKey, VerifyingKey
from .path import create_datadir, keyfilename

assert msgpack.version >= (1, 0, 0), 'Old 0.5.6 version creates different maps.'

logger = logging.getLogger(__name__)

KEYFILE_VERSION = 1


def encode_sk(sk: SigningKey) -> bytes:
  return msgpack.packb({
    "v": KEYFILE_VERSION,
    "curve": sk.curve.name,
    "digest": sk.digest.name,
    "seed": sk.export_seed(),
  })


def decode_sk(data: bytes) -> SigningKey:
  try:
    d = msgpack.unpackb(data)
  except (ValueError, TypeError):
    raise MalformedKeyError("Secret key file is corrupted or not a key file") from None
  if not isinstance(d, dict) or d.get("v") != KEYFILE_VERSION:
    raise MalformedKeyError("Unsupported secret key file version")
  try:
    return SigningKey(d["seed"], get_curve(d["curve"]), get_digest(d["digest"]))
  except (AttributeError, KeyError, TypeError, ValueError) as e:
    raise MalformedKeyError(f"Invalid secret key file: {e}") from None


def save_signing_key(sk: SigningKey, filename: Optional[Union[str, Path]] = None) -> Path:
  """Write a new key file (never overwrites), by default into the data directory."""
  if filename is None:
    create_datadir()
    filename = keyfilename
  filename = Path(filename)
  if filename.exists():
    raise ValueError(f"Secret key file {filename} already exists")
  with open(filename, "xb") as f:
    if os.name == "posix":
      os.chmod(filename, 0o600)
    f.write(encode_sk(sk))
  logger.debug("Saved %r to %s", sk, filename)
  return filename


def load_signing_key(filename: Optional[Union[str, Path]] = None) -> SigningKey:
  filename = Path(keyfilename if filename is None else filename)
  if not filename.is_file():
    raise ValueError(f"Secret key file {filename} not found")
  with open(filename, "rb") as f:
    return decode_sk(f.read())


def encode_pk(pk: VerifyingKey) -> str:
  return f"{pk.curve.name}:{pk}"


def decode_pk(keystr: str) -> VerifyingKey:
  curvename, sep, token = keystr.strip().partition(":")
  if not sep:
    raise MalformedKeyError(f"Unrecognized key {keystr!r}, expected curve:hex")
  try:
    return VerifyingKey.from_bytes(get_curve(curvename), bytes.fromhex(token))
  except ValueError as e:
    raise MalformedKeyError(f"Invalid public key: {e}") from None


def read_pk_any(keystr: str) -> VerifyingKey:
  """A public key string or the name of a file containing one"""
  if os.path.isfile(keystr):
    with open(keystr, "rb") as f:
      lines = [l for l in f.read().decode().splitlines() if l.strip() and not l.startswith("#")]
    if not lines:
      raise MalformedKeyError(f"No public key found in {keystr}")
    return decode_pk(lines[0])
  return decode_pk(keystr)


def encode_signature(sig: Signature) -> str:
  return str(sig)


def decode_signature(curve: Curve, sigstr: str) -> Signature:
  try:
    data = bytes.fromhex(sigstr.strip())
  except ValueError:
    raise ValueError("Invalid signature encoding, hex expected") from None
  return Signature.from_bytes(curve, data)
