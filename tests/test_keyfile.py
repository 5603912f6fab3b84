import os

import msgpack
import pytest

from eddsa_poseidon import BABYJUBJUB, BLAKE2B, BN254_FR, ED_ON_BN254_TWIST, MalformedKeyError, SigningKey, generate_key
from eddsa_poseidon.keyfile import (
  decode_pk, decode_signature, decode_sk, encode_pk, encode_signature, encode_sk, load_signing_key, read_pk_any,
  save_signing_key
)


def test_secret_key_encoding():
  sk = generate_key(BABYJUBJUB, BLAKE2B)
  data = encode_sk(sk)
  assert msgpack.unpackb(data) == {"v": 1, "curve": "babyjubjub", "digest": "blake2b", "seed": sk.export_seed()}
  sk2 = decode_sk(data)
  assert sk2 == sk
  assert sk2.curve is BABYJUBJUB
  assert sk2.public_key() == sk.public_key()


def test_malformed_secret_keys():
  seed = bytes(32)
  good = dict(v=1, curve="ed_on_bn254_twist", digest="sha512", seed=seed)
  assert decode_sk(msgpack.packb(good)) == SigningKey(seed)
  bad = [
    b"not a key file",
    msgpack.packb([1, 2, 3]),
    msgpack.packb({**good, "v": 2}),
    msgpack.packb({**good, "curve": "ed25519"}),
    msgpack.packb({**good, "digest": "md5"}),
    msgpack.packb({**good, "seed": seed[:8]}),
    msgpack.packb({k: v for k, v in good.items() if k != "seed"}),
  ]
  for data in bad:
    with pytest.raises(MalformedKeyError):
      decode_sk(data)


def test_save_and_load(tmp_path):
  sk = generate_key()
  fname = tmp_path / "alice.key"
  assert save_signing_key(sk, fname) == fname
  if os.name == "posix":
    assert fname.stat().st_mode & 0o777 == 0o600
  assert load_signing_key(fname) == sk
  assert load_signing_key(str(fname)) == sk
  # Never overwrites
  with pytest.raises(ValueError) as exc:
    save_signing_key(generate_key(), fname)
  assert "already exists" in str(exc.value)
  assert load_signing_key(fname) == sk
  with pytest.raises(ValueError) as exc:
    load_signing_key(tmp_path / "missing.key")
  assert "not found" in str(exc.value)


def test_default_keyfile(tmp_path, mocker):
  fname = tmp_path / "id.key"
  mocker.patch("eddsa_poseidon.keyfile.keyfilename", fname)
  create = mocker.patch("eddsa_poseidon.keyfile.create_datadir")
  sk = generate_key()
  assert save_signing_key(sk) == fname
  create.assert_called_once()
  assert load_signing_key() == sk


def test_public_key_strings(tmp_path):
  pk = generate_key().public_key()
  s = encode_pk(pk)
  assert s == f"ed_on_bn254_twist:{bytes(pk).hex()}"
  assert decode_pk(s) == pk
  assert decode_pk(f"  {s}\n") == pk
  assert decode_pk(f"ED_ON_BN254_TWIST:{pk.compressed.hex()}") == pk

  for bad in (bytes(pk).hex(), f"babyjubjub:{bytes(pk).hex()}", f"ed25519:{bytes(pk).hex()}", "ed_on_bn254_twist:zz"):
    with pytest.raises(MalformedKeyError):
      decode_pk(bad)

  fname = tmp_path / "alice.pub"
  fname.write_text(f"# Alice\n\n{s}\n")
  assert read_pk_any(str(fname)) == pk
  assert read_pk_any(s) == pk
  empty = tmp_path / "empty.pub"
  empty.write_text("# nothing here\n")
  with pytest.raises(MalformedKeyError):
    read_pk_any(str(empty))


def test_signature_strings(config):
  sk = generate_key()
  sig = sk.sign(config, BN254_FR(5))
  s = encode_signature(sig)
  assert len(s) == 192
  assert decode_signature(ED_ON_BN254_TWIST, s) == sig
  assert decode_signature(ED_ON_BN254_TWIST, f" {s.upper()}\n") == sig
  with pytest.raises(ValueError) as exc:
    decode_signature(ED_ON_BN254_TWIST, "xyz")
  assert "hex expected" in str(exc.value)
  with pytest.raises(ValueError):
    decode_signature(ED_ON_BN254_TWIST, s[:-2])
