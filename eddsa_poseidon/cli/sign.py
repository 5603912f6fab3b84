import sys

from eddsa_poseidon.exceptions import CliArgError
from eddsa_poseidon.field import PrimeField, fe
from eddsa_poseidon.keyfile import decode_signature, load_signing_key, read_pk_any
from eddsa_poseidon.poseidon import PoseidonConfig, poseidon_config


def parse_message(field: PrimeField, files) -> fe:
  if len(files) != 1:
    raise CliArgError("Exactly one message (a field element in decimal or 0x hex) is required")
  try:
    return field(int(files[0], 0))
  except ValueError:
    raise CliArgError(f"Message should be an integer, got {files[0]!r}") from None


def sponge_config(args, field: PrimeField) -> PoseidonConfig:
  try:
    rate, full_rounds, partial_rounds = int(args.rate), int(args.full_rounds), int(args.partial_rounds)
  except ValueError:
    raise CliArgError("Sponge options must be integers") from None
  return poseidon_config(field, rate=rate, full_rounds=full_rounds, partial_rounds=partial_rounds)


def main_sign(args):
  if len(args.identities) > 1:
    raise CliArgError("Only one secret key may be specified")
  sk = load_signing_key(args.identities[0] if args.identities else None)
  message = parse_message(sk.curve.field, args.files)
  config = sponge_config(args, sk.curve.field)
  print(sk.sign(config, message))


def main_verify(args):
  if len(args.pubkeys) != 1 or len(args.signatures) != 1:
    raise CliArgError("One public key (-k) and one signature (-s) are required")
  pk = read_pk_any(args.pubkeys[0])
  message = parse_message(pk.curve.field, args.files)
  signature = decode_signature(pk.curve, args.signatures[0])
  config = sponge_config(args, pk.curve.field)
  pk.verify(config, message, signature)
  sys.stderr.write(" ✔️  Signature valid\n")
