import sys

from eddsa_poseidon.curves import get_curve
from eddsa_poseidon.digest import get_digest
from eddsa_poseidon.exceptions import CliArgError
from eddsa_poseidon.keyfile import encode_pk, load_signing_key, save_signing_key
from eddsa_poseidon.keys import generate_key


def main_keygen(args):
  if args.files:
    raise CliArgError(f"Unexpected arguments: {' '.join(map(str, args.files))}")
  if len(args.outfile) > 1:
    raise CliArgError("Only one output file may be specified")
  sk = generate_key(get_curve(args.curve), get_digest(args.digest))
  fname = save_signing_key(sk, args.outfile[0] if args.outfile else None)
  sys.stderr.write(f" 🔑 Secret key saved to {fname}\n")
  print(encode_pk(sk.public_key()))


def main_pubkey(args):
  if len(args.identities) > 1:
    raise CliArgError("Only one secret key may be specified")
  sk = load_signing_key(args.identities[0] if args.identities else None)
  print(encode_pk(sk.public_key()))
