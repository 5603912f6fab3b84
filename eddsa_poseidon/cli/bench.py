from secrets import randbelow
from time import perf_counter

from tqdm import tqdm

from eddsa_poseidon.cli.sign import sponge_config
from eddsa_poseidon.curves import get_curve
from eddsa_poseidon.exceptions import CliArgError
from eddsa_poseidon.keys import generate_key


def main_bench(args):
  curve = get_curve(args.curve)
  rounds = int(args.rounds)
  if rounds < 1:
    raise CliArgError("Need at least one round")
  t0 = perf_counter()
  config = sponge_config(args, curve.field)
  print(f"Poseidon constants generated in {perf_counter() - t0:.2f} s")

  sk = generate_key(curve)
  pk = sk.public_key()
  messages = [curve.field(randbelow(curve.field.p)) for _ in range(rounds)]

  t0 = perf_counter()
  signatures = [sk.sign(config, m) for m in tqdm(messages, desc="SIGN", leave=False)]
  signtime = perf_counter() - t0

  t0 = perf_counter()
  for m, sig in tqdm(zip(messages, signatures), desc="VERIFY", total=rounds, leave=False):
    pk.verify(config, m, sig)
  verifytime = perf_counter() - t0

  print(f"Ran {rounds} signatures on {curve.name}.\n")
  print(f"Signing      {rounds / signtime:8.1f} signatures/s")
  print(f"Verification {rounds / verifytime:8.1f} signatures/s")
