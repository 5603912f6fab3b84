import sys
from typing import NoReturn

import eddsa_poseidon

T = "\x1B[1;44m"  # titlebar (white on blue)
H = "\x1B[1;37m"  # heading (bright white)
C = "\x1B[0;34m"  # command (dark blue)
F = "\x1B[1;34m"  # flag (light blue)
D = "\x1B[1;30m"  # dark / syntax markup
N = "\x1B[0m"     # normal color

usage = dict(
  keygen=f"{C}eddsa-poseidon {F}keygen {D}[{F}-o {N}id.key{D}] [{F}--curve {N}name{D}] [{F}--digest {N}sha512{D}]{N}\n",
  pubkey=f"{C}eddsa-poseidon {F}pubkey {D}[{F}-i {N}id.key{D}]{N}\n",
  sign=f"{C}eddsa-poseidon {F}sign {D}[{F}-i {N}id.key{D}] [{N}sponge options{D}]{N} message\n",
  verify=f"{C}eddsa-poseidon {F}verify -k {N}pubkey {F}-s {N}signature {D}[{N}sponge options{D}]{N} message\n",
  bench=f"{C}eddsa-poseidon {F}bench {D}[{F}--curve {N}name{D}] [{F}--rounds {N}100{D}] —{N} signing and verification speed\n",
)

spongehelp = f"""\
  {F}--rate{N} 5          Poseidon rate (capacity is always 1)
  {F}--full-rounds{N} 8   Poseidon full rounds
  {F}--partial-rounds{N} 60  Poseidon partial rounds
"""

usagetext = dict(
  keygen=f"""\
Create a new secret key file and print the public key. Without {F}-o{N} the key
goes to the data folder ($XDG_DATA_HOME/eddsa-poseidon/id.key). Existing
files are never overwritten.

  {F}-o{N} FILENAME       Secret key file to create
  {F}--curve{N} NAME      ed_on_bn254_twist (default) or babyjubjub
  {F}--digest{N} NAME     Key and nonce derivation digest: sha512 (default), blake2b, sha256
""",
  pubkey=f"""\
Print the public key of a secret key file, as curve:hex(x || y).

  {F}-i{N} FILENAME       Secret key file (default from the data folder)
""",
  sign=f"""\
Sign a message, which is an element of the BN254 scalar field given in decimal
or as 0x hex. The signature R.x || R.y || s is printed in hex.

  {F}-i{N} FILENAME       Secret key file (default from the data folder)
{spongehelp}""",
  verify=f"""\
Verify a signature. Exits with status 0 if valid and 10 if not.

  {F}-k{N} PUBKEY         Public key string curve:hex or a file containing it
  {F}-s{N} SIGNATURE      Signature in hex
{spongehelp}""",
)

cmdhelp = {k: f"{usage[k]}\n{usagetext.get(k, '')}".rstrip("\n") + "\n" for k in usage}

introduction = f"eddsa-poseidon {eddsa_poseidon.__version__} - EdDSA with a Poseidon challenge for BN254 circuits"

introduction = f"""\
{T}{introduction:78}{N}
"""

shorthelp = f"""\
{introduction}
{"".join(usage.values())}
Getting started: create a key with {F}keygen{N}, {F}sign{N} a field element and give
the public key to whoever needs to {F}verify{N} it. Sign and verify must use the
same sponge options. Commonly used options:

  {F}-i {N}id.key         Your secret key file
  {F}--debug{N}           Log details and show full tracebacks on errors
  {F}--help --version{N}  Useful information. Help applies to subcommands too.
"""

exampleshelp = f"""\
{H}Examples:{N}

  {C}eddsa-poseidon {F}keygen -o {N}alice.key {C}> {N}alice.pub
  {C}eddsa-poseidon {F}sign -i {N}alice.key 12345 {C}> {N}msg.sig
  {C}eddsa-poseidon {F}verify -k {N}alice.pub {F}-s {N}$(cat msg.sig) 12345
"""

allcommands = '\n\n'.join(cmdhelp.values())

fullhelp = f"""\
{introduction}
{allcommands}

{exampleshelp}"""

def print_help(modehelp: str = None, error: str = None) -> NoReturn:
  stream = sys.stderr if error else sys.stdout
  if modehelp is None: stream.write(shorthelp)
  elif (h := cmdhelp.get(modehelp)): stream.write(h)
  else: stream.write(fullhelp)
  if error:
    stream.write(f"\n{error}\n")
    sys.exit(1)
  sys.exit(0)

def print_version() -> NoReturn:
  print(f"eddsa-poseidon {eddsa_poseidon.__version__}")
  sys.exit(0)
