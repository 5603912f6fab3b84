from eddsa_poseidon.cli.bench import main_bench
from eddsa_poseidon.cli.keygen import main_keygen, main_pubkey
from eddsa_poseidon.cli.sign import main_sign, main_verify
