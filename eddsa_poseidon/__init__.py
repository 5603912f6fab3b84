# EdDSA signatures with a Poseidon challenge, over twisted Edwards curves
# whose base field is the BN254 scalar field, for cheap in-circuit verification.

# Plain Python arithmetic: not constant time and not zeroing buffers after use.

# Public symbols are imported here. Lower case values are scalars (int or fe),
# upper case are EdPoints.

__version__ = "0.1.0"

from .curves import BABYJUBJUB, BN254_FR, CURVES, DEFAULT_CURVE, ED_ON_BN254_TWIST, get_curve
from .digest import BLAKE2B, DIGESTS, SHA256, SHA512, Digest, get_digest
from .ed import Curve, EdPoint
from .eddsa import Signature, challenge, sign, verify
from .exceptions import BadDigestOutput, ChunkWidthError, MalformedKeyError, SignatureError, VerifyError
from .field import PrimeField, fe
from .keys import SigningKey, VerifyingKey, generate_key, public_key
from .nonnative import MARGIN_BITS, bias_bound, min_entropy_bits, reencode
from .poseidon import PoseidonConfig, PoseidonSponge, poseidon_config, poseidon_hash
