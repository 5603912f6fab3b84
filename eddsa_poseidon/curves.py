"""
Fixed curve parameters over the BN254 scalar field.

Both curves have the BN254 scalar field as their base field, so a point's
coordinates are native witnesses in BN254 circuits (Groth16, Plonk over
BN254). Their own scalar fields are smaller primes and are therefore
non-native in those circuits: challenges and key scalars that must re-enter
the circuit field go through `nonnative.reencode`.

Only ED_ON_BN254_TWIST is meant for signing by default. Any other curve
added here needs independent validation of its parameters first.
"""
from typing import Dict

from .ed import Curve
from .field import PrimeField

# BN254 (alt_bn128) group order r, the field of its circuits
BN254_FR = PrimeField(
  21888242871839275222246405745257275088548364400416034343698204186575808495617,
  "bn254.Fr",
)

# Baby Jubjub (EIP-2494): 8 * l points, generator is Base8 of circomlib
BABYJUBJUB = Curve(
  "babyjubjub",
  BN254_FR,
  a=168700,
  d=168696,
  order=2736030358979909402780800718157159386076813972158567259200215660948447373041,
  cofactor=8,
  generator=(
    5299619240641551281634865583518297030282874472190772894086521144482721001553,
    16950150798460657717958625567821834550301663161624707787222815936182638968203,
  ),
  target=BN254_FR,
)

# Quadratic twist of Baby Jubjub by the non-residue 5: (a, d) = 5 * (168700, 168696).
# The twist has 2 (r + 1) - 8 l = 4 * n points with n prime (252 bits).
# Generator: 4 * (3, y) for the smaller root y of the curve equation at x = 3.
ED_ON_BN254_TWIST = Curve(
  "ed_on_bn254_twist",
  BN254_FR,
  a=843500,
  d=843480,
  order=5472060717959818805561601436314318772120554255890882653448670771391009501727,
  cofactor=4,
  generator=(
    20508810607164614987655775585210410781935589482018843237174845225748106334705,
    16722286613136094399924277101055924039023376493907086324633184836564644987913,
  ),
  target=BN254_FR,
)

DEFAULT_CURVE = ED_ON_BN254_TWIST

CURVES: Dict[str, Curve] = {c.name: c for c in (ED_ON_BN254_TWIST, BABYJUBJUB)}


def get_curve(name: str) -> Curve:
  try:
    return CURVES[name.lower()]
  except KeyError:
    raise ValueError(f"Unknown curve {name!r}, should be one of: {', '.join(CURVES)}") from None
