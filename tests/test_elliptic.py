from secrets import randbelow, token_bytes

import pytest

from eddsa_poseidon import BABYJUBJUB, BN254_FR, CURVES, ED_ON_BN254_TWIST, Curve, EdPoint, PrimeField, fe, get_curve
from eddsa_poseidon.field import is_probable_prime

F = BN254_FR
one, zero = F.one, F.zero


def test_fe():
  assert one + zero == one
  assert zero - one == F(-1)
  assert F(1234) / F(324123) == (F(324123) / F(1234)).inv
  assert repr(F(1234)) == "fe(1234)"
  assert bytes(zero) == bytes(32)
  assert str(one) == "01" + 31 * "00"
  assert F(F.p + 5) == F(5)

  x = F(randbelow(F.p))
  assert x.sq.sqrt in (x, -x)
  assert not x.sq.sqrt.bit(0)
  assert x.inv.inv == x
  assert x**3 == x * x * x
  assert x * F(2) == x + x
  assert F.from_bytes(bytes(x)) == x
  assert F.from_bits_le(x.bits_le()) == x
  assert len(x.bits_le()) == 254

  # 5 is the first non-residue of the BN254 scalar field
  assert F(4).is_square
  assert not F(5).is_square
  with pytest.raises(ValueError):
    F(5).sqrt
  with pytest.raises(ZeroDivisionError):
    zero.inv


def test_fe_encoding():
  with pytest.raises(ValueError) as exc:
    F.from_bytes(bytes(31))
  assert "exactly 32 bytes" in str(exc.value)
  with pytest.raises(ValueError) as exc:
    F.from_bytes(F.p.to_bytes(32, "little"))
  assert "Non-canonical" in str(exc.value)
  assert F.from_bytes_mod_order(F.p.to_bytes(32, "little")) == zero
  assert F.from_bytes_mod_order(token_bytes(64)).val < F.p


def test_fe_mixed_fields():
  G = PrimeField(13, "GF13")
  assert G.capacity == 3
  assert G.nbytes == 1
  with pytest.raises(TypeError):
    F(1) + G(1)
  with pytest.raises(TypeError):
    F(1) == 1
  with pytest.raises(ValueError):
    PrimeField(16)


@pytest.mark.parametrize("curve", CURVES.values(), ids=CURVES.keys())
def test_curve_parameters(curve):
  G, ZERO = curve.G, curve.zero
  assert curve.is_native_to(BN254_FR)
  assert curve.target == BN254_FR
  assert curve.is_on_curve(*G.xy)
  assert G.is_prime_group
  assert ZERO.is_prime_group
  assert curve.order * G == ZERO
  assert (curve.order - 1) * G == -G
  assert repr(ZERO) == "ZERO"
  assert repr(G) == "G"
  # Group order is cofactor * n, which must be below 2 (p + 1)
  assert curve.cofactor * curve.order < 2 * (curve.field.p + 1)


def test_twist():
  # Twisting Baby Jubjub by the non-residue 5
  assert ED_ON_BN254_TWIST.a == BABYJUBJUB.a * F(5)
  assert ED_ON_BN254_TWIST.d == BABYJUBJUB.d * F(5)
  # Hasse: the curve and its quadratic twist together have 2 (p + 1) points
  assert BABYJUBJUB.cofactor * BABYJUBJUB.order + ED_ON_BN254_TWIST.cofactor * ED_ON_BN254_TWIST.order == 2 * (F.p + 1)
  # Twist scalars are wider than Baby Jubjub's but still non-native to BN254
  assert ED_ON_BN254_TWIST.scalar.bits == 252
  assert BABYJUBJUB.scalar.bits == 251
  assert ED_ON_BN254_TWIST.scalar != BN254_FR
  # The generator is the cofactor multiple of the curve point with x = 3
  curve = ED_ON_BN254_TWIST
  x = F(3)
  y = ((one - curve.a * x.sq) / (one - curve.d * x.sq)).sqrt
  P = EdPoint(curve, x, min(y, -y, key=int))
  assert curve.is_on_curve(*P.xy)
  assert not P.is_prime_group
  assert curve.cofactor * P == curve.G


def test_babyjubjub_base8():
  # EIP-2494 generator, whose multiple by the cofactor is the subgroup generator Base8
  G = BABYJUBJUB.point(0, 1)
  P = EdPoint(
    BABYJUBJUB,
    F(995203441582195749578291179787384436505546430278305826713579947235728471134),
    F(5472060717959818805561601436314318772137091100104008585924551046643952123905),
  )
  assert G == BABYJUBJUB.zero
  assert BABYJUBJUB.is_on_curve(*P.xy)
  assert 8 * P == BABYJUBJUB.G
  with pytest.raises(ValueError) as exc:
    BABYJUBJUB.point(*P.xy)
  assert "not in the prime order subgroup" in str(exc.value)


@pytest.mark.parametrize("curve", CURVES.values(), ids=CURVES.keys())
def test_arithmetic(curve):
  G, ZERO = curve.G, curve.zero
  a, b = randbelow(curve.order), randbelow(curve.order)
  assert a * G + b * G == (a + b) * G
  assert a * (b * G) == b * (a * G)
  assert G + ZERO == G
  assert G - G == ZERO
  assert 2 * G == G + G
  assert curve.scalar(a) * G == a * G
  assert len({i * G for i in range(10)}) == 10
  # Low order point (0, -1) of order 2
  L = EdPoint(curve, zero, -one)
  assert curve.is_on_curve(*L.xy)
  assert L + L == ZERO
  assert not L.is_prime_group
  assert not (G + L).is_prime_group
  with pytest.raises(TypeError):
    G * BN254_FR(5)


@pytest.mark.parametrize("curve", CURVES.values(), ids=CURVES.keys())
def test_point_encoding(curve):
  P = randbelow(curve.order) * curve.G
  assert curve.point_from_bytes(bytes(P)) == P
  assert curve.point_from_bytes(P.uncompressed) == P
  assert curve.point_from_bytes(bytes(-P)) == -P
  assert len(bytes(P)) == 32
  assert len(P.uncompressed) == 64
  assert bytes(curve.zero) == bytes(F.one)
  with pytest.raises(ValueError):
    curve.point_from_bytes(bytes(33))
  with pytest.raises(ValueError):
    curve.point_from_bytes(bytes(F(5)) + bytes(F(7)))
  with pytest.raises(ValueError) as exc:
    curve.point(5, 7)
  assert "Not a curve point" in str(exc.value)


def test_curve_contract():
  x, y = BABYJUBJUB.G.xy
  with pytest.raises(ValueError) as exc:
    Curve("bad", F, a=5, d=5, order=BABYJUBJUB.order, cofactor=8, generator=(int(x), int(y)))
  assert "distinct" in str(exc.value)
  with pytest.raises(ValueError) as exc:
    Curve("bad", F, a=168700, d=168696, order=BABYJUBJUB.order, cofactor=8, generator=(5, 7))
  assert "not on the curve" in str(exc.value)
  with pytest.raises(ValueError) as exc:
    Curve("bad", F, a=168700, d=168696, order=BABYJUBJUB.order + 2, cofactor=8, generator=(int(x), int(y)))
  assert "subgroup order" in str(exc.value)
  # Odd and larger than the cofactor but composite
  with pytest.raises(ValueError) as exc:
    Curve("bad", F, a=168700, d=168696, order=3 * BABYJUBJUB.order, cofactor=8, generator=(int(x), int(y)))
  assert "must be prime" in str(exc.value)


def test_primality():
  assert is_probable_prime(F.p)
  assert is_probable_prime(BABYJUBJUB.order)
  assert is_probable_prime(ED_ON_BN254_TWIST.order)
  assert is_probable_prime(2**127 - 1)
  assert [n for n in range(40) if is_probable_prime(n)] == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37]
  assert not is_probable_prime(3 * BABYJUBJUB.order)
  assert not is_probable_prime(F.p * ED_ON_BN254_TWIST.order)
  # Carmichael numbers pass Fermat but not Miller-Rabin
  assert not is_probable_prime(561)
  assert not is_probable_prime(3215031751)
  with pytest.raises(ValueError):
    PrimeField(15)
  with pytest.raises(ValueError):
    PrimeField(ED_ON_BN254_TWIST.order * 3)


def test_get_curve():
  assert get_curve("ed_on_bn254_twist") is ED_ON_BN254_TWIST
  assert get_curve("BabyJubJub") is BABYJUBJUB
  with pytest.raises(ValueError) as exc:
    get_curve("ed25519")
  assert "Unknown curve" in str(exc.value)
