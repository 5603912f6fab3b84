"""
Poseidon permutation and duplex sponge over a prime field.

Round constants and the MDS matrix come from the Grain LFSR exactly as in
arkworks' `find_poseidon_ark_and_mds`, and the sponge follows arkworks'
`PoseidonSponge` (capacity elements first, permutation on a mode switch or
a full rate), so that the same configuration hashes identically here and in
arkworks circuits and gadgets.

A `PoseidonConfig` is immutable. Every hash builds its own `PoseidonSponge`,
so one config may be shared by any number of threads.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .field import PrimeField, fe

logger = logging.getLogger(__name__)


class GrainLFSR:
  """The 80-bit Grain LFSR of the Poseidon paper, self-shrinking output."""

  def __init__(self, prime_bits: int, state_len: int, full_rounds: int, partial_rounds: int, inverse_sbox=False):
    self.prime_bits = prime_bits
    state = [False] * 80
    # b0, b1 describe the field (prime field)
    state[1] = True
    # b2..b5 describe the S-box
    state[5] = inverse_sbox
    # Big endian fields: n in b6..b17, t in b18..b29, R_F in b30..b39, R_P in b40..b49
    for start, end, value in ((6, 17, prime_bits), (18, 29, state_len), (30, 39, full_rounds), (40, 49, partial_rounds)):
      for i in range(end, start - 1, -1):
        state[i] = bool(value & 1)
        value >>= 1
    # b50..b79 are set to 1
    for i in range(50, 80):
      state[i] = True
    self.state = state
    self.head = 0
    for _ in range(160):
      self._update()

  def _update(self) -> bool:
    s, h = self.state, self.head
    bit = s[(h + 62) % 80] ^ s[(h + 51) % 80] ^ s[(h + 38) % 80] ^ s[(h + 23) % 80] ^ s[(h + 13) % 80] ^ s[h]
    s[h] = bit
    self.head = (h + 1) % 80
    return bit

  def get_bits(self, n: int) -> List[bool]:
    bits = []
    for _ in range(n):
      # Output the second bit of a pair only when the first one is set
      while not self._update():
        self._update()
      bits.append(self._update())
    return bits

  def _next_int(self) -> int:
    # The first bit produced is the most significant
    val = 0
    for bit in self.get_bits(self.prime_bits):
      val = val << 1 | bit
    return val

  def field_elements_rejection_sampling(self, field: PrimeField, n: int) -> List[int]:
    assert field.bits == self.prime_bits
    out = []
    for _ in range(n):
      while (val := self._next_int()) >= field.p:
        pass
      out.append(val)
    return out

  def field_elements_mod_p(self, field: PrimeField, n: int) -> List[int]:
    assert field.bits == self.prime_bits
    return [self._next_int() % field.p for _ in range(n)]


def find_ark_and_mds(field: PrimeField, rate: int, full_rounds: int, partial_rounds: int,
                     skip_matrices: int = 0) -> Tuple[List[List[int]], List[List[int]]]:
  """Generate round constants and a Cauchy MDS matrix for capacity 1."""
  width = rate + 1
  lfsr = GrainLFSR(field.bits, width, full_rounds, partial_rounds)
  ark = [lfsr.field_elements_rejection_sampling(field, width) for _ in range(full_rounds + partial_rounds)]
  for _ in range(skip_matrices):
    lfsr.field_elements_mod_p(field, 2 * width)
  xs = lfsr.field_elements_mod_p(field, width)
  ys = lfsr.field_elements_mod_p(field, width)
  mds = [[pow(x + y, -1, field.p) for y in ys] for x in xs]
  return ark, mds


@dataclass(frozen=True)
class PoseidonConfig:
  """Sponge parameters; construct once per (field, rate, capacity, rounds) choice."""
  field: PrimeField
  full_rounds: int
  partial_rounds: int
  alpha: int
  mds: Tuple[Tuple[int, ...], ...]
  ark: Tuple[Tuple[int, ...], ...]
  rate: int
  capacity: int

  def __post_init__(self):
    width = self.rate + self.capacity
    if self.rate < 1 or self.capacity < 1:
      raise ValueError("Poseidon rate and capacity must be positive")
    if self.full_rounds < 2 or self.full_rounds % 2:
      raise ValueError("Poseidon full rounds must be even and at least 2")
    if self.alpha < 3:
      raise ValueError("Poseidon S-box exponent must be at least 3")
    if len(self.mds) != width or any(len(row) != width for row in self.mds):
      raise ValueError(f"Poseidon MDS matrix must be {width}x{width}")
    if len(self.ark) != self.full_rounds + self.partial_rounds or any(len(row) != width for row in self.ark):
      raise ValueError(f"Poseidon needs {width} round constants for each of the {self.full_rounds + self.partial_rounds} rounds")

  @property
  def width(self) -> int:
    return self.rate + self.capacity


def poseidon_config(field: PrimeField, rate: int = 5, full_rounds: int = 8, partial_rounds: int = 60,
                    alpha: int = 5, capacity: int = 1) -> PoseidonConfig:
  """Generate a config with Grain LFSR constants (arkworks compatible for capacity 1)."""
  if capacity != 1:
    raise ValueError("Constant generation is only defined for capacity 1")
  logger.debug("Generating Poseidon constants for %s: rate=%d R_F=%d R_P=%d", field, rate, full_rounds, partial_rounds)
  ark, mds = find_ark_and_mds(field, rate, full_rounds, partial_rounds)
  return PoseidonConfig(
    field=field,
    full_rounds=full_rounds,
    partial_rounds=partial_rounds,
    alpha=alpha,
    mds=tuple(tuple(row) for row in mds),
    ark=tuple(tuple(row) for row in ark),
    rate=rate,
    capacity=capacity,
  )


def permute(config: PoseidonConfig, state: Sequence[int]) -> List[int]:
  p, alpha = config.field.p, config.alpha
  half = config.full_rounds // 2
  state = list(state)
  for i, rc in enumerate(config.ark):
    state = [(s + c) % p for s, c in zip(state, rc)]
    if i < half or i >= half + config.partial_rounds:
      state = [pow(s, alpha, p) for s in state]
    else:
      state[0] = pow(state[0], alpha, p)
    state = [sum(m * s for m, s in zip(row, state)) % p for row in config.mds]
  return state


class PoseidonSponge:
  """Duplex sponge with the absorb/squeeze modes of arkworks."""

  def __init__(self, config: PoseidonConfig):
    self.config = config
    self.state = [0] * config.width
    self.absorbing = True
    self.index = 0  # next absorb or squeeze position within the rate

  def _permute(self):
    self.state = permute(self.config, self.state)

  def absorb(self, *elements: fe) -> PoseidonSponge:
    F, cap, rate = self.config.field, self.config.capacity, self.config.rate
    vals = []
    for x in elements:
      if not isinstance(x, fe) or x.field != F: raise TypeError(f"Sponge over {F} cannot absorb {x!r}")
      vals.append(x.val)
    if not vals: return self
    if not self.absorbing:
      self._permute()
      self.absorbing, self.index = True, 0
    elif self.index == rate:
      self._permute()
      self.index = 0
    for v in vals:
      if self.index == rate:
        self._permute()
        self.index = 0
      self.state[cap + self.index] = (self.state[cap + self.index] + v) % F.p
      self.index += 1
    return self

  def squeeze_native_field_elements(self, n: int) -> List[fe]:
    F, cap, rate = self.config.field, self.config.capacity, self.config.rate
    out: List[fe] = []
    if n <= 0: return out
    if self.absorbing:
      self._permute()
      self.absorbing, self.index = False, 0
    elif self.index == rate:
      self._permute()
      self.index = 0
    for _ in range(n):
      if self.index == rate:
        self._permute()
        self.index = 0
      out.append(F(self.state[cap + self.index]))
      self.index += 1
    return out

  def squeeze(self) -> fe:
    return self.squeeze_native_field_elements(1)[0]


def poseidon_hash(config: PoseidonConfig, elements: Iterable[fe]) -> fe:
  """Absorb all elements and squeeze one."""
  return PoseidonSponge(config).absorb(*elements).squeeze()
