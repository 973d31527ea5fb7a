# Poseidon2 permutation over the BLS12-381 scalar field
# https://eprint.iacr.org/2023/323

# State width 3 with x^5 S-box. Round constants come from the Grain LFSR in
# self-shrinking mode, initialised exactly as the Poseidon reference parameter
# scripts do. Plain integers are used instead of fe for speed.

from functools import lru_cache
from typing import Iterator, List, Sequence

from .scalar import p

WIDTH = 3
ALPHA = 5
FULL_ROUNDS = 8
PARTIAL_ROUNDS = 56

# Internal matrix is the all-ones matrix plus diag(INTERNAL_DIAG):
# [[2, 1, 1], [1, 2, 1], [1, 1, 3]]
INTERNAL_DIAG = (1, 1, 2)


def grain(n: int, t: int, r_f: int, r_p: int) -> Iterator[int]:
  """Bit stream of the Grain LFSR, after its 160 warm-up clocks"""
  # Header: prime field (1), x^alpha S-box (0), field size, width, round counts
  init = f"{1:02b}{0:04b}{n:012b}{t:012b}{r_f:010b}{r_p:010b}" + 30 * "1"
  bits = [int(b) for b in init]

  def clock() -> int:
    new = bits[62] ^ bits[51] ^ bits[38] ^ bits[23] ^ bits[13] ^ bits[0]
    bits.pop(0)
    bits.append(new)
    return new

  for _ in range(160):
    clock()
  # Self-shrinking: output the second bit of each pair whose first bit is set
  while True:
    if clock():
      yield clock()
    else:
      clock()


def field_elements(bits: Iterator[int], n: int) -> Iterator[int]:
  """Sample field elements by rejection from n-bit big-endian integers"""
  while True:
    x = 0
    for _ in range(n):
      x = x << 1 | next(bits)
    if x < p:
      yield x


@lru_cache(maxsize=None)
def round_constants() -> List[List[int]]:
  """One row per round: full rounds get WIDTH constants, partial rounds one."""
  n = p.bit_length()
  elements = field_elements(grain(n, WIDTH, FULL_ROUNDS, PARTIAL_ROUNDS), n)
  rows = []
  for r in range(FULL_ROUNDS + PARTIAL_ROUNDS):
    partial = FULL_ROUNDS // 2 <= r < FULL_ROUNDS // 2 + PARTIAL_ROUNDS
    rows.append([next(elements) for _ in range(1 if partial else WIDTH)])
  return rows


def external_linear(state: List[int]) -> List[int]:
  # circ(2, 1, 1): each lane plus the sum of all lanes
  s = sum(state)
  return [(x + s) % p for x in state]


def internal_linear(state: List[int]) -> List[int]:
  s = sum(state)
  return [(x * k + s) % p for x, k in zip(state, INTERNAL_DIAG)]


def permute(state: Sequence[int]) -> List[int]:
  """The Poseidon2 permutation on WIDTH field elements"""
  if len(state) != WIDTH:
    raise ValueError(f"Poseidon2 state must have {WIDTH} elements, got {len(state)}")
  rc = round_constants()
  half = FULL_ROUNDS // 2
  x = external_linear([v % p for v in state])
  for r in range(half):
    x = external_linear([pow(v + c, ALPHA, p) for v, c in zip(x, rc[r])])
  for r in range(half, half + PARTIAL_ROUNDS):
    x[0] = pow(x[0] + rc[r][0], ALPHA, p)
    x = internal_linear(x)
  for r in range(half + PARTIAL_ROUNDS, FULL_ROUNDS + PARTIAL_ROUNDS):
    x = external_linear([pow(v + c, ALPHA, p) for v, c in zip(x, rc[r])])
  return x


def hash2(left: int, right: int) -> int:
  """Two-to-one compression: lanes 1 and 2 of a zeroed state in, lane 0 out"""
  return permute([0, left, right])[0]
