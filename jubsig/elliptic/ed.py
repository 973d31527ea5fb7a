from __future__ import annotations

from functools import cached_property
from typing import Optional

from .scalar import cofactor, fe, minus1, one, p, q, zero
from .util import tobytes, tointsign

# Twisted Edwards curve: a x2 + y2 = 1 + d x2 y2
# Jubjub constants:
a, d = minus1, -fe(10240) / fe(10241)

# Points are represented as tuples (X, Y, Z, T) of extended
# coordinates, with x = X/Z, y = Y/Z, x*y = T/Z

class EdPoint:
  def __init__(self, x: fe, y: fe, z: fe = one, t: Optional[fe] = None):
    # Expand to projective coordinates for faster adds
    self.X = x
    self.Y = y
    self.Z = z
    self.T = x * y if t is None else t

  @staticmethod
  def from_bytes(b) -> EdPoint:
    """Read a compressed point: y little-endian, x parity in the high bit."""
    val, sign = tointsign(b)
    if val >= p: raise ValueError("Non-canonical y coordinate")
    return EdPoint.from_y(fe(val), sign)

  @staticmethod
  def from_y(y: fe, odd=False) -> EdPoint:
    """Restore from a y coordinate and the parity of x"""
    x2 = (y.sq - one) / (d * y.sq + one)
    if not x2.is_square: raise ValueError("Not a curve point on Jubjub")
    x = x2.sqrt
    if x == zero and odd: raise ValueError("No odd x coordinate for this y")
    return EdPoint(-x if odd else x, y)

  def __repr__(self): return point_name(self)
  def __str__(self): return bytes(self).hex()
  def __bytes__(self): return tobytes(self.y.val + (self.x.is_odd << 255))
  def __hash__(self): return hash((self.x.val, self.y.val))

  @cached_property
  def norm(self) -> EdPoint:
    """Return a normalized point, with Z=1."""
    return EdPoint(self.x, self.y)

  @cached_property
  def x(self) -> fe: return self.X / self.Z

  @cached_property
  def y(self) -> fe: return self.Y / self.Z

  @cached_property
  def is_zero(self) -> bool: return self == ZERO

  @cached_property
  def is_on_curve(self) -> bool:
    """Check the affine curve equation"""
    x2, y2 = self.x.sq, self.y.sq
    return a * x2 + y2 == one + d * x2 * y2

  @cached_property
  def is_prime_group(self) -> bool:
    """True for points of the q-order subgroup, other than ZERO"""
    return self.is_on_curve and not self.is_zero and (q * self).is_zero

  def __add__(self, othr: EdPoint) -> EdPoint:
    if not isinstance(othr, EdPoint): return NotImplemented
    A = (self.Y - self.X) * (othr.Y - othr.X)
    B = (self.Y + self.X) * (othr.Y + othr.X)
    C = fe(2) * self.T * othr.T * d
    D = fe(2) * self.Z * othr.Z
    E, F, G, H = B - A, D - C, D + C, B + A
    return EdPoint(E * F, G * H, F * G, E * H)

  def __sub__(self, othr: EdPoint) -> EdPoint:
    return self + -othr

  def __neg__(self) -> EdPoint:
    return EdPoint(-self.X, self.Y, self.Z, -self.T)

  def double(self) -> EdPoint:
    return self + self

  def clear_cofactor(self) -> EdPoint:
    """Multiply by the cofactor with repeated doubling."""
    P = self
    for _ in range(cofactor.bit_length() - 1):
      P = P.double()
    return P

  def __mul__(self, s: int) -> EdPoint:
    """Multiply the point by scalar."""
    if not isinstance(s, int): return NotImplemented
    Q = ZERO  # Neutral element
    P = self
    # Modulo the full group order so that points outside the prime group work too
    s %= cofactor * q
    while s > 0:
      if s & 1: Q += P
      P += P
      s >>= 1
    return Q.norm

  def __rmul__(self, s: int) -> EdPoint:
    return self * s

  def __eq__(self, othr):
    if not isinstance(othr, EdPoint): raise TypeError(f"EdPoints cannot be compared with {type(othr)}")
    # x1 / z1 == x2 / z2  <==>  x1 * z2 == x2 * z1
    return (
      (self.X * othr.Z - othr.X * self.Z) == zero and
      (self.Y * othr.Z - othr.Y * self.Z) == zero
    )

# Neutral element
ZERO = EdPoint(zero, one)

# Base point (prime group generator, as used by arkworks ed_on_bls12_381)
G = EdPoint(
  fe(8076246640662884909881801758704306714034609987455869804520522091855516602923),
  fe(13262374693698910701929044844600465831413122818447359594527400194675274060458),
)
assert G.is_on_curve

# The point of order two
L2 = EdPoint(zero, minus1)


def point_name(P: EdPoint) -> str:
  """Return variable names rather than xy coordinates for any constants defined here"""
  for name, val in globals().items():
    if isinstance(val, EdPoint) and P == val:
      return name
  return f"EdPoint({P.x!r}, {P.y!r})"
