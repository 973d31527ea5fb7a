from __future__ import annotations

from functools import cached_property

# Field prime (BLS12-381 scalar field, the base field of Jubjub)
p = 0x73eda753299d7d483339d80809a1d80553bda402fffe5bfeffffffff00000001

# Precalculate commonly needed parts of the prime
p2 = (p - 1) // 2

# p - 1 = 2**S * T with T odd, for Tonelli-Shanks
S = ((p - 1) & -(p - 1)).bit_length() - 1
T = (p - 1) >> S

# Prime subgroup order of Jubjub
q = 0x0e7db4ea6533afa906673b0101343b00a6682093ccc81082d0970e5ed6f72cb7

# Jubjub has 8 * q points in total
cofactor = 8


class fe:
  """A prime field scalar modulo the BLS12-381 group order p"""
  def __init__(self, x: int): self.val = x % p
  def __hash__(self): return self.val
  def __repr__(self): return value_name(self)
  def __str__(self): return bytes(self).hex()
  def __bytes__(self): return self.val.to_bytes(32, 'little')
  def __int__(self): return self.val
  def bit(self, n: int): return bool(self.val & 1 << n)

  def __eq__(self, other):
    # Note: if we return NotImplemented, Python does object comparison and returns False
    if not isinstance(other, fe): raise TypeError(f"Cannot compare fe with {other!r}")
    return self.val == other.val

  def __neg__(self): return fe(-self.val)
  def __add__(self, o: fe): return fe(self.val + o.val)
  def __sub__(self, o: fe): return fe(self.val - o.val)
  def __mul__(self, o: fe): return fe(self.val * o.val)

  def __truediv__(self, o: fe) -> fe:
    """Division mod p"""
    return self if o == one else fe(self.val * o.inv.val)

  def __pow__(self, s: int) -> fe:
    return self.sq if s == 2 else fe(pow(self.val, s, p))

  @cached_property
  def inv(self) -> fe:
    if not self.val: raise ZeroDivisionError("Zero has no inverse")
    return self**-1

  @cached_property
  def is_odd(self) -> bool: return self.bit(0)

  @cached_property
  def chi(self) -> fe:
    """Legendre symbol"""
    return self**p2

  @cached_property
  def sq(self) -> fe:
    """Squared"""
    return fe(self.val * self.val)

  @cached_property
  def is_square(self) -> bool: return self == zero or self.chi == one

  @cached_property
  def sqrt(self) -> fe:
    """The even square root. Raises ValueError if there is none."""
    if not self.is_square: raise ValueError('Not a square!')
    if self == zero: return zero
    # Tonelli-Shanks, because p = 1 mod 2**32 rules out the shortcuts
    m, c, t, root = S, nonsquare**T, self**T, self**((T + 1) // 2)
    while t != one:
      i, t2 = 0, t
      while t2 != one:
        t2 = t2.sq
        i += 1
      b = c**(1 << m - i - 1)
      m, c = i, b.sq
      t, root = t * c, root * b
    assert root.sq == self
    return -root if root.is_odd else root

  def to_be(self) -> bytes:
    """Big-endian bytes, as used for all hash inputs"""
    return self.val.to_bytes(32, 'big')

  @staticmethod
  def from_be(b: bytes) -> fe:
    """Reduce big-endian bytes of any length modulo p"""
    return fe(int.from_bytes(b, 'big'))


zero, one, minus1 = fe(0), fe(1), fe(-1)

# Smallest quadratic non-residue, needed by sqrt
nonsquare = next(fe(n) for n in range(2, 100) if fe(n).chi == minus1)


def value_name(s: fe) -> str:
  """Return variable names rather than fe(...) for any constants defined here"""
  for name, val in globals().items():
    if isinstance(val, fe) and s == val:
      return name
  for name, val in globals().items():
    if isinstance(val, fe) and s == -val:
      return f"-{name}"
  return f"fe({s.val})"
