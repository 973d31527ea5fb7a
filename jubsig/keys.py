import logging
from typing import Callable, Optional, Tuple

import nacl.utils

from jubsig.elliptic import EdPoint, G, clamp, q, xof
from jubsig.exceptions import MalformedKeyError

log = logging.getLogger(__name__)

SEED_BYTES = 32


def expand_seed(seed: bytes) -> Tuple[int, int]:
  """
  Expand a 32-byte seed into the signing scalar and the nonce seed.

  The seed is stretched to 64 bytes with BLAKE3. The low half is clamped and
  becomes the signing scalar, the high half becomes the nonce seed. Both halves
  are read little-endian and reduced modulo q.
  """
  h = xof(seed, length=64)
  a = clamp(int.from_bytes(h[:32], "little")) % q
  nonce_seed = int.from_bytes(h[32:], "little") % q
  return a, nonce_seed


class PublicKey:
  """A Jubjub point that signatures are verified against."""

  def __init__(self, point: EdPoint):
    self.point = point.norm

  def __eq__(self, other):
    if not isinstance(other, PublicKey): return NotImplemented
    return self.point == other.point

  def __hash__(self):
    return hash(self.point)

  def __bytes__(self):
    return bytes(self.point)

  def __repr__(self):
    return f"PublicKey[{bytes(self).hex()[:8]}]"

  @property
  def x(self): return self.point.x

  @property
  def y(self): return self.point.y


class PrivateKey:
  """
  A 32-byte signing seed, kept in a buffer that is zeroed by wipe().

  Use as a context manager to wipe on every exit path:

    with PrivateKey.random() as sk:
      sig = sign(sk, message)

  Objects not used that way are wiped when garbage collected.
  """

  def __init__(self, seed: bytes):
    if len(seed) != SEED_BYTES:
      raise MalformedKeyError(f"Private key must be {SEED_BYTES} bytes, got {len(seed)}")
    self._seed: Optional[bytearray] = bytearray(seed)
    self._public: Optional[PublicKey] = None

  @staticmethod
  def from_bytes(seed: bytes) -> "PrivateKey":
    return PrivateKey(seed)

  @staticmethod
  def random(rng: Callable[[int], bytes] = nacl.utils.random) -> "PrivateKey":
    """Generate a new key from a cryptographically secure random source."""
    sk = PrivateKey(rng(SEED_BYTES))
    log.debug("Generated %r", sk)
    return sk

  @property
  def seed(self) -> bytearray:
    if self._seed is None:
      raise MalformedKeyError("Private key has been wiped")
    return self._seed

  def __bytes__(self):
    """Explicit export of the seed"""
    return bytes(self.seed)

  def __repr__(self):
    if self._seed is None:
      return "PrivateKey[wiped]"
    return f"PrivateKey[{bytes(self.public()).hex()[:8]}:SK]"

  def __eq__(self, other):
    # Key comparison is by public keys, a wiped key only equals itself
    if not isinstance(other, PrivateKey): return NotImplemented
    if self.wiped or other.wiped: return self is other
    return self.public() == other.public()

  def __hash__(self):
    # Stays the same after wipe, which keeps the derived public key
    if not self.wiped:
      self.public()
    if self._public is None:
      return object.__hash__(self)
    return hash(self._public)

  def expand(self) -> Tuple[int, int]:
    """The signing scalar and the nonce seed"""
    return expand_seed(self.seed)

  def public(self) -> PublicKey:
    if self._public is None or self.wiped:
      a, _ = self.expand()
      self._public = PublicKey(a * G)
    return self._public

  def wipe(self):
    """Zero the seed buffer in place and disable the key."""
    # Also reached from __del__ of a half-constructed object
    if getattr(self, "_seed", None) is not None:
      self._seed[:] = bytes(len(self._seed))
      self._seed = None

  @property
  def wiped(self) -> bool:
    return self._seed is None

  def __enter__(self):
    return self

  def __exit__(self, *exc):
    self.wipe()

  def __del__(self):
    self.wipe()
