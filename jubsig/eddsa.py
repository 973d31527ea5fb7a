import logging
from typing import NamedTuple, Union

from jubsig.elliptic import EdPoint, G, fe, p, q, tobytes, tobytes_be, xof
from jubsig.exceptions import EncodingError
from jubsig.keys import PrivateKey, PublicKey
from jubsig.treehash import hash_elements

log = logging.getLogger(__name__)

# EdDSA over Jubjub with a Poseidon2 tree hash challenge, so that signatures can
# be checked inside BLS12-381 arithmetic circuits.
#
#   A = a * G                    a clamped from BLAKE3(seed)[:32]
#   r = BLAKE3(dst, n, m) mod q  n from BLAKE3(seed)[32:]
#   R = r * G
#   c = H(R.x, R.y, A.x, A.y, m) H is the tree hash, read as a base field element
#   s = r + c * a mod q
#
# Verification is cofactored: 8 * (s * G - R - c * A) == ZERO

# Domain separation tag of nonce derivation, reduced into the base field
DST_NONCE = b"TokamakAuth\xe2\x80\x91EDDSA\xe2\x80\x91NONCE\xe2\x80\x91v1"
dst_nonce = fe.from_be(DST_NONCE)

Message = Union[int, fe]


class Signature(NamedTuple):
  R: EdPoint
  s: int

  def __bytes__(self):
    try:
      s = tobytes(self.s)
    except OverflowError:
      raise EncodingError("Signature scalar does not fit in 32 bytes") from None
    return bytes(self.R) + s

  def __repr__(self):
    return f"Signature[{bytes(self.R).hex()[:8]}:{self.s:x}]"


def message_fe(message: Message) -> fe:
  """Messages are base field elements, integers must already be reduced."""
  if isinstance(message, fe): return message
  if not isinstance(message, int) or not 0 <= message < p:
    raise ValueError(f"Message must be a field element below p, got {message!r}")
  return fe(message)


def base_to_scalar(f: fe) -> int:
  """Reinterpret a base field element as a scalar via its little-endian bytes"""
  return int.from_bytes(bytes(f), "little") % q


def derive_nonce(message: fe, nonce_seed: int) -> int:
  """The deterministic per-message secret r"""
  h = xof(dst_nonce.to_be(), tobytes_be(nonce_seed), message.to_be(), length=64)
  return int.from_bytes(h, "big") % q


def challenge(message: fe, R: EdPoint, A: EdPoint) -> int:
  """Fiat-Shamir challenge binding the nonce point, the public key and the message"""
  digest = hash_elements(R.x.val, R.y.val, A.x.val, A.y.val, message.val)
  return base_to_scalar(fe.from_be(digest))


def sign(sk: PrivateKey, message: Message) -> Signature:
  m = message_fe(message)
  a, nonce_seed = sk.expand()
  A = a * G
  r = derive_nonce(m, nonce_seed)
  R = r * G
  c = challenge(m, R, A)
  s = (r + c * a) % q
  log.debug("Signed message with %r", PublicKey(A))
  return Signature(R, s)


def verify(pk: PublicKey, message: Message, signature: Signature) -> bool:
  R, s = signature
  if not 0 <= s < q:
    log.debug("Signature rejected: s out of range")
    return False
  A = pk.point
  if A.is_zero or not A.is_on_curve:
    log.debug("Signature rejected: invalid public key")
    return False
  if not R.is_on_curve:
    log.debug("Signature rejected: R is not on the curve")
    return False
  try:
    m = message_fe(message)
  except ValueError:
    log.debug("Signature rejected: message is not a field element")
    return False
  c = challenge(m, R, A)
  # Small subgroup components of R and A vanish when multiplied by the cofactor
  if not (s * G - R - c * A).clear_cofactor().is_zero:
    log.debug("Signature rejected: mismatch")
    return False
  return True
