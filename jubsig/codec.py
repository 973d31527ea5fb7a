from jubsig.eddsa import Message, Signature, verify
from jubsig.elliptic import EdPoint, toint
from jubsig.exceptions import EncodingError
from jubsig.keys import PublicKey

PK_BYTES = 32
SIG_BYTES = 64

# Points are stored as y in little-endian with the parity of x in bit 255. The
# field prime is below 2**255 so that bit is never used by y itself.


def encode_point(P: EdPoint) -> bytes:
  b = bytes(P)
  if len(b) != PK_BYTES:
    raise EncodingError(f"Point encoding must be {PK_BYTES} bytes, got {len(b)}")
  return b


def decode_point(b: bytes) -> EdPoint:
  if len(b) != PK_BYTES:
    raise EncodingError(f"Point encoding must be {PK_BYTES} bytes, got {len(b)}")
  try:
    return EdPoint.from_bytes(bytes(b))
  except ValueError as e:
    raise EncodingError(f"Invalid point: {e}") from e


def encode_pk(pk: PublicKey) -> bytes:
  return encode_point(pk.point)


def decode_pk(b: bytes) -> PublicKey:
  return PublicKey(decode_point(b))


def encode_sig(sig: Signature) -> bytes:
  b = bytes(sig)
  if len(b) != SIG_BYTES:
    raise EncodingError(f"Signature encoding must be {SIG_BYTES} bytes, got {len(b)}")
  return b


def decode_sig(b: bytes) -> Signature:
  """Decode R and s. The range of s is left for verify to check."""
  if len(b) != SIG_BYTES:
    raise EncodingError(f"Signature must be {SIG_BYTES} bytes, got {len(b)}")
  return Signature(decode_point(b[:32]), toint(bytes(b[32:])))


def verify_bytes(pk: bytes, message: Message, signature: bytes) -> bool:
  """Verify compressed inputs, treating anything undecodable as a bad signature."""
  try:
    return verify(decode_pk(pk), message, decode_sig(signature))
  except EncodingError:
    return False


def encode_hex(b: bytes) -> str:
  return bytes(b).hex()


def decode_hex(s: str, size: int, what: str) -> bytes:
  """Hex text of exactly size bytes, 0x prefix and surrounding whitespace allowed"""
  s = s.strip()
  if s.lower().startswith("0x"): s = s[2:]
  try:
    b = bytes.fromhex(s)
  except ValueError:
    raise EncodingError(f"Invalid hex in {what}") from None
  if len(b) != size:
    raise EncodingError(f"{what.capitalize()} must be {size} bytes, got {len(b)}")
  return b
