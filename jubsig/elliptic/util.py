from typing import Tuple

import blake3


def clamp(x: int) -> int:
  """EdDSA clamping for scalars (from the expanded seed)"""
  # 256 bits 01[x]000  (using 251 bits of x, masking on/off others)

  # The three low bits are cleared to make the scalar a multiple of the cofactor,
  # the top bit is cleared and the one below it set for a fixed bit length.
  return x & (1 << 255) - 8 | 1 << 254


def toint(x) -> int:
  if isinstance(x, int): return x
  if len(x) != 32: raise ValueError("Should be exactly 32 bytes")
  return int.from_bytes(x, "little")

def tointsign(x) -> Tuple[int, bool]:
  """Separate the 255 bit integer and its high bit as a sign, return both."""
  val = toint(x)
  sign = val & 1 << 255
  return val ^ sign, bool(sign)

def tobytes(x: int) -> bytes:
  return x.to_bytes(32, "little")

def tobytes_be(x: int) -> bytes:
  return x.to_bytes(32, "big")


def xof(*parts: bytes, length: int = 64) -> bytes:
  """BLAKE3 in extendable output mode over the concatenation of parts"""
  h = blake3.blake3()
  for part in parts:
    h.update(part)
  return h.digest(length=length)
