from secrets import randbelow, token_bytes

import pytest

from jubsig.codec import (
  decode_hex, decode_pk, decode_sig, encode_hex, encode_pk, encode_sig, verify_bytes
)
from jubsig.eddsa import Signature, sign
from jubsig.elliptic import G, p, q, tobytes
from jubsig.exceptions import EncodingError
from jubsig.keys import PrivateKey

# Produced by another implementation of the same scheme (arkworks)
VECTOR_PK = "f665c0823d48ce22183b3a0cc19bc6eaa219d9f8523703add9cb65a863b07eb0"
VECTOR_SIG = (
  "4d4d74db1fca0babdb62092456e84dc48bea4f7bd1856e70e25035ecb18358bf"
  "98c2baf22828897eaaba7424bb907a27b33fb966ba97619c4f3ed8651dc3cb08"
)


def test_roundtrip():
  with PrivateKey.random() as sk:
    pk = sk.public()
    sig = sign(sk, randbelow(p))
  pkb, sigb = encode_pk(pk), encode_sig(sig)
  assert len(pkb) == 32
  assert len(sigb) == 64
  assert pkb == bytes(pk)
  assert sigb == bytes(sig)
  assert decode_pk(pkb) == pk
  assert decode_sig(sigb) == sig
  # Sign of x in the top bit of the last byte
  assert pkb[31] >> 7 == pk.x.is_odd
  assert sigb[32:] == tobytes(sig.s)


def test_other_implementation_vector():
  pk = decode_pk(bytes.fromhex(VECTOR_PK))
  sig = decode_sig(bytes.fromhex(VECTOR_SIG))
  assert pk.point.is_prime_group
  assert sig.R.is_prime_group
  assert sig.s < q
  assert encode_pk(pk).hex() == VECTOR_PK
  assert encode_sig(sig).hex() == VECTOR_SIG


def test_lengths():
  for n in (0, 31, 33, 64):
    with pytest.raises(EncodingError):
      decode_pk(bytes(n))
  for n in (0, 32, 63, 65):
    with pytest.raises(EncodingError):
      decode_sig(bytes(n))


def test_invalid_points():
  with pytest.raises(EncodingError) as exc:
    decode_pk(tobytes(p))
  assert "Non-canonical" in str(exc.value)
  # Find a y with no matching x
  y = next(y for y in range(2, 100) if not verify_decodable(tobytes(y)))
  with pytest.raises(EncodingError):
    decode_pk(tobytes(y))
  with pytest.raises(EncodingError):
    decode_sig(tobytes(y) + tobytes(1))


def verify_decodable(b):
  try:
    decode_pk(b)
  except EncodingError:
    return False
  return True


def test_oversized_scalar():
  for s in (1 << 256, -1):
    with pytest.raises(EncodingError) as exc:
      encode_sig(Signature(G, s))
    message = str(exc.value)
    # bytes() of the signature fails the same way
    with pytest.raises(EncodingError) as exc:
      bytes(Signature(G, s))
    assert str(exc.value) == message
  # Unreduced but still 32 bytes wide
  assert bytes(Signature(G, q + 1))[32:] == tobytes(q + 1)


def test_verify_bytes_garbage():
  with PrivateKey(token_bytes(32)) as sk:
    pk = encode_pk(sk.public())
    sig = encode_sig(sign(sk, 5))
  assert verify_bytes(pk, 5, sig)
  assert not verify_bytes(pk, 5, sig[:63])
  assert not verify_bytes(pk[:31], 5, sig)
  assert not verify_bytes(tobytes(p), 5, sig)


def test_hex():
  b = token_bytes(32)
  assert decode_hex(encode_hex(b), 32, "key") == b
  assert decode_hex(f"  0x{b.hex().upper()}\n", 32, "key") == b
  with pytest.raises(EncodingError) as exc:
    decode_hex("abc", 32, "public key")
  assert "Invalid hex in public key" == str(exc.value)
  with pytest.raises(EncodingError) as exc:
    decode_hex("ab", 32, "public key")
  assert "Public key must be 32 bytes, got 1" == str(exc.value)
