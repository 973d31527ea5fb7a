from typing import List, Sequence

from jubsig.elliptic import p, poseidon, tobytes_be
from jubsig.exceptions import HashError

CHUNK = 32
ARITY = 2


def compress(children: Sequence[int]) -> int:
  """Pairwise compression of two field elements"""
  if len(children) != ARITY:
    raise HashError(f"Expected {ARITY} children, got {len(children)}")
  return poseidon.hash2(*children)


def compress4(children: Sequence[int]) -> int:
  """Compress four elements as a two level subtree, equal to three pairwise steps"""
  if len(children) != ARITY**2:
    raise HashError(f"Expected {ARITY**2} children, got {len(children)}")
  return compress([compress(children[i:i + ARITY]) for i in range(0, ARITY**2, ARITY)])


def words(data: bytes) -> List[int]:
  """Split into 32-byte big-endian words, a short final chunk taken as a smaller number"""
  out = []
  for i in range(0, len(data), CHUNK):
    w = int.from_bytes(data[i:i + CHUNK], "big")
    if w >= p:
      raise HashError(f"Chunk {i // CHUNK} is not a canonical field element")
    out.append(w)
  return out


def fold(level: List[int]) -> List[int]:
  """Hash one tree level into the next, padding with zero partners"""
  padded = -(-len(level) // ARITY) * ARITY
  # Levels that fill whole subtrees of four go two levels at once
  n = ARITY**2 if padded % ARITY**2 == 0 else ARITY
  step = compress4 if n == ARITY**2 else compress
  level = level + [0] * (padded - len(level))
  return [step(level[i:i + n]) for i in range(0, padded, n)]


def btree_hash(data: bytes) -> bytes:
  """Hash bytes into one 32-byte big-endian digest by binary tree reduction."""
  # Empty input is the same as a single zero chunk
  level = words(data) or [0]
  level = fold(level)
  while len(level) > 1:
    level = fold(level)
  return tobytes_be(level[0])


def hash_elements(*vals: int) -> bytes:
  """Tree hash of field elements, each serialized as 32 big-endian bytes"""
  return btree_hash(b"".join(tobytes_be(v) for v in vals))
