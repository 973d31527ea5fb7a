import pytest

from jubsig.elliptic import p, poseidon, tobytes_be
from jubsig.exceptions import HashError
from jubsig.treehash import btree_hash, compress, compress4, hash_elements, words

# Poseidon2 reference instance for BLS12-381, t = 3: permutation of [0, 1, 2]
VECTOR_PERMUTE = [
  0x1b152349b1950b6a8ca75ee4407b6e26ca5cca5650534e56ef3fd45761fbf5f0,
  0x4c5793c87d51bdc2c08a32108437dc0000bd0275868f09ebc5f36919af5b3891,
  0x1fc8ed171e67902ca49863159fe5ba6325318843d13976143b8125f08b50dc6b,
]
VECTOR_RC0 = 0x6f007a551156b3a449e44936b7c093644a0ed33f33eaccc628e942e836c1a875


def pairwise(level):
  """Plain binary tree reduction, padding every odd level with zero"""
  level = list(level) or [0]
  while True:
    if len(level) % 2:
      level.append(0)
    level = [compress(level[i:i + 2]) for i in range(0, len(level), 2)]
    if len(level) == 1:
      return level[0]


def test_permutation():
  out = poseidon.permute([0, 0, 0])
  assert len(out) == 3
  assert out != [0, 0, 0]
  assert all(0 <= x < p for x in out)
  assert poseidon.permute([1, 2, 3]) == poseidon.permute([1, 2, 3])
  assert poseidon.permute([1, 2, 3]) != poseidon.permute([1, 2, 4])
  with pytest.raises(ValueError):
    poseidon.permute([1, 2])


def test_permutation_known_answer():
  assert poseidon.permute([0, 1, 2]) == VECTOR_PERMUTE
  assert poseidon.round_constants()[0][0] == VECTOR_RC0
  # Two to one compression keeps lane 0
  assert poseidon.hash2(1, 2) == VECTOR_PERMUTE[0]
  assert btree_hash(tobytes_be(1) + tobytes_be(2)) == tobytes_be(VECTOR_PERMUTE[0])


def matmul(matrix, state):
  return [sum(m * x for m, x in zip(row, state)) % p for row in matrix]


def test_linear_layers():
  for state in ([1, 2, 3], [p - 1, 5, 0], [7, p - 7, 123456789]):
    assert poseidon.external_linear(state) == matmul([[2, 1, 1], [1, 2, 1], [1, 1, 2]], state)
    assert poseidon.internal_linear(state) == matmul([[2, 1, 1], [1, 2, 1], [1, 1, 3]], state)


def test_internal_linear_is_injective():
  assert poseidon.internal_linear([1, 2, 3]) != poseidon.internal_linear([2, 1, 3])
  # Nothing but zero maps to zero
  assert poseidon.internal_linear([1, p - 1, 0]) != [0, 0, 0]
  assert poseidon.internal_linear([0, 0, 0]) == [0, 0, 0]
  # Swapping lanes gives a different permutation output
  assert poseidon.permute([1, 2, 3]) != poseidon.permute([2, 1, 3])
  assert poseidon.permute([0, 1, 2]) != poseidon.permute([0, 2, 1])


def test_round_constants():
  rc = poseidon.round_constants()
  assert len(rc) == poseidon.FULL_ROUNDS + poseidon.PARTIAL_ROUNDS
  assert [len(row) for row in rc].count(poseidon.WIDTH) == poseidon.FULL_ROUNDS
  assert [len(row) for row in rc].count(1) == poseidon.PARTIAL_ROUNDS
  flat = [c for row in rc for c in row]
  assert all(0 <= c < p for c in flat)
  assert len(set(flat)) == len(flat)


def test_empty_input():
  digest = btree_hash(b"")
  assert len(digest) == 32
  assert digest == btree_hash(bytes(32))
  assert digest == tobytes_be(compress([0, 0]))


def test_single_chunk_is_hashed():
  assert btree_hash(tobytes_be(5)) == tobytes_be(compress([5, 0]))
  assert btree_hash(tobytes_be(5)) != tobytes_be(5)


def test_compress4_matches_pairwise():
  assert compress4([1, 2, 3, 4]) == compress([compress([1, 2]), compress([3, 4])])
  assert hash_elements(1, 2, 3, 4) == tobytes_be(compress4([1, 2, 3, 4]))


def test_three_chunks_padded_to_four():
  assert hash_elements(6, 3, 8) == tobytes_be(compress4([6, 3, 8, 0]))


def test_tree_shapes():
  for n in range(1, 11):
    vals = list(range(100, 100 + n))
    assert hash_elements(*vals) == tobytes_be(pairwise(vals)), f"{n} chunks"


def test_odd_size():
  # 33 bytes gives a full chunk and a one byte chunk
  data = 33 * b"\x08"
  assert words(data) == [int.from_bytes(32 * b"\x08", "big"), 8]
  assert btree_hash(data) == tobytes_be(compress(words(data)))


def test_non_canonical_chunk():
  with pytest.raises(HashError) as exc:
    btree_hash(bytes(32) + b"\xff" * 32)
  assert "Chunk 1" in str(exc.value)
  with pytest.raises(HashError):
    hash_elements(p)


def test_arity_errors():
  with pytest.raises(HashError):
    compress([1])
  with pytest.raises(HashError):
    compress4([1, 2])
