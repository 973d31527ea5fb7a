# A plain Python submodule for Jubjub curve math and the Poseidon2 permutation

# Not constant time and not zeroing buffers after use. Scalars are plain Python
# integers while field elements use the fe class.

# Public symbols are imported here. These are very low level primitives.
# Lower case constants are scalars (int or fe), upper case are EdPoints.

from . import poseidon
from .ed import L2, ZERO, EdPoint, G, a, d
from .scalar import cofactor, fe, minus1, one, p, q, zero
from .util import clamp, tobytes, tobytes_be, toint, tointsign, xof
