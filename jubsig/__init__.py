"""EdDSA signatures on the Jubjub curve with a Poseidon2 challenge hash."""

from jubsig.codec import decode_pk, decode_sig, encode_pk, encode_sig, verify_bytes
from jubsig.eddsa import Signature, sign, verify
from jubsig.exceptions import EncodingError, HashError, MalformedKeyError
from jubsig.keys import PrivateKey, PublicKey

__version__ = "0.1.0"
