class MalformedKeyError(ValueError):
  """Key material is of the wrong size or has already been wiped"""

class EncodingError(ValueError):
  """Compressed key or signature bytes cannot be encoded or decoded"""

class HashError(ValueError):
  """Tree hash input does not split into canonical field elements"""
