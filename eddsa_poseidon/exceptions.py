class SignatureError(ValueError):
  """Signature scheme failure reported to the caller"""

class VerifyError(SignatureError):
  """Signature verification failed"""

  def __init__(self, msg="Signature verification failed"):
    super().__init__(msg)

class BadDigestOutput(SignatureError):
  """The key derivation digest is too short for the scalar field"""

  def __init__(self, msg="Bad digest output size"):
    super().__init__(msg)

class MalformedKeyError(ValueError):
  """Key string is malformed or keyfile is unsupported/corrupt"""

class ChunkWidthError(RuntimeError):
  """Invalid chunk widths for re-encoding into a field (a configuration error, not bad input)"""

class CliArgError(ValueError):
  """Invalid CLI argument"""
