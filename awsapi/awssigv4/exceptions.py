class SigningError(Exception):
    """Base class for every failure raised by the signing core."""


class MalformedInputError(SigningError, ValueError):
    """
    The request or signing context cannot be signed, e.g. an empty method, region or service,
    or a date that is not in YYYYMMDD form.
    """


class DigestEncodingError(SigningError, TypeError):
    """A digest could not be encoded without truncating or reinterpreting it."""


class UnsupportedAlgorithmError(SigningError, ValueError):
    def __init__(self, algorithm):
        super().__init__(f"Unsupported hash algorithm: {algorithm!r}")
        self.algorithm = algorithm
