import base64
import hashlib
import hmac

from .exceptions import DigestEncodingError, MalformedInputError, UnsupportedAlgorithmError

# always percent-encoded, whatever their byte value
RESERVED_CHARS = frozenset(b"!#$&'()*+,/:;=?@[]%")

_SLASH = ord("/")


def _to_bytes(value):
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if value is None:
        raise MalformedInputError("Expected str or bytes, got None")
    return str(value).encode("utf-8")


def uri_encode(text, encode_slash=True):
    """
    Percent-encodes `text` byte by byte as required for canonical requests.

    Control bytes, space, DEL and everything above 0x7F are encoded as %XX (uppercase hex), as is
    every byte in RESERVED_CHARS. All other bytes pass through unchanged. Encoding is not
    idempotent: a literal "%" is always encoded, so apply it exactly once.

    :param text: str (encoded as UTF-8 first) or bytes
    :param encode_slash: set to False when encoding a URI path, where "/" separates segments
    :return: encoded str
    """
    result = []
    for byte in _to_bytes(text):
        if byte == _SLASH and not encode_slash:
            result.append("/")
        elif byte <= 0x20 or byte >= 0x7F or byte in RESERVED_CHARS:
            result.append("%%%02X" % byte)
        else:
            result.append(chr(byte))
    return "".join(result)


def encode_path(path):
    return uri_encode(path, encode_slash=False)


def _check_digest(digest):
    if not isinstance(digest, (bytes, bytearray, memoryview)):
        raise DigestEncodingError(f"Expected digest bytes, got {type(digest).__name__}")
    return bytes(digest)


def base64_encode(digest):
    return base64.b64encode(_check_digest(digest)).decode("ascii")


def hex_encode(digest):
    # bytes.hex() is always lowercase
    return _check_digest(digest).hex()


def _resolve_algorithm(algorithm):
    name = algorithm.lower()
    if name not in hashlib.algorithms_available:
        # "SHA-256" style names
        name = name.replace("-", "")
    # shake_* digests are variable length and cannot back an HMAC
    if name not in hashlib.algorithms_available or name.startswith("shake_"):
        raise UnsupportedAlgorithmError(algorithm)
    return name


def hash_digest(data, algorithm="sha256"):
    return hashlib.new(_resolve_algorithm(algorithm), _to_bytes(data)).digest()


def hmac_digest(key, data, algorithm="sha256"):
    return hmac.new(_to_bytes(key), _to_bytes(data), _resolve_algorithm(algorithm)).digest()
