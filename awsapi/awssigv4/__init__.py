from .encoding import base64_encode, encode_path, hash_digest, hex_encode, hmac_digest, uri_encode
from .exceptions import DigestEncodingError, MalformedInputError, SigningError, UnsupportedAlgorithmError
from .sigv4 import (
    AWS4_REQUEST,
    add_signature_v4,
    authorization_header,
    canonical_headers,
    canonical_query_string,
    canonical_request,
    credential_scope,
    derive_signing_key,
    format_amz_date,
    get_string_to_sign,
    payload_hash,
    sign_v2,
    sign_v4,
)
