from datetime import datetime, timezone

from ..logging import root_logger
from .encoding import base64_encode, hash_digest, hex_encode, hmac_digest, uri_encode
from .exceptions import MalformedInputError

logger = root_logger.getChild(__name__)

ALGORITHM = "AWS4-HMAC-SHA256"
AWS4_REQUEST = "aws4_request"
AMZ_DATE_FORMAT = "%Y%m%dT%H%M%SZ"


def _require(name, value):
    if not isinstance(value, str) or not value.strip():
        raise MalformedInputError(f"{name} must be a non-empty string, got {value!r}")
    return value


def _scope_date(date):
    _require("date", date)
    date = date[:8]
    if len(date) != 8 or not (date.isascii() and date.isdigit()):
        raise MalformedInputError(f"date must start with YYYYMMDD, got {date!r}")
    return date


def format_amz_date(timestamp=None):
    """
    Formats `timestamp` as YYYYMMDDTHHMMSSZ. Naive datetimes are taken as UTC, aware ones are
    converted to UTC. None means now.
    """
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)
    elif not isinstance(timestamp, datetime):
        raise MalformedInputError(f"timestamp must be a datetime, got {type(timestamp).__name__}")
    elif timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)
    return timestamp.strftime(AMZ_DATE_FORMAT)


def credential_scope(date, region, service):
    return "/".join([_scope_date(date), _require("region", region), _require("service", service), AWS4_REQUEST])


def canonical_headers(headers):
    """
    Lowercases header names, strips values and sorts the pairs.

    :param headers: list of (name, value) pairs, duplicates allowed
    :return: tuple of canonical headers ("name:value\\n" per header) and signed headers
        (";"-joined names in the same order)
    """
    headers_to_sign = sorted((name.lower(), value.strip()) for name, value in headers)
    canonical = "".join(f"{name}:{value}\n" for name, value in headers_to_sign)
    signed = ";".join(name for name, _ in headers_to_sign)
    return canonical, signed


def canonical_query_string(params):
    # a None value is sent as an empty one
    params = sorted((name, "" if value is None else value) for name, value in params)
    return "&".join(f"{uri_encode(name)}={uri_encode(value)}" for name, value in params)


def payload_hash(payload):
    return hex_encode(hash_digest(payload, "sha256"))


def canonical_request(request):
    """
    Builds the canonical request for `request`.

    The relative uri is used as given (empty means "/"); callers encoding raw path segments should
    use `encode_path` first.

    :return: tuple of the canonical request and the signed headers list
    """
    method = _require("method", request.method)
    headers, signed_headers = canonical_headers(request.headers)
    cr = [method]
    cr.append(request.relative_uri or "/")
    cr.append(canonical_query_string(request.query_params))
    cr.append(headers)
    cr.append(signed_headers)
    cr.append(payload_hash(request.payload))
    cr = "\n".join(cr)
    logger.debug("Canonical request:\n%s", cr)
    return cr, signed_headers


def get_string_to_sign(amz_date, scope, canonical_req):
    sts = [ALGORITHM]
    sts.append(amz_date)
    sts.append(scope)
    sts.append(hex_encode(hash_digest(canonical_req, "sha256")))
    return "\n".join(sts)


def derive_signing_key(secret_key, date, region, service, terminator):
    """
    Derives the signing key valid for a single credential scope.

    Only the first eight characters of `date` are used, so a full amz date may be passed.
    """
    _require("secret_key", secret_key)
    k_date = hmac_digest(("AWS4" + secret_key).encode("utf-8"), _scope_date(date))
    k_region = hmac_digest(k_date, _require("region", region))
    k_service = hmac_digest(k_region, _require("service", service))
    return hmac_digest(k_service, _require("terminator", terminator))


def sign_v4(string_to_sign, secret_key, date, region, service, terminator):
    signing_key = derive_signing_key(secret_key, date, region, service, terminator)
    return hex_encode(hmac_digest(signing_key, string_to_sign, "sha256"))


def sign_v2(string_to_sign, secret_key):
    """Legacy signature: Base64 of HMAC-SHA1 over `string_to_sign` keyed with the secret key."""
    if not secret_key:
        raise MalformedInputError("secret_key must not be empty")
    return base64_encode(hmac_digest(secret_key, string_to_sign, "sha1"))


def authorization_header(access_key_id, scope, signed_headers, signature):
    result = [f"{ALGORITHM} Credential={access_key_id}/{scope}"]
    result.append(f"SignedHeaders={signed_headers}")
    result.append(f"Signature={signature}")
    return ", ".join(result)


def add_signature_v4(request, service, region, access_key_id, secret_key, timestamp=None):
    """
    Signs `request` in place with Signature Version 4.

    Appends an X-Amz-Date header followed by the Authorization header. Every argument is validated
    before the request is touched, so a MalformedInputError leaves it unchanged.

    :return: the same request
    """
    _require("method", request.method)
    _require("access_key_id", access_key_id)
    _require("secret_key", secret_key)
    amz_date = format_amz_date(timestamp)
    scope = credential_scope(amz_date, region, service)

    request.add_header("X-Amz-Date", amz_date)
    cr, signed_headers = canonical_request(request)
    sts = get_string_to_sign(amz_date, scope, cr)
    signature = sign_v4(sts, secret_key, amz_date, region, service, AWS4_REQUEST)
    request.add_header("Authorization", authorization_header(access_key_id, scope, signed_headers, signature))
    logger.debug("Signed %s %s for %s", request.method, request.relative_uri or "/", scope)
    return request
