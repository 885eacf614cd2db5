from .api import AwsBasicApi, AwsRequestError
from .awssigv4 import (
    DigestEncodingError,
    MalformedInputError,
    SigningError,
    UnsupportedAlgorithmError,
    add_signature_v4,
    sign_v2,
    sign_v4,
)
from .request import BasicRequest
from .version import __version__
