import httpx

from .awssigv4 import MalformedInputError, add_signature_v4, canonical_query_string, uri_encode
from .config import settings
from .http_client import AsyncHttpClient
from .logging import root_logger
from .request import BasicRequest
from .xml_helpers import extract

logger = root_logger.getChild(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=utf-8"


class AwsRequestError(Exception):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class AwsBasicApi:
    """
    Minimal client for AWS query APIs (EC2, SQS, SNS, ...): builds V4-signed GET and POST requests and
    returns a single value selected from the XML response.
    """

    def __init__(self, http_client=None, timeout=None, retries=None):
        self._http_client = http_client
        self.timeout = settings.REQUEST_TIMEOUT if timeout is None else timeout
        self.retries = settings.REQUEST_RETRIES if retries is None else retries
        self.service_name = None
        self.protocol = None
        self.region = None
        self.service_host = None
        self.service_uri = None
        self.access_key_id = None
        self.secret_key = None

    def set_service(self, service_name, protocol="https", region="us-east-1"):
        self.service_name = service_name
        self.protocol = protocol
        self.region = region
        self.service_host = f"{service_name}.{region}.amazonaws.com"
        self.service_uri = f"{protocol}://{self.service_host}/"

    def set_credentials(self, access_key_id, secret_key):
        self.access_key_id = access_key_id
        self.secret_key = secret_key

    def _check_configured(self):
        if self.service_host is None:
            raise MalformedInputError("service is not set, call set_service() first")
        if not self.access_key_id or not self.secret_key:
            raise MalformedInputError("credentials are not set, call set_credentials() first")

    def _sign(self, request, timestamp):
        return add_signature_v4(
            request, self.service_name, self.region, self.access_key_id, self.secret_key, timestamp
        )

    def sign_post(self, params, timestamp=None):
        """
        Builds a signed form POST. Values are percent-encoded, keys are sent as given and the
        parameter order is kept.
        """
        self._check_configured()
        payload = "&".join(f"{key}={uri_encode(value)}" for key, value in params)
        request = BasicRequest(
            method="POST",
            relative_uri="",
            headers=[("Host", self.service_host), ("Content-Type", FORM_CONTENT_TYPE)],
            payload=payload,
        )
        return self._sign(request, timestamp)

    def sign_get(self, params, timestamp=None):
        self._check_configured()
        request = BasicRequest(
            method="GET",
            relative_uri="",
            query_params=params,
            headers=[("Host", self.service_host)],
        )
        return self._sign(request, timestamp)

    def _get_http_client(self):
        if self._http_client is None:
            self._http_client = AsyncHttpClient(base_url=self.service_uri)
        return self._http_client

    async def close(self):
        if self._http_client is not None:
            await self._http_client.close_session()

    async def _perform(self, request, result_selector):
        http_client = self._get_http_client()
        url = self.service_uri + request.relative_uri.lstrip("/")
        if request.query_params:
            # send the query exactly as it was signed
            url += "?" + canonical_query_string(request.query_params)
        last_error = None
        status_code = None
        for attempt in range(1, self.retries + 1):
            try:
                response = await http_client.request(
                    request.method,
                    url,
                    headers=request.headers,
                    content=request.payload or None,
                    timeout=self.timeout,
                )
            except httpx.HTTPError as e:
                last_error = e
                logger.warning("Error on request to %s (attempt %d/%d)", url, attempt, self.retries, exc_info=e)
                continue
            last_error = None
            if response.status_code == 200:
                return extract(response.text, result_selector)
            status_code = response.status_code
            logger.warning(
                "Request to %s failed with status %d (attempt %d/%d): %s",
                url,
                response.status_code,
                attempt,
                self.retries,
                response.text,
            )
        raise AwsRequestError(f"failed request after {self.retries} retries", status_code) from last_error

    async def perform_post(self, params, result_selector, timestamp=None):
        return await self._perform(self.sign_post(params, timestamp), result_selector)

    async def perform_get(self, params, result_selector, timestamp=None):
        return await self._perform(self.sign_get(params, timestamp), result_selector)
