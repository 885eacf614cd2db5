import httpx

from .logging import root_logger

logger = root_logger.getChild(__name__)


class AsyncHttpClient:
    def __init__(self, base_url="", max_keepalive_connections=100, max_connections=1000, transport=None):
        self._base_url = base_url
        self._limits = httpx.Limits(
            max_keepalive_connections=max_keepalive_connections, max_connections=max_connections
        )
        # tests pass httpx.MockTransport here
        self._transport = transport
        self._session = None

    async def _get_session(self):
        if self._session is None:
            self._session = await httpx.AsyncClient(
                base_url=self._base_url, limits=self._limits, transport=self._transport
            ).__aenter__()
        return self._session

    async def close_session(self):
        if self._session is not None:
            try:
                await self._session.__aexit__(None, None, None)
            except Exception as e:
                logger.warning("Failed to close http session", exc_info=e)
            self._session = None

    async def request(self, method, url, **kwargs):
        session = await self._get_session()
        try:
            return await session.request(method, url, **kwargs)
        except RuntimeError:
            # session bound to a closed event loop
            await self.close_session()
            session = await self._get_session()
            return await session.request(method, url, **kwargs)
