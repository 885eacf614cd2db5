class BasicRequest:
    """
    Unsigned description of an HTTP request to an AWS endpoint.

    Query params and headers are lists of (key, value) pairs; duplicates are allowed and the order
    does not matter for signing. Signing only ever appends headers, existing entries are never
    rewritten.
    """

    def __init__(self, method="GET", relative_uri="", query_params=None, headers=None, payload=b""):
        self.method = method
        self.relative_uri = relative_uri
        self.query_params = list(query_params or [])
        self.headers = list(headers or [])
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        self.payload = payload

    def add_header(self, name, value):
        self.headers.append((name, value))

    def get_header(self, name):
        name = name.lower()
        found = None
        for key, value in self.headers:
            if key.lower() == name:
                found = value
        return found

    def __repr__(self):
        return f"<BasicRequest {self.method} {self.relative_uri or '/'} headers={len(self.headers)}>"
