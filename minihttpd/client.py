import curio
import httptools

from . import __version__, gvars


class HTTPResponse:
    def __init__(self):
        self.status_code = None
        self.headers = []
        self.body = b""
        self.done = False
        self.parser = None

    def __repr__(self):
        return f"{self.__class__.__name__}({self.status_code}, {len(self.body)} bytes)"

    def get_header(self, name: str, default=None):
        name = name.lower()
        for key, value in self.headers:
            if key.lower() == name:
                return value
        return default

    def on_header(self, name: bytes, value: bytes):
        self.headers.append((name.decode("latin-1"), value.decode("latin-1")))

    def on_headers_complete(self):
        self.status_code = self.parser.get_status_code()

    def on_body(self, body: bytes):
        self.body += body

    def on_message_complete(self):
        self.done = True


async def http_request(
    host: str,
    port: int,
    method: str = "GET",
    path: str = "/",
    headers: list = None,
    body: bytes = None,
):
    header_list = [f"Host: {host}:{port}", f"User-Agent: minihttpd/{__version__}"]
    if headers:
        header_list.extend(headers)
    if body is not None:
        header_list.append(f"Content-Length: {len(body)}")
    head = f"{method.upper()} {path} HTTP/1.1\r\n" + "".join(
        f"{header}\r\n" for header in header_list
    )
    response = HTTPResponse()
    parser = httptools.HttpResponseParser(response)
    response.parser = parser
    sock = await curio.open_connection(host, port)
    async with sock:
        await sock.sendall(head.encode() + b"\r\n" + (body or b""))
        # the server closes the connection after one response
        while True:
            data = await sock.recv(gvars.PACKET_SIZE)
            if not data:
                break
            parser.feed_data(data)
    if response.status_code is None:
        raise ConnectionError("connection closed before a response was received")
    return response
