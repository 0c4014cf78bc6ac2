import logging

import curio

from minihttpd.connection import HTTPConnection


class FakeClient:
    def __init__(self, data, send_error=None):
        self.data = data
        self.send_error = send_error
        self.sent = b""
        self.closed = False

    async def recv(self, size):
        data, self.data = self.data, b""
        return data

    async def sendall(self, data):
        if self.send_error:
            raise self.send_error
        self.sent += data

    async def close(self):
        self.closed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, et, e, tb):
        await self.close()


def handle(client):
    connection = HTTPConnection(("127.0.0.1", 1))
    return curio.run(connection(client, ("127.0.0.1", 2)))


def test_response_written_and_closed():
    client = FakeClient(b"GET /echo/hi HTTP/1.1\r\n\r\n")
    assert handle(client) is None
    assert client.sent.endswith(b"Content-Length: 2\r\n\r\nhi")
    assert client.closed


def test_write_failure_is_logged(caplog):
    client = FakeClient(
        b"GET / HTTP/1.1\r\n\r\n", send_error=BrokenPipeError("peer gone")
    )
    with caplog.at_level(logging.ERROR, logger="minihttpd"):
        assert handle(client) is None
    assert client.closed
    messages = [record.getMessage() for record in caplog.records]
    assert messages == [
        "127.0.0.1:2 -- HTTP -- 127.0.0.1:1 send response failed: peer gone"
    ]


def test_parse_failure_writes_nothing(caplog):
    client = FakeClient(b"GET /\r\n\r\n")
    with caplog.at_level(logging.WARNING, logger="minihttpd"):
        handle(client)
    assert client.sent == b""
    assert client.closed
    assert any("invalid start line" in r.getMessage() for r in caplog.records)
