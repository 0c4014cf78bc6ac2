import enum
import re
import typing

import iofree

from .exceptions import (
    InvalidContentLength,
    InvalidStartLine,
    UnsupportedMethod,
)
from .status import StatusCode

ENCODING = "utf-8"
ERRORS = "surrogateescape"
HTTP_VERSION = "HTTP/1.1"
CONTENT_LENGTH = re.compile(r"[0-9]+")


class Method(enum.Enum):
    GET = "GET"
    POST = "POST"

    @classmethod
    def from_token(cls, token: str) -> "Method":
        try:
            return cls(token)
        except ValueError:
            raise UnsupportedMethod(repr(token)) from None


class Request:
    def __init__(self, method, path, version, headers=None, body=None):
        self.method = method
        self.path = path
        self.version = version
        self.headers = headers if headers is not None else {}
        self.body = body

    def __repr__(self):
        return (
            f"{self.__class__.__name__}({self.method.value} {self.path} "
            f"{self.version}, headers={len(self.headers)}, "
            f"body={len(self.body) if self.body is not None else None})"
        )

    @property
    def start_line(self) -> str:
        return f"{self.method.value} {self.path} {self.version}"

    def get_header(self, name: str, default=None):
        return self.headers.get(name.lower(), default)


def decode(data: bytes) -> str:
    return data.decode(ENCODING, ERRORS)


def encode(text: str) -> bytes:
    return text.encode(ENCODING, ERRORS)


def parse_start_line(line: str):
    tokens = line.split(" ")
    if len(tokens) != 3:
        raise InvalidStartLine(f"expected 3 tokens in start line, got {line!r}")
    method, path, version = tokens
    return Method.from_token(method), path, version


def parse_content_length(value: str) -> int:
    value = value.strip()
    if not CONTENT_LENGTH.fullmatch(value):
        raise InvalidContentLength(repr(value))
    return int(value)


@iofree.parser
def http_request():
    parser = yield from iofree.get_parser()
    start_line = yield from iofree.read_until(b"\r\n", return_tail=False)
    try:
        method, path, version = parse_start_line(decode(start_line))
    except (InvalidStartLine, UnsupportedMethod) as e:
        parser.respond(exc=e)
        return
    headers = {}
    content_length = 0
    while True:
        line = yield from iofree.read_until(b"\r\n", return_tail=False)
        if not line:
            break
        name, sep, value = decode(line).partition(":")
        if not sep:
            continue
        name = name.strip().lower()
        if name == "content-length":
            try:
                content_length = parse_content_length(value)
            except InvalidContentLength as e:
                parser.respond(exc=e)
                return
        headers[name] = value.strip()
    body = None
    if content_length > 0:
        body = bytes((yield from iofree.read(content_length)))
    parser.respond(result=Request(method, path, version, headers, body))


class Response:
    def __init__(self, status_code, headers=None, body=None):
        if not isinstance(status_code, StatusCode):
            status_code = StatusCode(status_code)
        self.status_code = status_code
        self.headers = list(headers) if headers else []
        self.body = body

    def __repr__(self):
        return f"{self.__class__.__name__}({self.status_code})"

    def add_header(self, name: str, value: str):
        self.headers.append((name, value))

    @property
    def body_bytes(self) -> typing.Optional[bytes]:
        if self.body is None:
            return None
        if isinstance(self.body, str):
            return encode(self.body)
        return bytes(self.body)

    @property
    def binary(self) -> bytes:
        status = self.status_code
        lines = [f"{HTTP_VERSION} {status.code} {status.phrase}\r\n"]
        for name, value in self.headers:
            lines.append(f"{name}: {value}\r\n")
        body = self.body_bytes
        if body is None:
            lines.append("\r\n")
            return encode("".join(lines))
        lines.append(f"Content-Length: {len(body)}\r\n\r\n")
        return encode("".join(lines)) + body
