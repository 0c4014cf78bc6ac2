from pathlib import Path

import iofree

from . import gvars
from .protocols.exceptions import IncompleteRequest


async def run_parser_curio(parser, sock):
    parser.send(b"")
    while True:
        for to_send, close, exc, result in parser:
            if to_send:
                await sock.sendall(to_send)
            if close:
                await sock.close()
            if exc:
                raise exc
            if result is not iofree._no_result:
                return result
        data = await sock.recv(gvars.PACKET_SIZE)
        if not data:
            raise IncompleteRequest("connection closed before request was complete")
        parser.send(data)


def is_within(root: Path, path: Path) -> bool:
    return path == root or root in path.parents


def show(addr) -> str:
    return f"{addr[0]}:{addr[1]}"
