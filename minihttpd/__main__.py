import argparse
import logging
import os
from pathlib import Path

import curio
from curio.network import run_server

from . import __doc__ as desc
from . import __version__, gvars
from .connection import HTTPConnection


def TcpProtoFactory(cls, **kwargs):
    async def client_handler(client, addr):
        handler = cls(**kwargs)
        return await handler(client, addr)

    return client_handler


def parse_directory(s):
    try:
        directory = Path(s).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise argparse.ArgumentTypeError(f"cannot resolve directory {s!r}: {e}")
    if not directory.is_dir():
        raise argparse.ArgumentTypeError(f"not a directory: {s!r}")
    return directory


def parse_port(s):
    try:
        port = int(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {s!r}")
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {port}")
    return port


def get_server(host=gvars.default_host, port=gvars.default_port, directory=None):
    if directory is not None and not isinstance(directory, Path):
        directory = parse_directory(directory)
    server_sock = curio.tcp_server_socket(host, port, backlog=1024)
    real_ip, real_port, *_ = server_sock._socket.getsockname()
    bind_addr = (real_ip, real_port)
    server = run_server(
        server_sock,
        TcpProtoFactory(HTTPConnection, bind_addr=bind_addr, directory=directory),
    )
    return server, bind_addr


async def serve(server, bind_addr, directory=None):
    async with curio.TaskGroup() as g:
        await g.spawn(server)
        pid = os.getpid()
        gvars.logger.info(
            f"{__package__}/{__version__} listen on http://{bind_addr[0]}:{bind_addr[1]}"
            f" pid: {pid}"
        )
        if directory is not None:
            gvars.logger.info(f"serving files from {directory}")


def main(arguments=None):
    parser = argparse.ArgumentParser(
        description=desc, formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "-v", dest="verbose", action="count", default=0, help="print verbose output"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--directory",
        type=parse_directory,
        default=None,
        help="directory served and written by /files/",
    )
    parser.add_argument("--host", default=gvars.default_host, help="bind address")
    parser.add_argument(
        "--port", type=parse_port, default=gvars.default_port, help="bind port"
    )
    args = parser.parse_args(arguments)
    if args.verbose == 0:
        level = logging.ERROR
    elif args.verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    gvars.logger.setLevel(level)
    server, bind_addr = get_server(args.host, args.port, args.directory)
    kernel = curio.Kernel()
    try:
        kernel.run(serve(server, bind_addr, args.directory))
    except Exception as e:
        gvars.logger.exception(str(e))
    except KeyboardInterrupt:
        kernel.run(shutdown=True)


if __name__ == "__main__":
    main()
