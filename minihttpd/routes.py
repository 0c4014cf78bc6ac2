import typing
from pathlib import Path

import curio

from . import gvars
from .protocols.exceptions import (
    FileUnavailable,
    PathOutsideRoot,
    RouteError,
    WriteFailed,
)
from .protocols.http import Method, Request, Response
from .protocols.status import StatusCode
from .utils import is_within

ECHO_PREFIX = "/echo/"
USER_AGENT_PREFIX = "/user-agent"
FILES_PREFIX = "/files/"
TEXT_PLAIN = ("Content-Type", "text/plain")
OCTET_STREAM = ("Content-Type", "application/octet-stream")


def index(request: Request) -> Response:
    return Response(StatusCode.OK)


def typed(content_type, body) -> Response:
    response = Response(StatusCode.OK, body=body)
    response.add_header(*content_type)
    return response


def echo(request: Request) -> Response:
    return typed(TEXT_PLAIN, request.path[len(ECHO_PREFIX) :])


def user_agent(request: Request) -> Response:
    agent = request.get_header("user-agent", "")
    return typed(TEXT_PLAIN, agent.strip())


def not_found(request: Request = None) -> Response:
    return Response(StatusCode.NOT_FOUND)


def resolve_file(directory: Path, path: str) -> Path:
    """
    Join the part of `path` after /files/ onto the canonical `directory`.

    The result is canonicalized too, so `..` segments and symlinks are
    followed before the containment check.
    """
    name = path[len(FILES_PREFIX) :]
    try:
        target = (directory / name).resolve()
    except (OSError, RuntimeError, ValueError) as e:
        raise FileUnavailable(f"cannot resolve {name!r}: {e}") from e
    if not is_within(directory, target):
        raise PathOutsideRoot(f"{target} is outside of {directory}")
    return target


async def read_file(target: Path) -> bytes:
    if not await curio.run_in_thread(target.exists):
        raise FileUnavailable(f"{target} does not exist")
    try:
        async with curio.aopen(target, "rb") as f:
            return await f.read()
    except OSError as e:
        raise FileUnavailable(f"read {target} failed: {e}") from e


async def write_file(target: Path, data: bytes):
    try:
        async with curio.aopen(target, "wb") as f:
            await f.write(data)
    except OSError as e:
        raise WriteFailed(f"write {target} failed: {e}") from e


async def get_file(request: Request, directory: Path) -> Response:
    try:
        target = await curio.run_in_thread(resolve_file, directory, request.path)
        data = await read_file(target)
    except RouteError as e:
        gvars.logger.debug(f"{request.start_line} {e}")
        return not_found(request)
    return typed(OCTET_STREAM, data)


async def post_file(request: Request, directory: Path) -> Response:
    try:
        if not request.body:
            raise WriteFailed("request has no body")
        target = await curio.run_in_thread(resolve_file, directory, request.path)
        await write_file(target, request.body)
    except RouteError as e:
        gvars.logger.debug(f"{request.start_line} {e}")
        return Response(StatusCode.INTERNAL_SERVER_ERROR)
    return Response(StatusCode.CREATED)


async def dispatch(
    request: Request, directory: typing.Optional[Path] = None
) -> Response:
    method, path = request.method, request.path
    if method is Method.GET:
        if path == "/":
            return index(request)
        if path.startswith(ECHO_PREFIX):
            return echo(request)
        if path.startswith(USER_AGENT_PREFIX):
            return user_agent(request)
        if path.startswith(FILES_PREFIX) and directory is not None:
            return await get_file(request, directory)
    elif method is Method.POST:
        if path.startswith(FILES_PREFIX) and directory is not None:
            return await post_file(request, directory)
    return not_found(request)
