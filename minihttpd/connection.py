import curio

from . import gvars
from .protocols.exceptions import ParseError
from .protocols.http import http_request
from .routes import dispatch
from .utils import run_parser_curio, show


class HTTPConnection:
    proto = "HTTP"
    client = None
    client_addr = ("unknown", -1)

    def __init__(self, bind_addr, directory=None):
        self.bind_addr = bind_addr
        self.directory = directory

    @property
    def client_address(self) -> str:
        return show(self.client_addr)

    @property
    def bind_address(self) -> str:
        return show(self.bind_addr)

    def __repr__(self):
        return f"{self.__class__.__name__}({self})"

    def __str__(self):
        return f"{self.client_address} -- {self.proto} -- {self.bind_address}"

    async def __call__(self, client, addr):
        self.client = client
        self.client_addr = addr
        gvars.logger.info(f"{self} incoming connection")
        try:
            async with client:
                await self._run()
        except curio.errors.TaskCancelled:
            pass
        except ParseError as e:
            gvars.logger.warning(f"{self} {e.kind.value}: {e}")
        except Exception as e:
            gvars.logger.debug(f"{self} {e!r}")

    async def _run(self):
        parser = http_request.parser()
        request = await run_parser_curio(parser, self.client)
        response = await dispatch(request, self.directory)
        gvars.logger.info(f"{self} {request.start_line} {response.status_code}")
        try:
            await self.client.sendall(response.binary)
        except OSError as e:
            gvars.logger.error(f"{self} send response failed: {e}")
