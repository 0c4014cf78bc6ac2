import types
import typing

UNKNOWN_REASON = "<unknown status code>"

REASONS = types.MappingProxyType(
    {
        200: "OK",
        201: "Created",
        404: "Not Found",
        500: "Internal Server Error",
    }
)


class InvalidStatusCode(ValueError):
    def __init__(self, code):
        super().__init__(f"invalid status code: {code!r}")
        self.code = code


class StatusCode:
    __slots__ = ("_code",)

    OK: "StatusCode"
    CREATED: "StatusCode"
    NOT_FOUND: "StatusCode"
    INTERNAL_SERVER_ERROR: "StatusCode"

    def __init__(self, code: int):
        if isinstance(code, bool) or not isinstance(code, int):
            raise InvalidStatusCode(code)
        if not 100 <= code <= 999:
            raise InvalidStatusCode(code)
        self._code = code

    @property
    def code(self) -> int:
        return self._code

    @property
    def reason(self) -> typing.Optional[str]:
        return REASONS.get(self._code)

    @property
    def phrase(self) -> str:
        return self.reason or UNKNOWN_REASON

    def __int__(self):
        return self._code

    def __eq__(self, other):
        if isinstance(other, StatusCode):
            return self._code == other._code
        if isinstance(other, int) and not isinstance(other, bool):
            return self._code == other
        return NotImplemented

    def __hash__(self):
        return hash(self._code)

    def __repr__(self):
        return f"{self.__class__.__name__}({self._code})"

    def __str__(self):
        return f"{self._code} {self.phrase}"


StatusCode.OK = StatusCode(200)
StatusCode.CREATED = StatusCode(201)
StatusCode.NOT_FOUND = StatusCode(404)
StatusCode.INTERNAL_SERVER_ERROR = StatusCode(500)
