import enum


class ParseErrorKind(enum.Enum):
    invalid_start_line = "invalid start line"
    unsupported_method = "unsupported method"
    invalid_content_length = "invalid content length"
    incomplete_request = "incomplete request"


class ParseError(Exception):
    kind: ParseErrorKind


class InvalidStartLine(ParseError):
    kind = ParseErrorKind.invalid_start_line


class UnsupportedMethod(ParseError):
    kind = ParseErrorKind.unsupported_method


class InvalidContentLength(ParseError):
    kind = ParseErrorKind.invalid_content_length


class IncompleteRequest(ParseError):
    kind = ParseErrorKind.incomplete_request


class RouteError(Exception):
    "raised inside file handlers, always turned into a response"


class PathOutsideRoot(RouteError):
    pass


class FileUnavailable(RouteError):
    pass


class WriteFailed(RouteError):
    pass
