class FlowLangError(Exception):
    pass

class ParseError(FlowLangError, SyntaxError):
    """Raised when flow source cannot be parsed.

    Also a builtin ``SyntaxError``. ``token`` is the offending token (``None`` when
    the input ended early) and ``context`` holds the tokens of the statement
    the failure occurred in.
    """

    def __init__(self, message: str, token=None, context=()):
        super().__init__(message)
        self.message = message
        self.token = token
        self.context = tuple(context)
