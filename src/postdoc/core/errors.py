"""Parse errors raised for malformed documents"""


class DocumentError(ValueError):
    """A document failed to parse; carries the offending 1-based line/column."""
    kind = "DocumentError"

    def __init__(self, message: str, line: int, column: int = 1):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"line {line}, col {column}: {message}")


class MalformedHeader(DocumentError):
    kind = "MalformedHeader"


class DuplicateKey(DocumentError):
    kind = "DuplicateKey"


class UnmatchedDirective(DocumentError):
    kind = "UnmatchedDirective"
