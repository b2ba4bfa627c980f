__all__ = ["LambdaError", "ParseError", "FreeVariableError", "MalformedTermError"]


class LambdaError(Exception):
    pass


class ParseError(LambdaError, ValueError):
    def __init__(self, position: int, message: str):
        self.position = position
        self.message = message
        super().__init__(f"{message} (at position {position})")


class FreeVariableError(LambdaError, LookupError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"variable {name} is not bound to any lambda")


class MalformedTermError(LambdaError, TypeError):
    def __init__(self, kind: str, field: str):
        self.kind = kind
        self.field = field
        super().__init__(f"{kind} term is missing its `{field}` field")
