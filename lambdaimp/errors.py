from dataclasses import dataclass


@dataclass
class ErrorVal:
    """Describes a failed evaluation or execution step.

    `name` is the error kind, one of 'TypeError', 'UnknownVariable',
    'UndefinedFunction', 'NotAFunction', 'ConditionTypeError' or
    'DivisionByZero'. `message` is the text shown to the user.
    """
    name: str
    message: str

    def __repr__(self) -> str:
        return f"Error(name={self.name!r}, message={self.message!r})"


class LambdaError(Exception):
    """Exception type used to propagate runtime errors.

    Every error is terminal: it aborts the rest of the program and is
    reported once by the caller.
    """
    def __init__(self, err: ErrorVal):
        super().__init__(err.message)
        self.err = err

    @property
    def name(self) -> str:
        return self.err.name

    @property
    def message(self) -> str:
        return self.err.message
