from typing import Dict, Iterable, List, Optional, Tuple

from lambdaimp.errors import LambdaError, ErrorVal
from lambdaimp.types import Value, to_string


class Environment:
    """The single flat mapping from variable names to values.

    There is no scope chain: the whole program and every function call see
    the same bindings. Assignment inserts or overwrites.
    """
    def __init__(self, values: Optional[Dict[str, Value]] = None):
        self.values: Dict[str, Value] = dict(values) if values else {}

    def get(self, name: str) -> Value:
        if name in self.values:
            return self.values[name]
        raise LambdaError(ErrorVal('UnknownVariable', f'Unknown variable {name}'))

    def lookup(self, name: str) -> Optional[Value]:
        return self.values.get(name)

    def set(self, name: str, value: Value):
        self.values[name] = value

    def merged(self, bindings: Iterable[Tuple[str, Value]]) -> 'Environment':
        """Return a copy of this environment with `bindings` laid on top.

        The receiver is left untouched. Later bindings win over earlier ones
        and over anything already bound under the same name.
        """
        env = Environment(self.values)
        for name, value in bindings:
            env.values[name] = value
        return env

    def names(self) -> List[str]:
        return sorted(self.values)

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def __len__(self) -> int:
        return len(self.values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Environment):
            return self.values == other.values
        if isinstance(other, dict):
            return self.values == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"Environment({self.values!r})"

    def __str__(self) -> str:
        entries = ', '.join(f"{name!r}: {to_string(self.values[name])}" for name in self.names())
        return '{' + entries + '}'
