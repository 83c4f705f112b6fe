from dataclasses import dataclass, replace
from typing import Any, Dict, Tuple


# fields an update_frame operation is allowed to patch
PATCHABLE_FIELDS = ("return_value", "is_returning", "is_active", "note")


@dataclass(frozen=True)
class CallFrame:
    """
    One in-flight recursive invocation on the visualised call stack.

    Attributes:
        id            : Identity assigned by the driver's frame arena.
        function_name : e.g. "factorial", "isOdd", "hanoi".
        parameters    : Positional arguments of the call.
        return_value  : Set right before the frame is popped.
        depth         : 0 for the outermost call.
        is_active     : True only for the top-of-stack frame.
        is_returning  : True once the frame has computed its result.
        note          : Short running commentary ("waiting for factorial(3)").
    """

    id:            int
    function_name: str
    parameters:    Tuple[Any, ...] = ()
    return_value:  Any             = None
    depth:         int             = 0
    is_active:     bool            = True
    is_returning:  bool            = False
    note:          str             = ""

    @property
    def call(self) -> str:
        args = ", ".join(repr(p) if isinstance(p, str) else str(p) for p in self.parameters)
        return f"{self.function_name}({args})"

    def patched(self, **changes: Any) -> "CallFrame":
        unknown = set(changes) - set(PATCHABLE_FIELDS)
        if unknown:
            raise KeyError(f"cannot patch frame field(s): {', '.join(sorted(unknown))}")
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id":            self.id,
            "call":          self.call,
            "function_name": self.function_name,
            "parameters":    list(self.parameters),
            "return_value":  self.return_value,
            "depth":         self.depth,
            "is_active":     self.is_active,
            "is_returning":  self.is_returning,
            "note":          self.note,
        }

    def __repr__(self) -> str:
        return f"CallFrame(id={self.id}, {self.call}, depth={self.depth})"
