import copy
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Request:
    """
    An operation call: the AWS operation name plus its parameters.

    Parameters are deep-copied on construction, so a Request never shares
    mutable state with the dict it was built from or with its clones.
    """

    operation: str
    params: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", copy.deepcopy(dict(self.params)))

    def with_param(self, name: str, value: Any) -> "Request":
        """Returns a clone of this request with a single parameter replaced."""
        return Request(self.operation, {**self.params, name: value})

    def get(self, name: str, default: Any = None) -> Any:
        return self.params.get(name, default)
