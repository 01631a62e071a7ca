from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Change:
    """
    One applied mutation in an entity's audit trail.

    Attributes:
        field: Name of the mutated attribute ("owner", "forsale", ...)
        old: Value before the mutation
        new: Value after the mutation
        caller: Address that triggered the mutation
        block: Block the mutation was applied in
        op_type: Interaction kind that caused it
    """

    field: str
    old: str | int
    new: str | int
    caller: str
    block: int
    op_type: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Change":
        return cls(
            field=data["field"],
            old=data["old"],
            new=data["new"],
            caller=data["caller"],
            block=data["block"],
            op_type=data["op_type"],
        )
