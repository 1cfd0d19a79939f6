from dataclasses import dataclass

SECOND_ROOT = "second-root"
UNKNOWN_PARENT = "unknown-parent"
DUPLICATE_ID = "duplicate-id"
ALREADY_ATTACHED = "already-attached"
NOT_A_CHILD = "not-a-child"
AMBIGUOUS_REMOVAL = "ambiguous-removal"
BROKEN_PATH = "broken-path"


@dataclass(frozen=True)
class Violation:
    kind: str
    message: str


class TreeStructureError(ValueError):
    """Raised when a mutation would break the single-root tree shape."""

    def __init__(self, violation: Violation) -> None:
        super().__init__(violation.message)
        self.violation = violation

    @property
    def kind(self) -> str:
        return self.violation.kind
