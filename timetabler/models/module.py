from dataclasses import dataclass, field

DEFAULT_GROUP_PREFIX = 3


@dataclass(frozen=True)
class Module:
    code: str
    name: str = field(compare=False)
    size: int = field(compare=False)
    group_key: str = field(compare=False, default="")  # subject + year, e.g. "CS1"

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("module code must be non-empty")
        if self.size <= 0:
            raise ValueError(f"module {self.code} size must be positive")
        if not self.group_key:
            object.__setattr__(self, "group_key", self.code[:DEFAULT_GROUP_PREFIX])

    @classmethod
    def from_record(
        cls, code: str, name: str, size: int, group_prefix: int = DEFAULT_GROUP_PREFIX
    ) -> "Module":
        return cls(code=code, name=name, size=size, group_key=code[:group_prefix])
