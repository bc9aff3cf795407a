from dataclasses import dataclass, field


@dataclass(frozen=True)
class Slot:
    time: str
    room: str
    capacity: int = field(compare=False)  # fixed per room

    def __post_init__(self) -> None:
        if not self.time or not self.room:
            raise ValueError("slot time and room must be non-empty")
        if self.capacity <= 0:
            raise ValueError(f"slot {self.time}/{self.room} capacity must be positive")

    def __str__(self) -> str:
        return f"{self.time} {self.room}"
