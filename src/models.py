import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional


class DecodeError(Exception):
    """Raised when a response body does not have the expected shape."""


@dataclass(frozen=True)
class Credentials:
    case_id: str
    queue_id: str
    token: str

    def __post_init__(self):
        for name in ("case_id", "queue_id", "token"):
            if not getattr(self, name):
                raise ValueError(f"{name} is required")


@dataclass(frozen=True)
class Profile:
    first_name: Any
    surname: Any
    date_of_birth: Any
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)


class Slot(NamedTuple):
    id: int
    date: str


class Outcome(enum.Enum):
    RESERVED = "reserved"
    EXHAUSTED = "exhausted"
    NO_SLOTS = "no_slots"


@dataclass(frozen=True)
class ReservationResult:
    outcome: Outcome
    slot: Optional[Slot] = None
    attempts: int = 0

    @property
    def reserved(self) -> bool:
        return self.outcome is Outcome.RESERVED


def parse_profile(data) -> Profile:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected profile object, got {type(data).__name__}")

    missing = [k for k in ("firstName", "surname", "dateOfBirth") if k not in data]
    if missing:
        raise DecodeError(f"Profile is missing fields: {', '.join(missing)}")

    return Profile(
        first_name=data["firstName"],
        surname=data["surname"],
        date_of_birth=data["dateOfBirth"],
        raw=data,
    )


def parse_dates(data) -> List[str]:
    if not isinstance(data, list):
        raise DecodeError(f"Expected list of dates, got {type(data).__name__}")
    for item in data:
        if not isinstance(item, str):
            raise DecodeError(f"Expected date string, got {item!r}")
    return list(data)


def parse_slots(data) -> List[Slot]:
    """
    This function
        1. Takes the decoded body of a slots response,
        2. Keeps the id and date of every slot object, and
        3. Returns them in server order
    """
    if not isinstance(data, list):
        raise DecodeError(f"Expected list of slots, got {type(data).__name__}")

    slots = []
    for item in data:
        if not isinstance(item, dict):
            raise DecodeError(f"Expected slot object, got {item!r}")
        slot_id = item.get("id")
        slot_date = item.get("date")
        # bool is an int subclass
        if not isinstance(slot_id, int) or isinstance(slot_id, bool):
            raise DecodeError(f"Slot id must be an integer, got {slot_id!r}")
        if not isinstance(slot_date, str):
            raise DecodeError(f"Slot date must be a string, got {slot_date!r}")
        slots.append(Slot(slot_id, slot_date))
    return slots
