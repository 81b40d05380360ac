# File: src/weekslot/models/slots.py

from dataclasses import dataclass

@dataclass(frozen=True)
class TimeSlot:
    """A bookable window on one date."""
    date: str
    start_min: int
    end_min: int
    display_start: str  # "9:00 AM"
    display_end: str

    def label(self) -> str:
        return f"{self.display_start} - {self.display_end}"

    def to_dict(self) -> dict:
        return {
            'date': self.date,
            'startMin': self.start_min,
            'endMin': self.end_min,
            'displayStart': self.display_start,
            'displayEnd': self.display_end,
        }


@dataclass(frozen=True)
class Confirmation:
    """The proposal a user picked."""
    slot_index: int
    slot: TimeSlot
    timestamp: str

    def summary(self) -> str:
        return f"{self.slot.date}, {self.slot.label()}"
