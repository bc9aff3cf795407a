from .placement import assign, blocking_reason, can_place, valid_slots_for

__all__ = ["assign", "blocking_reason", "can_place", "valid_slots_for"]
