# slot_manager/core/errors.py

# -----------------------------
# Base Errors
# -----------------------------

class SlotError(Exception):
    """Base class for all slot manager errors."""
    pass


# -----------------------------
# Contract Errors (caller mistakes)
# -----------------------------

class SlotInvalidArgumentError(SlotError):
    """Empty key, negative capacity or otherwise malformed input."""
    pass


class SlotOutOfRangeError(SlotError):
    """Slot index outside [0, capacity)."""
    pass


class SlotCapacityExhaustedError(SlotError):
    """Acquire attempted on a pool with no slots at all."""
    pass


# -----------------------------
# Collaborator Errors
# -----------------------------

class SlotPersistenceError(SlotError):
    """Settings store could not be read or written."""
    pass


class SlotClientError(SlotError):
    """Downstream llama.cpp server rejected or failed a request."""
    pass
