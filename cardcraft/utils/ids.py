"""
Id generation for stored records.
"""
import time

def new_timestamp_id(existing: set) -> str:
    """Millisecond timestamp id, bumped until it is not in existing."""
    candidate = int(time.time() * 1000)
    while str(candidate) in existing:
        candidate += 1
    return str(candidate)
