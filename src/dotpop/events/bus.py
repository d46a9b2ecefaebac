from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_TILE_CLICK = "tile_click"                    # payload: x, y


# ============================================================================
# TILE & BOARD MECHANICS
# ============================================================================
EVENT_SELECTION_IGNORED = "selection_ignored"      # payload: x, y, reason=str ('out_of_bounds' | 'empty')
EVENT_REGION_FOUND = "region_found"                # payload: origin=(x,y), positions=[(x,y),...], size=int, color
EVENT_CELLS_REMOVED = "cells_removed"              # payload: positions=[(x,y),...]
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=list[GravityMove], columns=list[int]
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=list[RefillEntry]
EVENT_SELECTION_RESOLVED = "selection_resolved"    # payload: report=SelectionReport
EVENT_BOARD_LOADED = "board_loaded"                # payload: positions=[(x,y),...]
