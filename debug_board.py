import sys, os
ROOT = os.path.dirname(__file__)
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)
import random
from dotpop.board_state import BoardState
from dotpop.events.bus import (EVENT_TILE_CLICK, EVENT_SELECTION_IGNORED, EVENT_REGION_FOUND,
                               EVENT_CELLS_REMOVED, EVENT_GRAVITY_APPLIED, EVENT_REFILL_COMPLETED,
                               EVENT_SELECTION_RESOLVED)

state = BoardState(5, 5, ['R', 'G', 'B'], rng=random.Random(7))
print('Board before')
print(state.pretty())

received = []
for ev in [EVENT_SELECTION_IGNORED, EVENT_REGION_FOUND, EVENT_CELLS_REMOVED,
           EVENT_GRAVITY_APPLIED, EVENT_REFILL_COMPLETED, EVENT_SELECTION_RESOLVED]:
    state.event_bus.subscribe(ev, lambda s, _ev=ev, **k: received.append((_ev, k)))

x, y = (int(v) for v in sys.argv[1:3]) if len(sys.argv) >= 3 else (2, 2)
state.event_bus.emit(EVENT_TILE_CLICK, x=x, y=y)
for name, payload in received:
    print(name, {k: v for k, v in payload.items() if k != 'report'})
print('Board after')
print(state.pretty())
