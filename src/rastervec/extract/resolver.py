"""
Greedy longest-first claiming of candidate chains.

All candidate chains compete for the live grid. The longest remaining chain
is taken first; if an earlier claim has taken some of its pixels, the pieces
that are still available go back into the pool as shorter candidates.
"""

import heapq
import itertools

from rastervec.geometry import are_adjacent, chain_length
from rastervec.models import Segment
from rastervec.raster.rasterize import is_round_trip
from rastervec.tracer import get_tracer, trace


class CandidatePool:
    """
    Chains ordered by descending endpoint distance.

    Equal distances pop in insertion order; callers must not depend on the
    order among ties.
    """

    def __init__(self, chains=()):
        self._heap = []
        self._counter = itertools.count()
        for chain in chains:
            self.push(chain)

    def push(self, chain):
        heapq.heappush(self._heap, (-chain_length(chain), next(self._counter), chain))

    def pop(self):
        return heapq.heappop(self._heap)[2]

    def __len__(self):
        return len(self._heap)


def split_available(grid, chain):
    """
    Split a chain into runs of pixels that are still foreground.

    A claimed pixel ends the current run, and so does a gap between two
    retained pixels that are no longer 8-adjacent.
    """
    runs = []
    current = []
    for pixel in chain:
        if not grid.is_foreground(pixel):
            if current:
                runs.append(current)
                current = []
            continue
        if current and not are_adjacent(current[-1], pixel):
            runs.append(current)
            current = []
        current.append(pixel)
    if current:
        runs.append(current)
    return runs


@trace(label="resolve")
def resolve(grid, chains, min_chain_pixels=2):
    """
    Claim chains longest-first and return the committed segments.

    An intact chain that passes the round trip is committed: its pixels are
    cleared from the grid and tagged with the segment's index. A chain that
    lost pixels to earlier claims is split; each remaining piece is checked
    again and re-queued when it is still a valid straight chain.

    Segments are returned in claim order.
    """
    tracer = get_tracer()
    min_chain_pixels = max(2, min_chain_pixels)

    pool = CandidatePool(chain for chain in chains if len(chain) >= min_chain_pixels)
    tracer.event(f"Pool size: {len(pool)}")

    segments = []
    requeued = 0
    discarded = 0

    while len(pool):
        chain = pool.pop()
        runs = split_available(grid, chain)

        if len(runs) == 1 and len(runs[0]) == len(chain):
            if not is_round_trip(chain):
                discarded += 1
                continue
            index = len(segments)
            segments.append(Segment(chain[0], chain[-1]))
            for pixel in chain:
                grid.claim(pixel, index)
            continue

        for run in runs:
            if len(run) >= min_chain_pixels and is_round_trip(run):
                pool.push(run)
                requeued += 1
            else:
                discarded += 1

    tracer.event(f"Resolved: segments={len(segments)}, requeued={requeued}, discarded={discarded}")

    return segments
