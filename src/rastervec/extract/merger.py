"""
Chain merging and round-trip validation.

A digital straight line with a shallow slope is a string of horizontal runs
joined by diagonal steps; a near-diagonal line is a string of diagonal runs
joined by horizontal or vertical steps. The scanner only sees the individual
runs, so the merger welds runs of one orientation end to end, following the
complementary step, and keeps a weld only when re-drawing the endpoints of the
welded chain reproduces it pixel for pixel.
"""

from enum import Enum

from rastervec.extract.scanner import Orientation
from rastervec.geometry import Coord
from rastervec.raster.rasterize import is_round_trip
from rastervec.tracer import get_tracer, trace


class ChainEnd(Enum):
    """Which end of a chain a walk grows from."""
    FRONT = "front"
    BACK = "back"

    @property
    def opposite(self):
        return ChainEnd.BACK if self is ChainEnd.FRONT else ChainEnd.FRONT


# Steps joining consecutive runs of a line, per run orientation
PROBE_STEPS = {
    Orientation.HORIZONTAL: (Coord(1, 1), Coord(1, -1)),
    Orientation.VERTICAL: (Coord(1, 1), Coord(-1, 1)),
    Orientation.DIAG_UP: (Coord(1, 0), Coord(0, 1)),
    Orientation.DIAG_DOWN: (Coord(1, 0), Coord(0, -1)),
}


class RunPattern:
    """
    Run-length rule for one walk.

    The runs of a digital line take two consecutive lengths, except the two
    terminal runs which may be cut short. The first extension may have any
    length; after that the joined interior runs must stay within one pixel
    of each other and neither the base run nor the next run may exceed the
    shortest interior run by more than one pixel.
    """

    def __init__(self, base_length):
        self.base_length = base_length
        self.lengths = []

    def accepts(self, length):
        if not self.lengths:
            return True
        shortest = min(self.lengths)
        if max(self.lengths) - shortest > 1:
            return False
        limit = shortest + 1
        return self.base_length <= limit and length <= limit

    def add(self, length):
        self.lengths.append(length)


class ChainMerger:
    """Welds base chains of each orientation into longer validated chains."""

    def __init__(self, scans):
        self.scans = scans

    def facing_neighbor(self, orientation, step, index, end):
        """
        Chain whose facing endpoint sits one probe step beyond the given end.

        Growing from BACK the neighbor must start at last + step; growing
        from FRONT it must finish at first - step.
        """
        scan = self.scans[orientation]
        chain = scan.chains[index]
        if end is ChainEnd.BACK:
            probe = chain[-1] + step
        else:
            probe = chain[0] - step

        neighbor = scan.chain_at(probe)
        if neighbor is None or neighbor == index:
            return None

        other = scan.chains[neighbor]
        facing = other[0] if end is ChainEnd.BACK else other[-1]
        return neighbor if facing == probe else None

    def walk(self, index, end, orientation, step):
        """Chain indices reachable from index while the run pattern holds."""
        chains = self.scans[orientation].chains
        base_length = len(chains[index])
        pattern = RunPattern(base_length)

        walked = [index]
        current = index
        while True:
            neighbor = self.facing_neighbor(orientation, step, current, end)
            if neighbor is None:
                break

            length = len(chains[neighbor])
            if length == 1:
                # a lone pixel continues every orientation; only take it as the tail
                if len(walked) == 1 and base_length == 1:
                    break
                walked.append(neighbor)
                break

            if not pattern.accepts(length):
                break
            pattern.add(length)
            walked.append(neighbor)
            current = neighbor

        return walked

    def chain_pixels(self, indices, orientation, end):
        """Concatenate chains in walk order; FRONT walks read each chain backwards."""
        chains = self.scans[orientation].chains
        pixels = []
        for index in indices:
            if end is ChainEnd.BACK:
                pixels.extend(chains[index])
            else:
                pixels.extend(reversed(chains[index]))
        return pixels

    def try_extend(self, index, end, orientation, step):
        """
        Extend one chain from one end and validate the result.

        Every prefix of two or more walked chains is round-trip checked and
        the longest passing prefix is returned as a list of chain indices.
        None means no merge, which is the common case.
        """
        walked = self.walk(index, end, orientation, step)
        if len(walked) < 2:
            return None

        pixels = self.chain_pixels(walked[:1], orientation, end)
        best = None
        for count, neighbor in enumerate(walked[1:], start=2):
            pixels.extend(self.chain_pixels([neighbor], orientation, end))
            if is_round_trip(pixels):
                best = count

        if best is None:
            return None
        return walked[:best]

    def _heads(self, orientation, step, end):
        """Chains where a walk in the given direction can begin a string."""
        chains = self.scans[orientation].chains
        return [
            index for index in range(len(chains))
            if self.facing_neighbor(orientation, step, index, end.opposite) is None
        ]

    @trace(label="merge_chains")
    def merge(self):
        """
        Merge along every orientation, probe step and end direction.

        Each string of linked chains is walked from its head. After an
        accepted merge the next walk starts at its last contributing chain,
        so the other contributors are consumed for that direction. A merge
        found again by the opposite-direction walk is dropped.
        """
        tracer = get_tracer()

        merged = []
        seen = set()
        for orientation in self.scans:
            found = 0
            for step in PROBE_STEPS[orientation]:
                for end in (ChainEnd.BACK, ChainEnd.FRONT):
                    for head in self._heads(orientation, step, end):
                        start = head
                        while start is not None:
                            extension = self.try_extend(start, end, orientation, step)
                            if extension is None:
                                start = self.facing_neighbor(orientation, step, start, end)
                                continue

                            key = (orientation, frozenset(extension))
                            if key not in seen:
                                seen.add(key)
                                merged.append(self.chain_pixels(extension, orientation, end))
                                found += 1
                            start = extension[-1]

            tracer.event(f"Merged {orientation.label}: {found} chains")

        return merged


def merge_chains(scans):
    """Merge the base chains of all scanned orientations."""
    return ChainMerger(scans).merge()
