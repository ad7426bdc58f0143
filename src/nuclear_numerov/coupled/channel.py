import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from nuclear_numerov.radial.effective_potential import check_angular_momentum

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Channel:
    """A channel of a coupled channels calculation.

    Channels are identified by their index in the ordered sequence of channels passed to the solver.
    """

    l: int
    """Angular momentum quantum number."""
    energy: float
    """Channel energy in MeV."""
    label: Optional[str] = None
    """Optional label for identification, e.g. "ground" or "2+"."""

    def __post_init__(self) -> None:
        check_angular_momentum(self.l)


@dataclass(frozen=True)
class CouplingSpec:
    """Specification of the coupling between two channels.

    The coupling is symmetric, i.e. CouplingSpec(0, 1) and CouplingSpec(1, 0) describe the same coupling.
    """

    from_channel: int
    """Index of the first channel."""
    to_channel: int
    """Index of the second channel."""
    strength: float = 1.0
    """Strength of the coupling."""
    beta: float = 0.1
    """Deformation parameter."""

    @property
    def key(self) -> tuple[int, int]:
        """The canonical (smaller index, larger index) pair of the coupled channels."""
        return min(self.from_channel, self.to_channel), max(self.from_channel, self.to_channel)


CouplingMap = dict[tuple[int, int], CouplingSpec]


def build_coupling_map(couplings: Iterable[CouplingSpec], n_channels: int) -> CouplingMap:
    """Build a mapping from the canonical channel pair (i, j) with i < j to the coupling spec.

    Args:
        couplings: The coupling specs.
        n_channels: The number of channels.

    Returns:
        The coupling map, look up a pair (i, j) with `get_coupling`.

    """
    coupling_map: CouplingMap = {}
    for coupling in couplings:
        i, j = coupling.key
        if i == j:
            raise ValueError(f"A channel can not be coupled to itself, but got {coupling}")
        if i < 0 or j >= n_channels:
            raise ValueError(f"The coupling {coupling} refers to a channel outside of 0, ..., {n_channels - 1}")
        if (i, j) in coupling_map:
            raise ValueError(f"The channels {i} and {j} are coupled twice: {coupling_map[(i, j)]} and {coupling}")
        coupling_map[(i, j)] = coupling

    logger.debug("Built coupling map with %d couplings for %d channels.", len(coupling_map), n_channels)
    return coupling_map


def get_coupling(coupling_map: CouplingMap, i: int, j: int) -> Optional[CouplingSpec]:
    """Return the coupling spec for the unordered pair of channels {i, j}, or None if they are not coupled."""
    return coupling_map.get((min(i, j), max(i, j)))
