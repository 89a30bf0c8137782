'''Interplanetary network simulation package
Network node definitions and the procedural topology generator'''

import ipaddress
import logging
from enum import Enum
from typing import Iterable, Iterator, Optional, Union

import numpy as np

from .config import config
from .geography import Location, random_location, surface_distance
from .orbital_elements import OrbitalElements

logger = logging.getLogger(__name__)

RandomSource = Union[np.random.Generator, int, None]


# define an enumerated list of node kinds
class NodeKind(Enum):
    TERMINAL = 'terminal'   # leaf device, reaches the network via a gateway
    GATEWAY = 'gateway'     # backbone node aggregating a group of terminals


def random_address(rng: np.random.Generator) -> ipaddress.IPv6Address:
    """128 random bits as an IPv6 address. Uniqueness is probabilistic."""
    return ipaddress.IPv6Address(rng.bytes(16))


class NetworkNode:
    """
    A single addressable node of the network.

    Terminals and gateways share one class and are told apart by kind.
    Gateways additionally keep the terminals pooled into them as members.
    Adjacency is undirected: connect() always links both ends.

    Equality and hashing use the address only.

    Parameters
    ----------
    kind : NodeKind or str
        TERMINAL or GATEWAY
    address : IPv6Address, str, int or bytes
        Unique network address
    location : Location
        Where the node sits
    """

    def __init__(self, kind: Union[NodeKind, str], address, location: Location):
        self._kind = NodeKind(kind)
        self._address = ipaddress.IPv6Address(address)
        self.location = location
        # dict used as an insertion-ordered set
        self._neighbours: dict["NetworkNode", None] = {}
        self._members: list["NetworkNode"] = []

    # ========== PROPERTY ACCESS ==========
    @property
    def kind(self) -> NodeKind:
        return self._kind

    @property
    def address(self) -> ipaddress.IPv6Address:
        return self._address

    @property
    def location(self) -> Location:
        """Current location. Assign a new Location to move the node."""
        return self._location

    @location.setter
    def location(self, value: Location):
        if not isinstance(value, Location):
            raise TypeError(f"location must be a Location, got {type(value)}")
        self._location = value

    @property
    def body(self) -> OrbitalElements:
        return self._location.body

    @property
    def is_gateway(self) -> bool:
        return self._kind == NodeKind.GATEWAY

    @property
    def is_terminal(self) -> bool:
        return self._kind == NodeKind.TERMINAL

    @property
    def members(self) -> tuple["NetworkNode", ...]:
        """Terminals pooled into this gateway (always empty for terminals)"""
        return tuple(self._members)

    @property
    def degree(self) -> int:
        return len(self._neighbours)

    # ========== TOPOLOGY ==========
    def connect(self, other: "NetworkNode"):
        """
        Link this node and other in both directions.

        Raises
        ------
        ValueError
            If other is this node, or both nodes are terminals
        """
        if other is self or other == self:
            raise ValueError(f"Node {self.address} cannot connect to itself")
        if self.is_terminal and other.is_terminal:
            raise ValueError(
                f"Terminals {self.address} and {other.address} can only be "
                f"joined through a gateway"
            )
        self._neighbours[other] = None
        other._neighbours[self] = None

    def add_member(self, terminal: "NetworkNode"):
        """Pool a terminal into this gateway and connect the two."""
        if not self.is_gateway:
            raise ValueError(f"Only gateways take members, {self.address} "
                             f"is a {self.kind.value}")
        if not terminal.is_terminal:
            raise ValueError(f"Gateway members must be terminals, "
                             f"{terminal.address} is a {terminal.kind.value}")
        self.connect(terminal)
        if terminal not in self._members:
            self._members.append(terminal)

    def is_connected(self, other: "NetworkNode") -> bool:
        return other in self._neighbours

    # ========== PATHFINDING INTERFACE ==========
    def neighbours(self) -> tuple["NetworkNode", ...]:
        """Directly connected nodes, in the order they were linked."""
        return tuple(self._neighbours)

    def cost(self, other: "NetworkNode") -> float:
        """
        Cost of moving from this node to other.

        The great-circle distance [km] when both nodes are on the same
        body, otherwise config.CROSS_BODY_COST.
        """
        if not isinstance(other, NetworkNode):
            raise TypeError(f"Cannot compute cost to {type(other)}")
        distance = surface_distance(self._location, other._location)
        if distance is None:
            return config.CROSS_BODY_COST
        return distance

    # ========== SPECIAL METHODS ==========
    def __repr__(self):
        return (f"NetworkNode({self.kind.value}, {self.address}, "
                f"{self.location})")

    def __eq__(self, other):
        if not isinstance(other, NetworkNode):
            return NotImplemented
        return self._address == other._address

    def __hash__(self):
        return hash(self._address)


class Network:
    """
    The set of all generated network nodes.

    Built once per session by generate(). The node set does not change
    after construction.

    Parameters
    ----------
    nodes : iterable of NetworkNode
        Nodes to own. Addresses must be unique.
    """

    def __init__(self, nodes: Iterable[NetworkNode] = ()):
        self._nodes: dict[ipaddress.IPv6Address, NetworkNode] = {}
        for node in nodes:
            if node.address in self._nodes:
                raise ValueError(f"Duplicate network address {node.address}")
            self._nodes[node.address] = node

    # ========== PROPERTY ACCESS ==========
    @property
    def nodes(self) -> tuple[NetworkNode, ...]:
        """All nodes in generation order"""
        return tuple(self._nodes.values())

    @property
    def terminals(self) -> list[NetworkNode]:
        return [n for n in self._nodes.values() if n.is_terminal]

    @property
    def gateways(self) -> list[NetworkNode]:
        return [n for n in self._nodes.values() if n.is_gateway]

    @property
    def bodies(self) -> list[OrbitalElements]:
        """Distinct bodies hosting at least one node"""
        return list(dict.fromkeys(n.body for n in self._nodes.values()))

    # ========== LOOKUP ==========
    def find(self, address) -> Optional[NetworkNode]:
        """Node with the given address, or None if not found."""
        try:
            address = ipaddress.IPv6Address(address)
        except ValueError:
            return None
        return self._nodes.get(address)

    def on_body(self, body: OrbitalElements) -> list[NetworkNode]:
        """Nodes located on the given body"""
        return [n for n in self._nodes.values() if n.body == body]

    def edges(self) -> list[tuple[NetworkNode, NetworkNode]]:
        """Each undirected link once, in generation order."""
        seen = set()
        result = []
        for node in self._nodes.values():
            for other in node.neighbours():
                pair = frozenset((node.address, other.address))
                if pair not in seen:
                    seen.add(pair)
                    result.append((node, other))
        return result

    def to_graph(self):
        """Wrap the nodes in a Graph for path queries."""
        from .graph import Graph
        return Graph.build(self.nodes)

    def to_dataframe(self):
        """
        Export nodes to pandas DataFrame.

        Returns
        -------
        pd.DataFrame
            One row per node with columns address, kind, body, latitude,
            longitude and degree
        """
        import pandas as pd
        data = {
            'address': [str(n.address) for n in self._nodes.values()],
            'kind': [n.kind.value for n in self._nodes.values()],
            'body': [n.body.id for n in self._nodes.values()],
            'latitude': [n.location.coordinates.latitude
                         for n in self._nodes.values()],
            'longitude': [n.location.coordinates.longitude
                          for n in self._nodes.values()],
            'degree': [n.degree for n in self._nodes.values()],
        }
        return pd.DataFrame(data)

    # ========== SPECIAL METHODS ==========
    def __iter__(self) -> Iterator[NetworkNode]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node) -> bool:
        if isinstance(node, NetworkNode):
            return node.address in self._nodes
        return self.find(node) is not None

    def __repr__(self):
        return (f"Network(nodes={len(self)}, terminals={len(self.terminals)}, "
                f"gateways={len(self.gateways)})")


def generate(random: RandomSource, bodies: Iterable[OrbitalElements],
             nodes_per_body: int) -> Network:
    """
    Procedurally generate a network spread over the given bodies.

    For each body, nodes are produced at a random location. The first node
    of a group is always a terminal; each later node is a terminal with
    probability 1 - 1/config.GATEWAY_ODDS, otherwise it becomes a gateway
    that takes the pending terminals as members, and generation moves on
    to a fresh random location. Once a body's budget is spent its gateways
    are fully meshed together. Bodies are never linked to each other.

    Terminals still pending when the budget runs out are left unconnected.

    Parameters
    ----------
    random : numpy.random.Generator, int or None
        Random source, or a seed for one
    bodies : iterable of OrbitalElements
        Bodies to populate, processed in iteration order
    nodes_per_body : int
        Number of nodes to produce on each body

    Returns
    -------
    Network
    """
    if nodes_per_body < 0:
        raise ValueError(
            f"nodes_per_body must be non-negative, got {nodes_per_body}")
    rng = np.random.default_rng(random)
    odds = config.GATEWAY_ODDS

    nodes: list[NetworkNode] = []
    n_bodies = 0
    for body in bodies:
        n_bodies += 1
        location = random_location(rng, body)
        pending: list[NetworkNode] = []     # terminals at the current location
        gateways: list[NetworkNode] = []
        for _ in range(nodes_per_body):
            address = random_address(rng)
            if not pending or rng.integers(0, odds) > 0:
                terminal = NetworkNode(NodeKind.TERMINAL, address, location)
                pending.append(terminal)
                nodes.append(terminal)
            else:
                gateway = NetworkNode(NodeKind.GATEWAY, address, location)
                for terminal in pending:
                    gateway.add_member(terminal)
                gateways.append(gateway)
                nodes.append(gateway)

                pending = []
                location = random_location(rng, body)

        # backbone mesh between this body's gateways
        for gateway in gateways:
            for other in gateways:
                if other is not gateway:
                    gateway.connect(other)

        logger.debug("Generated %d nodes on '%s' (%d gateways, %d unpooled)",
                     nodes_per_body, body.id, len(gateways), len(pending))

    network = Network(nodes)
    logger.info("Generated network over %d bodies: %d terminals, %d gateways",
                n_bodies, len(network.terminals), len(network.gateways))
    return network
