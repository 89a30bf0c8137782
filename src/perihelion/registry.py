'''Interplanetary network simulation package
BodyRegistry class definition'''

import logging
import warnings
from typing import Iterable, Iterator, Optional

from .orbital_elements import OrbitalElements

logger = logging.getLogger(__name__)


class BodyRegistry:
    """
    Case-insensitive collection of celestial bodies keyed by id.

    The registry is populated once, by whatever loads body definitions,
    and then queried read-only. Looking up an unknown id with get()
    returns None rather than raising.

    Parameters
    ----------
    bodies : iterable of OrbitalElements, optional
        Initial contents
    """

    def __init__(self, bodies: Iterable[OrbitalElements] = ()):
        self._bodies: dict[str, OrbitalElements] = {}
        for body in bodies:
            self.register(body)

    # ========== FACTORY METHODS ==========
    @classmethod
    def from_dataframe(cls, df, validate: bool = True) -> "BodyRegistry":
        """Create a registry from a DataFrame with one body per row."""
        return cls(OrbitalElements.from_dataframe(df, validate=validate))

    @classmethod
    def from_records(cls, records, validate: bool = True) -> "BodyRegistry":
        """Create a registry from an iterable of mappings."""
        return cls(OrbitalElements.from_records(records, validate=validate))

    # ========== MUTATION ==========
    def register(self, body: OrbitalElements):
        """
        Add a body, replacing any body with the same (case-folded) id.

        Warns
        -----
        UserWarning
            If an existing body is replaced
        """
        if not isinstance(body, OrbitalElements):
            raise TypeError(f"Expected OrbitalElements, got {type(body)}")
        if body.key in self._bodies:
            warnings.warn(
                f"Body '{body.id}' replaces previously registered "
                f"'{self._bodies[body.key].id}'",
                UserWarning,
                stacklevel=2
            )
        self._bodies[body.key] = body
        logger.debug("Registered body '%s'", body.id)

    # ========== LOOKUP ==========
    def get(self, id: str) -> Optional[OrbitalElements]:
        """Body with the given id (any case), or None if not found."""
        return self._bodies.get(str(id).casefold())

    def select(self, *ids: str) -> list[OrbitalElements]:
        """Bodies for the given ids in the order asked, skipping unknown ids."""
        found = (self.get(i) for i in ids)
        return [body for body in found if body is not None]

    def ids(self) -> list[str]:
        """Registered ids as originally written"""
        return [body.id for body in self._bodies.values()]

    def to_dataframe(self):
        """Export registered bodies to a pandas DataFrame indexed by id."""
        return OrbitalElements.Batch.to_dataframe(list(self._bodies.values()))

    # ========== SPECIAL METHODS ==========
    def __getitem__(self, id: str) -> OrbitalElements:
        body = self.get(id)
        if body is None:
            raise KeyError(f"No celestial body with id '{id}'")
        return body

    def __contains__(self, item) -> bool:
        if isinstance(item, OrbitalElements):
            return item.key in self._bodies
        return self.get(item) is not None

    def __iter__(self) -> Iterator[OrbitalElements]:
        return iter(self._bodies.values())

    def __len__(self) -> int:
        return len(self._bodies)

    def __repr__(self):
        return f"BodyRegistry({self.ids()})"
