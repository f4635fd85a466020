"""
Body Catalog
============

Static lookup of every body's record plus the parent/child structure the
propagator walks each frame. The catalog is validated once when it is built;
an inconsistent table is a configuration error and construction fails.
"""

import logging
from typing import Dict, Iterator, List, Mapping, Optional, Union

import pandas as pd

from .bodies import BodyId, BodyRecord, BODY_TABLE

logger = logging.getLogger(__name__)

BodyRef = Union[BodyId, str, BodyRecord]


class CatalogError(ValueError):
    """Raised when the body table is inconsistent."""


class Catalog:
    """
    Immutable table of body records keyed by BodyId.

    Parameters
    ----------
    records : mapping of BodyId to BodyRecord, optional
        Body table to use. Defaults to the built-in solar system table.
    validate : bool, optional
        Check the table for consistency (default True). Disabling this is
        only useful for exercising the propagator's fallback paths.

    Raises
    ------
    CatalogError
        If ``validate`` is True and the table is inconsistent

    Examples
    --------
    >>> catalog = Catalog()
    >>> catalog.record(BodyId.EARTH).distance_au
    1.0
    >>> [b.name for b in catalog.satellites_of(BodyId.MARS)]
    ['PHOBOS', 'DEIMOS']
    """

    def __init__(self, records: Optional[Mapping[BodyId, BodyRecord]] = None,
                 validate: bool = True):
        if records is None:
            records = BODY_TABLE
        # order by declaration so iteration is deterministic
        order = {body: i for i, body in enumerate(BodyId)}
        self._records: Dict[BodyId, BodyRecord] = dict(
            sorted(records.items(), key=lambda item: order[item[0]])
        )
        if validate:
            self._validate()
        logger.debug("Built catalog with %d bodies", len(self._records))

    # ========== VALIDATION ==========
    def _validate(self):
        """
        Check completeness and the parent hierarchy.

        Raises
        ------
        CatalogError
            If any record is missing, mis-keyed, or the parent relation is
            not a Sun-rooted hierarchy of depth at most 2
        """
        missing = [b.value for b in BodyId if b not in self._records]
        if missing:
            raise CatalogError(f"Catalog is missing records for: {missing}")

        for body, record in self._records.items():
            if record.body != body:
                raise CatalogError(
                    f"Record for {body.value} is keyed as {record.body.value}"
                )
            if record.parent not in self._records:
                raise CatalogError(
                    f"{record.name} orbits {record.parent.value}, "
                    f"which is not in the catalog"
                )
            if record.parent == body and body != BodyId.SUN:
                raise CatalogError(f"{record.name} cannot orbit itself")

        sun = self._records[BodyId.SUN]
        if sun.parent != BodyId.SUN:
            raise CatalogError(
                f"The Sun must be its own parent, got {sun.parent.value}")
        if sun.distance_au != 0:
            raise CatalogError(
                f"The Sun must have zero orbital distance, got {sun.distance_au}")

        for body, record in self._records.items():
            if body == BodyId.SUN:
                continue
            if record.distance_au <= 0:
                raise CatalogError(
                    f"{record.name} must have a positive orbital distance, "
                    f"got {record.distance_au}"
                )
            parent = self._records[record.parent]
            if parent.body != BodyId.SUN and parent.parent != BodyId.SUN:
                raise CatalogError(
                    f"{record.name} orbits {parent.name}, which is itself a "
                    f"satellite; hierarchy depth is limited to 2"
                )

    # ========== LOOKUP ==========
    def resolve(self, ref: BodyRef) -> BodyId:
        """
        Turn a BodyId, body name or BodyRecord into a BodyId.

        Raises
        ------
        KeyError
            If a name does not match any body
        """
        if isinstance(ref, BodyRecord):
            return ref.body
        return BodyId.from_name(ref)

    def record(self, body: BodyRef) -> BodyRecord:
        """
        Return the record for ``body``.

        Raises
        ------
        KeyError
            If the body is not in this catalog
        """
        body = self.resolve(body)
        try:
            return self._records[body]
        except KeyError:
            raise KeyError(f"No record for body '{body.value}'") from None

    def parent_of(self, body: BodyRef) -> BodyId:
        return self.record(body).parent

    def ids(self) -> List[BodyId]:
        """All body ids in stable declaration order."""
        return list(self._records)

    def primaries(self) -> List[BodyId]:
        """Bodies orbiting the Sun directly (planets), in order."""
        return [b for b, r in self._records.items()
                if r.parent == BodyId.SUN and b != BodyId.SUN]

    def satellites(self) -> List[BodyId]:
        """Bodies whose parent is not the Sun (moons), in order."""
        return [b for b, r in self._records.items() if r.parent != BodyId.SUN]

    def satellites_of(self, parent: BodyRef) -> List[BodyId]:
        parent = self.resolve(parent)
        return [b for b, r in self._records.items()
                if r.parent == parent and b != parent]

    @property
    def sun(self) -> BodyRecord:
        return self._records[BodyId.SUN]

    # ========== EXPORT ==========
    def to_dataframe(self) -> pd.DataFrame:
        """
        Export the catalog to a pandas DataFrame.

        Returns
        -------
        pd.DataFrame
            One row per body, indexed by BodyId value, in catalog order
        """
        rows = []
        for record in self._records.values():
            rows.append({
                'id': record.body.value,
                'name': record.name,
                'parent': record.parent.value,
                'radius_km': record.radius_km,
                'distance_au': record.distance_au,
                'mass_kg': record.mass_kg,
                'temperature_c': record.temperature_c,
                'num_moons': record.num_moons,
                'rotation_period_days': record.rotation_period_days,
                'revolution_period_days': record.revolution_period_days,
            })
        return pd.DataFrame(rows).set_index('id')

    # ========== SPECIAL METHODS ==========
    def __iter__(self) -> Iterator[BodyRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, body) -> bool:
        try:
            return self.resolve(body) in self._records
        except (KeyError, TypeError):
            return False

    def __repr__(self):
        return (f"Catalog({len(self.primaries())} planets, "
                f"{len(self.satellites())} moons)")
