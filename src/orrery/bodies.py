"""
Celestial Body Definitions
==========================

The closed set of bodies shown by the orrery (the Sun, the eight planets and
up to five moons per planet) and the immutable physical/display record kept
for each of them.

Physical values are mean values: radius [km], distance from the body it
orbits [AU] and mass [kg]. Periods are in Earth days; a negative rotation
period marks retrograde spin.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union


class BodyId(Enum):
    """
    Identifier for every cataloged body.

    Declaration order is the stable enumeration order used everywhere a
    listing is needed: the Sun first, then each planet immediately followed
    by its moons.
    """
    SUN = 'sun'

    MERCURY = 'mercury'

    VENUS = 'venus'

    EARTH = 'earth'
    EARTH_MOON = 'earth_moon'

    MARS = 'mars'
    PHOBOS = 'phobos'
    DEIMOS = 'deimos'

    JUPITER = 'jupiter'
    METIS = 'metis'
    ADRASTEA = 'adrastea'
    AMALTHEA = 'amalthea'
    THEBE = 'thebe'
    IO = 'io'

    SATURN = 'saturn'
    ENCELADUS = 'enceladus'
    MIMAS = 'mimas'
    TETHYS = 'tethys'
    DIONE = 'dione'
    TITAN = 'titan'

    URANUS = 'uranus'
    MIRANDA = 'miranda'
    ARIEL = 'ariel'
    UMBRIEL = 'umbriel'
    TITANIA = 'titania'
    OBERON = 'oberon'

    NEPTUNE = 'neptune'
    TRITON = 'triton'
    NEREID = 'nereid'
    PROTEUS = 'proteus'
    LARISSA = 'larissa'
    HALIMEDE = 'halimede'

    @classmethod
    def from_name(cls, name: Union[str, 'BodyId']) -> 'BodyId':
        """
        Look up a body by member name, value or display name.

        Matching ignores case, surrounding whitespace, and treats spaces
        and hyphens like underscores.

        Examples
        --------
        >>> BodyId.from_name('Earth')
        <BodyId.EARTH: 'earth'>
        >>> BodyId.from_name('moon')
        <BodyId.EARTH_MOON: 'earth_moon'>

        Raises
        ------
        KeyError
            If no body matches ``name``
        """
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            raise TypeError(f"Body name must be str or BodyId, got {type(name)}")
        key = name.strip().lower().replace(' ', '_').replace('-', '_')
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise KeyError(
                f"Unknown body '{name}'. "
                f"Valid bodies: {[b.value for b in cls]}"
            ) from None


# display names that differ from the member value
_ALIASES = {
    'moon': 'earth_moon',
    'luna': 'earth_moon',
}


@dataclass(frozen=True)
class BodyRecord:
    """
    Immutable catalog entry for a celestial body.

    Attributes
    ----------
    body : BodyId
        Identifier of this record
    name : str
        Display name
    radius_km : float
        Mean radius [km]
    distance_au : float
        Mean distance from ``parent`` [AU]; 0 for the Sun
    mass_kg : float
        Mass [kg]
    parent : BodyId
        Body this one orbits. The Sun is its own parent.
    temperature_c : float
        Average temperature [°C] (display only)
    num_moons : int
        Number of known moons (display only)
    rotation_period_days : float, optional
        Sidereal rotation period [days], negative for retrograde,
        None when unknown (display only)
    revolution_period_days : float
        Orbital period around ``parent`` [days] (display only)
    fun_fact : str
        Trivia shown in the info panel (display only)
    """
    body: BodyId
    name: str
    radius_km: float
    distance_au: float
    mass_kg: float
    parent: BodyId
    temperature_c: float = 0.0
    num_moons: int = 0
    rotation_period_days: Optional[float] = None
    revolution_period_days: float = 0.0
    fun_fact: str = ''

    def __post_init__(self):
        # Validate parameters
        if self.radius_km <= 0:
            raise ValueError(f"Radius must be positive, got {self.radius_km}")
        if self.mass_kg <= 0:
            raise ValueError(f"Mass must be positive, got {self.mass_kg}")
        if self.distance_au < 0:
            raise ValueError(
                f"Distance must be non-negative, got {self.distance_au}")
        if self.num_moons < 0:
            raise ValueError(
                f"Number of moons must be non-negative, got {self.num_moons}")

    @property
    def diameter_km(self) -> float:
        """Mean diameter [km]"""
        return self.radius_km * 2.0

    @property
    def is_sun(self) -> bool:
        return self.body == BodyId.SUN


def _record(body, name, radius_km, distance_au, mass_kg, parent,
            temperature_c, num_moons, rotation, revolution, fun_fact):
    return BodyRecord(
        body=body, name=name, radius_km=radius_km, distance_au=distance_au,
        mass_kg=mass_kg, parent=parent, temperature_c=temperature_c,
        num_moons=num_moons, rotation_period_days=rotation,
        revolution_period_days=revolution, fun_fact=fun_fact,
    )


B = BodyId

BODY_TABLE: Dict[BodyId, BodyRecord] = {r.body: r for r in (
    _record(B.SUN, 'Sun', 695_700.0, 0.0, 1.9891e30, B.SUN,
            5_505.0, 0, 25.38, 0.0,
            "The Sun holds about 99.86% of all the mass in the solar system."),

    _record(B.MERCURY, 'Mercury', 2_439.7, 0.387, 3.3011e23, B.SUN,
            167.0, 0, 58.646, 87.97,
            "A solar day on Mercury lasts two of its years."),

    _record(B.VENUS, 'Venus', 6_051.8, 0.723, 4.8675e24, B.SUN,
            464.0, 0, -243.025, 224.7,
            "Venus spins backwards, so the Sun rises in the west."),

    _record(B.EARTH, 'Earth', 6_371.0, 1.0, 5.97237e24, B.SUN,
            15.0, 1, 0.997, 365.256,
            "Earth is the only body known to harbour life."),
    _record(B.EARTH_MOON, 'Moon', 1_737.4, 0.00257, 7.342e22, B.EARTH,
            -20.0, 0, 27.322, 27.322,
            "The Moon is tidally locked, so Earth always sees the same side."),

    _record(B.MARS, 'Mars', 3_389.5, 1.524, 6.4171e23, B.SUN,
            -65.0, 2, 1.026, 686.98,
            "Olympus Mons on Mars is the tallest volcano in the solar system."),
    _record(B.PHOBOS, 'Phobos', 11.1, 0.000039, 1.0659e16, B.MARS,
            -40.0, 0, 0.319, 0.319,
            "Phobos is spiralling inward and will break apart within "
            "about 50 million years."),
    _record(B.DEIMOS, 'Deimos', 6.2, 0.000157, 1.4762e15, B.MARS,
            -40.0, 0, 1.263, 1.263,
            "Deimos is so small that its escape velocity is under 6 m/s."),

    _record(B.JUPITER, 'Jupiter', 69_911.0, 5.203, 1.8982e27, B.SUN,
            -110.0, 95, 0.414, 4_332.59,
            "The Great Red Spot is a storm wider than the Earth."),
    _record(B.METIS, 'Metis', 21.5, 0.00128, 1.2e17, B.JUPITER,
            -150.0, 0, 0.295, 0.295,
            "Metis orbits faster than Jupiter rotates and is slowly "
            "falling inward."),
    _record(B.ADRASTEA, 'Adrastea', 8.2, 0.0015, 2.2e18, B.JUPITER,
            -150.0, 0, 0.298, 0.298,
            "Adrastea sheds the dust that feeds Jupiter's main ring."),
    _record(B.AMALTHEA, 'Amalthea', 83.5, 0.0032, 2.08e18, B.JUPITER,
            -153.0, 0, 0.498, 0.498,
            "Amalthea is one of the reddest objects in the solar system."),
    _record(B.THEBE, 'Thebe', 49.3, 0.00422, 4.3e19, B.JUPITER,
            -150.0, 0, 0.675, 0.675,
            "Thebe radiates more heat than it receives from the Sun."),
    _record(B.IO, 'Io', 1_821.6, 0.00282, 8.931938e22, B.JUPITER,
            -143.0, 0, 1.769, 1.769,
            "Io is the most volcanically active body in the solar system."),

    _record(B.SATURN, 'Saturn', 58_232.0, 9.537, 5.6834e26, B.SUN,
            -140.0, 146, 0.444, 10_759.22,
            "Saturn is less dense than water."),
    _record(B.ENCELADUS, 'Enceladus', 252.1, 0.00317, 1.08e20, B.SATURN,
            -201.0, 0, 1.370, 1.370,
            "Geysers at the south pole of Enceladus feed Saturn's E ring."),
    _record(B.MIMAS, 'Mimas', 198.2, 0.0196, 3.75e19, B.SATURN,
            -209.0, 0, 0.942, 0.942,
            "The giant Herschel crater makes Mimas look like the Death Star."),
    _record(B.TETHYS, 'Tethys', 533.0, 0.0384, 6.17449e20, B.SATURN,
            -187.0, 0, 1.888, 1.888,
            "Tethys is made almost entirely of water ice."),
    _record(B.DIONE, 'Dione', 561.4, 0.0563, 1.095452e21, B.SATURN,
            -186.0, 0, 2.737, 2.737,
            "Dione shares its orbit with two small trojan moons."),
    _record(B.TITAN, 'Titan', 2_575.5, 0.0847, 1.3452e23, B.SATURN,
            -179.0, 0, 15.945, 15.945,
            "Titan has a thick atmosphere and lakes of liquid methane."),

    _record(B.URANUS, 'Uranus', 25_362.0, 19.191, 8.68103e25, B.SUN,
            -195.0, 28, -0.718, 30_688.5,
            "Uranus rolls around the Sun on its side, tilted by 98 degrees."),
    _record(B.MIRANDA, 'Miranda', 240.8, 0.00129, 6.59e19, B.URANUS,
            -187.0, 0, 1.413, 1.413,
            "Verona Rupes on Miranda is the tallest known cliff in the "
            "solar system."),
    _record(B.ARIEL, 'Ariel', 578.9, 0.00195, 1.353e21, B.URANUS,
            -213.0, 0, 2.520, 2.520,
            "Ariel has the brightest surface of the moons of Uranus."),
    _record(B.UMBRIEL, 'Umbriel', 584.7, 0.00266, 1.172e21, B.URANUS,
            -198.0, 0, 4.144, 4.144,
            "Umbriel is the darkest of the large moons of Uranus."),
    _record(B.TITANIA, 'Titania', 788.9, 0.00817, 3.49e21, B.URANUS,
            -203.0, 0, 8.706, 8.706,
            "Titania is the largest moon of Uranus."),
    _record(B.OBERON, 'Oberon', 761.4, 0.0127, 3.014e21, B.URANUS,
            -198.0, 0, 13.463, 13.463,
            "Oberon is the outermost of the major moons of Uranus."),

    _record(B.NEPTUNE, 'Neptune', 24_622.0, 30.069, 1.0241e26, B.SUN,
            -200.0, 16, 0.671, 60_182.0,
            "Neptune has the fastest winds in the solar system, "
            "over 2,000 km/h."),
    _record(B.TRITON, 'Triton', 1_353.4, 0.00237, 2.14e22, B.NEPTUNE,
            -235.0, 0, -5.877, 5.877,
            "Triton orbits Neptune backwards and is probably a captured "
            "Kuiper belt object."),
    _record(B.NEREID, 'Nereid', 170.0, 0.036, 3.1e19, B.NEPTUNE,
            -222.0, 0, 0.48, 360.13,
            "Nereid has one of the most eccentric orbits of any moon."),
    _record(B.PROTEUS, 'Proteus', 210.0, 0.0077, 5.37e19, B.NEPTUNE,
            -222.0, 0, 1.122, 1.122,
            "Proteus is about as large as a body can be without its own "
            "gravity pulling it round."),
    _record(B.LARISSA, 'Larissa', 97.0, 0.00073, 4.2e18, B.NEPTUNE,
            -222.0, 0, 0.555, 0.555,
            "Larissa was first glimpsed in 1981 when it passed in front of "
            "a star."),
    _record(B.HALIMEDE, 'Halimede', 31.0, 0.0379, 4.0e18, B.NEPTUNE,
            -222.0, 0, None, 1_879.08,
            "Halimede circles Neptune backwards, taking over five years "
            "per lap."),
)}

del B
