"""Catalog enumerations.

Each enum serializes through an explicit string key (``.key`` /
``from_key``) so stored data and the bundled catalog never depend on the
Python member names.
"""

from enum import Enum, IntEnum


class _KeyedEnum(Enum):
    @property
    def key(self) -> str:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]

    @classmethod
    def from_key(cls, key: str):
        lookup = cls._key_table()
        try:
            return lookup[key.strip()]
        except KeyError:
            raise ValueError(f"Unknown {cls.__name__} key: {key!r}") from None

    @classmethod
    def _key_table(cls) -> dict:
        table = cls.__dict__.get("_table")
        if table is None:
            table = {member.key: member for member in cls}
            setattr(cls, "_table", table)
        return table


class DSOCatalog(_KeyedEnum):
    MESSIER = ("messier", "Messier", "M")
    CALDWELL = ("caldwell", "Caldwell", "C ")
    NGC = ("ngc", "NGC", "NGC ")
    IC = ("ic", "IC", "IC ")
    SH2 = ("sh2", "Sharpless", "Sh2-")
    BARNARD = ("barnard", "Barnard", "Barnard ")
    ARP = ("arp", "Arp", "Arp ")

    @property
    def prefix(self) -> str:
        return self.value[2]


class DSOType(_KeyedEnum):
    H_II_REGION = ("HIIRegion", "H II Region")
    PLANETARY_NEBULA = ("planetaryNebula", "Planetary Nebula")
    SUPERNOVA_REMNANT = ("supernovaRemnant", "Supernova Remnant")
    REFLECTION_NEBULA = ("reflectionNebula", "Reflection Nebula")
    DARK_NEBULA = ("darkNebula", "Dark Nebula")
    MIXED_DIFFUSE_NEBULAE = ("mixedDiffuseNebulae", "Mixed Diffuse Nebulae")
    CLOUD_COMPLEX = ("cloudComplex", "Cloud Complex")
    ELLIPTICAL_GALAXY = ("ellipticalGalaxy", "Elliptical Galaxy")
    LENTICULAR_GALAXY = ("lenticularGalaxy", "Lenticular Galaxy")
    SPIRAL_GALAXY = ("spiralGalaxy", "Spiral Galaxy")
    BARRED_SPIRAL_GALAXY = ("barredSpiralGalaxy", "Barred Spiral Galaxy")
    IRREGULAR_GALAXY = ("irregularGalaxy", "Irregular Galaxy")
    DWARF_SPHEROIDAL_GALAXY = ("dwarfSpheroidalGalaxy", "Dwarf Spheroidal Galaxy")
    DWARF_SPIRAL_GALAXY = ("dwarfSpiralGalaxy", "Dwarf Spiral Galaxy")
    DWARF_IRREGULAR_GALAXY = ("dwarfIrregularGalaxy", "Dwarf Irregular Galaxy")
    PECULIAR_GALAXY = ("peculiarGalaxy", "Interacting Galaxies")
    GALAXY_GROUP = ("galaxyGroup", "Galaxy Group/Pair")
    OPEN_STAR_CLUSTER = ("openStarCluster", "Open Star Cluster")
    GLOBULAR_STAR_CLUSTER = ("globularStarCluster", "Globular Star Cluster")
    STAR_CLOUD = ("starCloud", "Star Cloud")
    ASTERISM = ("asterism", "Asterism")
    REGION_OF_SKY = ("regionOfSky", "Region of Sky")
    MULTIPLE = ("multiple", "Multiple")


class Constellation(_KeyedEnum):
    ANDROMEDA = ("andromeda", "Andromeda")
    ANTLIA = ("antlia", "Antlia")
    APUS = ("apus", "Apus")
    AQUARIUS = ("aquarius", "Aquarius")
    AQUILA = ("aquila", "Aquila")
    ARA = ("ara", "Ara")
    ARIES = ("aries", "Aries")
    AURIGA = ("auriga", "Auriga")
    BOOTES = ("bootes", "Boötes")
    CAELUM = ("caelum", "Caelum")
    CAMELOPARDALIS = ("camelopardalis", "Camelopardalis")
    CANCER = ("cancer", "Cancer")
    CANES_VENATICI = ("canesVenatici", "Canes Venatici")
    CANIS_MAJOR = ("canisMajor", "Canis Major")
    CANIS_MINOR = ("canisMinor", "Canis Minor")
    CAPRICORNUS = ("capricornus", "Capricornus")
    CARINA = ("carina", "Carina")
    CASSIOPEIA = ("cassiopeia", "Cassiopeia")
    CENTAURUS = ("centaurus", "Centaurus")
    CEPHEUS = ("cepheus", "Cepheus")
    CETUS = ("cetus", "Cetus")
    CHAMAELEON = ("chamaeleon", "Chamaeleon")
    CIRCINUS = ("circinus", "Circinus")
    COLUMBA = ("columba", "Columba")
    COMA_BERENICES = ("comaBerenices", "Coma Berenices")
    CORONA_AUSTRALIS = ("coronaAustralis", "Corona Australis")
    CORONA_BOREALIS = ("coronaBorealis", "Corona Borealis")
    CORVUS = ("corvus", "Corvus")
    CRATER = ("crater", "Crater")
    CRUX = ("crux", "Crux")
    CYGNUS = ("cygnus", "Cygnus")
    DELPHINUS = ("delphinus", "Delphinus")
    DORADO = ("dorado", "Dorado")
    DRACO = ("draco", "Draco")
    EQUULEUS = ("equuleus", "Equuleus")
    ERIDANUS = ("eridanus", "Eridanus")
    FORNAX = ("fornax", "Fornax")
    GEMINI = ("gemini", "Gemini")
    GRUS = ("grus", "Grus")
    HERCULES = ("hercules", "Hercules")
    HOROLOGIUM = ("horologium", "Horologium")
    HYDRA = ("hydra", "Hydra")
    HYDRUS = ("hydrus", "Hydrus")
    INDUS = ("indus", "Indus")
    LACERTA = ("lacerta", "Lacerta")
    LEO = ("leo", "Leo")
    LEO_MINOR = ("leoMinor", "Leo Minor")
    LEPUS = ("lepus", "Lepus")
    LIBRA = ("libra", "Libra")
    LUPUS = ("lupus", "Lupus")
    LYNX = ("lynx", "Lynx")
    LYRA = ("lyra", "Lyra")
    MENSA = ("mensa", "Mensa")
    MICROSCOPIUM = ("microscopium", "Microscopium")
    MONOCEROS = ("monoceros", "Monoceros")
    MUSCA = ("musca", "Musca")
    NORMA = ("norma", "Norma")
    OCTANS = ("octans", "Octans")
    OPHIUCHUS = ("ophiuchus", "Ophiuchus")
    ORION = ("orion", "Orion")
    PAVO = ("pavo", "Pavo")
    PEGASUS = ("pegasus", "Pegasus")
    PERSEUS = ("perseus", "Perseus")
    PHOENIX = ("phoenix", "Phoenix")
    PICTOR = ("pictor", "Pictor")
    PISCES = ("pisces", "Pisces")
    PISCIS_AUSTRINUS = ("piscisAustrinus", "Piscis Austrinus")
    PUPPIS = ("puppis", "Puppis")
    PYXIS = ("pyxis", "Pyxis")
    RETICULUM = ("reticulum", "Reticulum")
    SAGITTA = ("sagitta", "Sagitta")
    SAGITTARIUS = ("sagittarius", "Sagittarius")
    SCORPIUS = ("scorpius", "Scorpius")
    SCULPTOR = ("sculptor", "Sculptor")
    SCUTUM = ("scutum", "Scutum")
    SERPENS = ("serpens", "Serpens")
    SEXTANS = ("sextans", "Sextans")
    TAURUS = ("taurus", "Taurus")
    TELESCOPIUM = ("telescopium", "Telescopium")
    TRIANGULUM = ("triangulum", "Triangulum")
    TRIANGULUM_AUSTRALE = ("triangulumAustrale", "Triangulum Australe")
    TUCANA = ("tucana", "Tucana")
    URSA_MAJOR = ("ursaMajor", "Ursa Major")
    URSA_MINOR = ("ursaMinor", "Ursa Minor")
    VELA = ("vela", "Vela")
    VIRGO = ("virgo", "Virgo")
    VOLANS = ("volans", "Volans")
    VULPECULA = ("vulpecula", "Vulpecula")


class DarknessThreshold(IntEnum):
    """Which twilight band counts as usable night."""

    ASTRONOMICAL = 0
    NAUTICAL = 1
    CIVIL = 2

    @classmethod
    def from_name(cls, value) -> "DarknessThreshold":
        if isinstance(value, int):
            return cls(value)
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown darkness threshold: {value!r}") from None


class TargetVisibility(Enum):
    NEVER = "never"
    ALWAYS = "always"
    SOMETIMES = "sometimes"


NEBULAE = frozenset(
    {
        DSOType.PLANETARY_NEBULA,
        DSOType.SUPERNOVA_REMNANT,
        DSOType.REFLECTION_NEBULA,
        DSOType.DARK_NEBULA,
        DSOType.H_II_REGION,
        DSOType.MIXED_DIFFUSE_NEBULAE,
        DSOType.CLOUD_COMPLEX,
    }
)

GALAXIES = frozenset(
    {
        DSOType.ELLIPTICAL_GALAXY,
        DSOType.LENTICULAR_GALAXY,
        DSOType.SPIRAL_GALAXY,
        DSOType.BARRED_SPIRAL_GALAXY,
        DSOType.IRREGULAR_GALAXY,
        DSOType.DWARF_SPHEROIDAL_GALAXY,
        DSOType.DWARF_SPIRAL_GALAXY,
        DSOType.DWARF_IRREGULAR_GALAXY,
        DSOType.PECULIAR_GALAXY,
        DSOType.GALAXY_GROUP,
    }
)

STAR_CLUSTERS = frozenset(
    {
        DSOType.OPEN_STAR_CLUSTER,
        DSOType.GLOBULAR_STAR_CLUSTER,
        DSOType.STAR_CLOUD,
        DSOType.ASTERISM,
    }
)

BROADBAND = GALAXIES | frozenset(
    {
        DSOType.DARK_NEBULA,
        DSOType.REFLECTION_NEBULA,
        DSOType.PLANETARY_NEBULA,
        DSOType.MIXED_DIFFUSE_NEBULAE,
        DSOType.CLOUD_COMPLEX,
    }
)
