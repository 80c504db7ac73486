"""Measured complex indices of refraction for common conductors and crystals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from lumenkit.vector import Vec3


@dataclass(frozen=True)
class ComplexIor:
    """RGB real part ``eta`` and extinction ``k`` of a named material."""

    name: str
    eta: Vec3
    k: Vec3


def _entry(name: str, eta: tuple[float, float, float], k: tuple[float, float, float]) -> ComplexIor:
    return ComplexIor(name, Vec3(*eta), Vec3(*k))


COMPLEX_IORS: tuple[ComplexIor, ...] = (
    _entry("a-C", (2.9440999183, 2.2271502925, 1.9681668794), (0.8874329109, 0.7993216383, 0.8152862927)),
    _entry("Ag", (0.1552646489, 0.1167232965, 0.1383806959), (4.8283433224, 3.1222459278, 2.1469504455)),
    _entry("Al", (1.6574599595, 0.8803689579, 0.5212287346), (9.2238691996, 6.2695232477, 4.8370012281)),
    _entry("AlAs", (3.6051023902, 3.2329365777, 2.2175611545), (0.0006670247, -0.0004999400, 0.0074261204)),
    _entry("AlSb", (-0.0485225705, 4.1427547893, 4.6697691348), (-0.0363741915, 0.0937665154, 1.3007390124)),
    _entry("Au", (0.1431189557, 0.3749570432, 1.4424785571), (3.9831604247, 2.3857207478, 1.6032152899)),
    _entry("Be", (4.1850592788, 3.1850604423, 2.7840913457), (3.8354398268, 3.0101260162, 2.8690088743)),
    _entry("Cr", (4.3696828663, 2.9167024892, 1.6547005413), (5.2064337956, 4.2313645277, 3.7549467933)),
    _entry("CsI", (2.1449030413, 1.7023164587, 1.6624194173), (0.0, 0.0, 0.0)),
    _entry("Cu", (0.2004376970, 0.9240334304, 1.1022119527), (3.9129485033, 2.4528477015, 2.1421879552)),
    _entry("Cu2O", (3.5492833755, 2.9520622449, 2.7369202137), (0.1132179294, 0.1946659670, 0.6001681264)),
    _entry("CuO", (3.2453822204, 2.4496293965, 2.1974114493), (0.5202739621, 0.5707372756, 0.7172250613)),
    _entry("d-C", (2.7112524747, 2.3185812849, 2.2288565009), (0.0, 0.0, 0.0)),
    _entry("Hg", (2.3989314904, 1.4400254917, 0.9095512090), (6.3276269444, 4.3719414152, 3.4217899270)),
    _entry("HgTe", (4.7795267752, 3.2309984581, 2.6600252401), (1.6319827058, 1.5808189339, 1.7295753852)),
    _entry("Ir", (3.0864098394, 2.0821938440, 1.6178866805), (5.5921510077, 4.0671757150, 3.2672611269)),
    _entry("K", (0.0640493070, 0.0464100621, 0.0381842017), (2.1042155920, 1.3489364357, 0.9132113889)),
    _entry("Li", (0.2657871942, 0.1956102432, 0.2209198538), (3.5401743407, 2.3111306542, 1.6685930000)),
    _entry("MgO", (2.0895885542, 1.6507224525, 1.5948759692), (0.0, -0.0, 0.0)),
    _entry("Mo", (4.4837010280, 3.5254578255, 2.7760769438), (4.1111307988, 3.4208716252, 3.1506031404)),
    _entry("Na", (0.0602665320, 0.0561412435, 0.0619909494), (3.1792906496, 2.1124800781, 1.5790940266)),
    _entry("Nb", (3.4201353595, 2.7901921379, 2.3955856658), (3.4413817900, 2.7376437930, 2.5799132708)),
    _entry("Ni", (2.3672753521, 1.6633583302, 1.4670554172), (4.4988329911, 3.0501643957, 2.3454274399)),
    _entry("Rh", (2.5857954933, 1.8601866068, 1.5544279524), (6.7822927110, 4.7029501026, 3.9760892461)),
    _entry("Se-e", (5.7242724833, 4.1653992967, 4.0816099264), (0.8713747439, 1.1052845009, 1.5647788766)),
    _entry("Se", (4.0592611085, 2.8426947380, 2.8207582835), (0.7543791750, 0.6385150558, 0.5215872029)),
    _entry("SiC", (3.1723450205, 2.5259677964, 2.4793623897), (0.0000007284, -0.0000006859, 0.0000100150)),
    _entry("SnTe", (4.5251865890, 1.9811525984, 1.2816819226), (0.0, 0.0, 0.0)),
    _entry("Ta", (2.0625846607, 2.3930915569, 2.6280684948), (2.4080467973, 1.7413705864, 1.9470377016)),
    _entry("Te-e", (7.5090397678, 4.2964603080, 2.3698732430), (5.5842076830, 4.9476231084, 3.9975145063)),
    _entry("Te", (7.3908396088, 4.4821028985, 2.6370708478), (3.2561412892, 3.5273908133, 3.2921683116)),
    _entry("ThF4", (1.8307187117, 1.4422274283, 1.3876488528), (0.0, 0.0, 0.0)),
    _entry("TiC", (3.7004673762, 2.8374356509, 2.5823030278), (3.2656905818, 2.3515586388, 2.1727857800)),
    _entry("TiN", (1.6484691607, 1.1504482522, 1.3797795097), (3.3684596226, 1.9434888540, 1.1020123347)),
    _entry("TiO2-e", (3.1065574823, 2.5131551146, 2.5823844157), (0.0000289537, -0.0000251484, 0.0001775555)),
    _entry("TiO2", (3.4566203131, 2.8017076558, 2.9051485020), (0.0001026662, -0.0000897534, 0.0006356902)),
    _entry("VC", (3.6575665991, 2.7527298065, 2.5326814570), (3.0683516659, 2.1986687713, 1.9631816252)),
    _entry("VN", (2.8656011588, 2.1191817791, 1.9400767149), (3.0323264950, 2.0561075580, 1.6162930914)),
    _entry("V", (4.2775126218, 3.5131538236, 2.7611257461), (3.4911844504, 2.8893580874, 3.1116965117)),
    _entry("W", (4.3707029924, 3.3002972445, 2.9982666528), (3.5006778591, 2.6048652781, 2.2731930614)),
)

_BY_NAME = {entry.name: entry for entry in COMPLEX_IORS}


def lookup(name: str) -> Optional[ComplexIor]:
    """Return the entry with exactly this name, or ``None`` if it is not listed."""
    return _BY_NAME.get(name)