# scorecard.py
"""
Metabolic Health & Longevity Scorecard: age/sex-stratified sub-scores,
weighted total and letter grade.

Run doctests:
    python -m doctest -v scorecard.py

Or with the test suite:
    pytest
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Literal, Dict, Callable, Mapping, NamedTuple, Union

log = logging.getLogger(__name__)

Sex = Literal["male", "female"]

# -----------------------------
# Helpers
# -----------------------------

def clip(x: float, lo: float = 0, hi: float = 100) -> float:
    return max(lo, min(hi, x))

def round_half_up(x: float) -> int:
    """Nearest integer with halves rounded up (not Python's banker's rounding).

    >>> round_half_up(25.5), round_half_up(24.5), round_half_up(24.49)
    (26, 25, 24)
    """
    return int(math.floor(x + 0.5))

def score_from_range(value: float, low: float, high: float,
                     low_score: float, high_score: float) -> float:
    """Linear map of value over [low, high] onto [low_score, high_score], clamped at the ends.

    >>> score_from_range(5, 0, 10, 0, 100)
    50.0
    >>> score_from_range(-1, 0, 10, 0, 100)
    0
    >>> score_from_range(12, 0, 10, 100, 0)
    0
    """
    if value <= low:
        return low_score
    if value >= high:
        return high_score
    return (value - low) / (high - low) * (high_score - low_score) + low_score

# -----------------------------
# 1) Inputs and parsing
# -----------------------------

@dataclass(frozen=True)
class ScoreInput:
    """Immutable snapshot of the form. None means the field was left empty."""
    age: Optional[int] = None
    sex: Optional[Sex] = None
    a1c: Optional[float] = None
    ldl: Optional[float] = None
    lpa: Optional[float] = None
    apo_b: Optional[float] = None
    systolic: Optional[float] = None
    diastolic: Optional[float] = None
    waist_height_ratio: Optional[float] = None
    vo2_max: Optional[float] = None
    grip_strength: Optional[float] = None
    body_fat: Optional[float] = None

    def __post_init__(self):
        # Direct construction gets the same screening as parse_form: non-finite
        # or unparseable values become absent.
        for attr in FORM_FIELDS.values():
            raw = getattr(self, attr)
            clean = parse_number(raw)
            if clean is None and raw is not None:
                log.debug("dropping invalid %s=%r", attr, raw)
            object.__setattr__(self, attr, clean)
        object.__setattr__(self, "age", parse_age(self.age))
        object.__setattr__(self, "sex", parse_sex(self.sex))

# form key -> ScoreInput attribute
FORM_FIELDS: Dict[str, str] = {
    "a1c": "a1c",
    "ldl": "ldl",
    "lpa": "lpa",
    "apoB": "apo_b",
    "systolic": "systolic",
    "diastolic": "diastolic",
    "waistHeightRatio": "waist_height_ratio",
    "vo2Max": "vo2_max",
    "gripStrength": "grip_strength",
    "bodyFat": "body_fat",
}

def parse_number(raw) -> Optional[float]:
    """Parse a form value; empty, malformed or non-finite input is absent.

    >>> parse_number(" 5.7 ")
    5.7
    >>> parse_number("") is None, parse_number("abc") is None, parse_number("nan") is None
    (True, True, True)
    >>> parse_number(0)
    0.0
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        x = float(raw)
    except (TypeError, ValueError, OverflowError):
        return None
    return x if math.isfinite(x) else None

def parse_age(raw) -> Optional[int]:
    """Whole years; a decimal age truncates.

    >>> parse_age("25"), parse_age("45.9"), parse_age("old")
    (25, 45, None)
    """
    x = parse_number(raw)
    return None if x is None else int(x)

def parse_sex(raw) -> Optional[Sex]:
    """
    >>> parse_sex("Male"), parse_sex(" female "), parse_sex("") is None
    ('male', 'female', True)
    """
    if not isinstance(raw, str):
        return None
    s = raw.strip().lower()
    if s in ("male", "female"):
        return s
    return None

def _lookup(form: Mapping[str, object], key: str, attr: str):
    if key in form:
        return form[key]
    return form.get(attr)

def parse_form(form: Mapping[str, object]) -> ScoreInput:
    """Build a ScoreInput from a flat mapping of string-encoded fields.

    Keys follow the form (``apoB``, ``vo2Max``...); snake_case attribute names
    are accepted as well. Unknown keys are ignored and no value ever raises.

    >>> parse_form({"age": "40", "sex": "male", "a1c": "5.4", "ldl": "", "apoB": "x"})
    ScoreInput(age=40, sex='male', a1c=5.4, ldl=None, lpa=None, apo_b=None, systolic=None, diastolic=None, waist_height_ratio=None, vo2_max=None, grip_strength=None, body_fat=None)
    """
    values = {}
    for key, attr in FORM_FIELDS.items():
        raw = _lookup(form, key, attr)
        values[attr] = parse_number(raw)
        if values[attr] is None and raw not in (None, ""):
            log.debug("dropping unparseable %s=%r", key, raw)

    raw_age = form.get("age")
    age = parse_age(raw_age)
    if age is None and raw_age not in (None, ""):
        log.debug("dropping unparseable age=%r", raw_age)

    raw_sex = form.get("sex")
    sex = parse_sex(raw_sex)
    if sex is None and raw_sex not in (None, ""):
        log.debug("dropping unrecognised sex=%r", raw_sex)

    return ScoreInput(age=age, sex=sex, **values)

# -----------------------------
# 2) Reference tables
# -----------------------------

class Tiers(NamedTuple):
    excellent: float
    good: float
    poor: float

class BodyFatBands(NamedTuple):
    optimal_low: float
    optimal_high: float
    good_low: float
    good_high: float
    poor: float

# Metabolic markers, lower is better
METABOLIC_TIERS: Dict[str, Tiers] = {
    "a1c": Tiers(5.7, 6.4, 7.0),
    "ldl": Tiers(100, 129, 160),
    "lpa": Tiers(50, 100, 150),
    "apo_b": Tiers(80, 100, 120),
    "systolic": Tiers(120, 129, 140),
    "diastolic": Tiers(80, 84, 90),
    "waist_height_ratio": Tiers(0.5, 0.6, 0.7),
}

# Keys are the lower bound of each age band; the last band is open-ended.
VO2MAX_TIERS: Dict[str, Dict[int, Tiers]] = {
    "male": {
        20: Tiers(51, 40, 35),
        30: Tiers(47, 37, 32),
        40: Tiers(42, 32, 28),
        50: Tiers(37, 27, 25),
        60: Tiers(30, 22, 20),
    },
    "female": {
        20: Tiers(41, 30, 27),
        30: Tiers(37, 28, 24),
        40: Tiers(33, 25, 21),
        50: Tiers(29, 22, 18),
        60: Tiers(25, 18, 15),
    },
}

GRIP_TIERS: Dict[str, Dict[int, Tiers]] = {
    "male": {
        20: Tiers(45, 35, 30),
        30: Tiers(43, 34, 29),
        40: Tiers(41, 32, 27),
        50: Tiers(39, 30, 25),
        60: Tiers(35, 27, 22),
    },
    "female": {
        20: Tiers(30, 20, 15),
        30: Tiers(29, 19, 14),
        40: Tiers(28, 18, 13),
        50: Tiers(26, 17, 12),
        60: Tiers(24, 15, 10),
    },
}

BODY_FAT_BANDS: Dict[str, Dict[int, BodyFatBands]] = {
    "male": {
        20: BodyFatBands(8, 10.5, 10.6, 14.8, 20),
        30: BodyFatBands(8, 14.5, 14.6, 18.2, 22),
        40: BodyFatBands(8, 17.4, 17.5, 20.6, 25),
        50: BodyFatBands(8, 19.1, 19.2, 22.1, 27),
        60: BodyFatBands(8, 19.7, 19.8, 23.4, 28),
        70: BodyFatBands(8, 20.2, 20.3, 24.5, 30),
    },
    "female": {
        20: BodyFatBands(14, 16.5, 16.6, 19.4, 25),
        30: BodyFatBands(14, 17.4, 17.5, 20.8, 27),
        40: BodyFatBands(14, 19.8, 19.9, 23.8, 30),
        50: BodyFatBands(14, 22.5, 22.6, 27, 32),
        60: BodyFatBands(14, 23.2, 23.3, 27.9, 33),
        70: BodyFatBands(14, 24.5, 24.6, 29, 35),
    },
}

def band_for(age: int, table: Mapping[int, object]):
    """Entry for the age band containing ``age``, or None below the youngest band.

    >>> band_for(29, VO2MAX_TIERS["male"]), band_for(30, VO2MAX_TIERS["male"])
    (Tiers(excellent=51, good=40, poor=35), Tiers(excellent=47, good=37, poor=32))
    >>> band_for(84, GRIP_TIERS["female"])
    Tiers(excellent=24, good=15, poor=10)
    >>> band_for(19, GRIP_TIERS["female"]) is None
    True
    """
    floors = [k for k in sorted(table) if k <= age]
    if not floors:
        return None
    return table[floors[-1]]

# -----------------------------
# 3) Scoring curves
# -----------------------------

def step_tiers(value: float, tiers: Tiers, lower_is_better: bool = True) -> float:
    """Three buckets: 100 / 70 / 30.

    >>> step_tiers(5.7, METABOLIC_TIERS["a1c"]), step_tiers(6.0, METABOLIC_TIERS["a1c"]), step_tiers(9, METABOLIC_TIERS["a1c"])
    (100, 70, 30)
    >>> step_tiers(40, Tiers(51, 40, 35), lower_is_better=False)
    70
    """
    if lower_is_better:
        if value <= tiers.excellent:
            return 100
        if value <= tiers.good:
            return 70
        return 30
    if value >= tiers.excellent:
        return 100
    if value >= tiers.good:
        return 70
    return 30

def sliding_tiers(value: float, tiers: Tiers, lower_is_better: bool = True) -> float:
    """
    Piecewise-linear 100 -> 70 -> 50 -> 0 across the tier boundaries, with one
    extra half tier past ``poor`` (poor*1.5 or poor*0.5) before hitting 0.

    >>> sliding_tiers(5.7, METABOLIC_TIERS["a1c"])
    100
    >>> sliding_tiers(150, METABOLIC_TIERS["lpa"])
    50
    >>> sliding_tiers(187.5, METABOLIC_TIERS["lpa"])
    25.0
    >>> sliding_tiers(45.5, Tiers(51, 40, 35), lower_is_better=False)
    85.0
    >>> sliding_tiers(10, Tiers(51, 40, 35), lower_is_better=False)
    0
    """
    ex, good, poor = tiers
    if lower_is_better:
        if value <= ex:
            return 100
        if value <= good:
            return score_from_range(value, ex, good, 100, 70)
        if value <= poor:
            return score_from_range(value, good, poor, 70, 50)
        return score_from_range(value, poor, poor * 1.5, 50, 0)
    if value >= ex:
        return 100
    if value >= good:
        return score_from_range(value, good, ex, 70, 100)
    if value >= poor:
        return score_from_range(value, poor, good, 50, 70)
    return score_from_range(value, poor * 0.5, poor, 0, 50)

def _in_good_band(value: float, bands: BodyFatBands) -> bool:
    return bands.good_low <= value <= bands.good_high

def step_body_fat(value: float, bands: BodyFatBands) -> float:
    """
    Values in the gap between the optimal and good intervals are outside both.

    >>> b = BODY_FAT_BANDS["male"][20]
    >>> step_body_fat(9, b), step_body_fat(12, b), step_body_fat(17, b), step_body_fat(5, b)
    (100, 70, 30, 30)
    >>> step_body_fat(10.55, b)
    30
    """
    if bands.optimal_low <= value <= bands.optimal_high:
        return 100
    if _in_good_band(value, bands):
        return 70
    return 30

def sliding_body_fat(value: float, bands: BodyFatBands) -> float:
    """
    Optimal 100; good 70 -> 89 across the interval; under optimal 50 -> 100
    over a 5 point band; good ceiling to poor 70 -> 50; past poor 50 -> 0 over
    another 20% of the poor ceiling. The gap between optimal and good falls
    through to the last branch and scores 50.

    >>> b = BODY_FAT_BANDS["male"][20]
    >>> sliding_body_fat(9, b), sliding_body_fat(10.6, b), sliding_body_fat(14.8, b)
    (100, 70, 89)
    >>> sliding_body_fat(5.5, b), sliding_body_fat(2, b), sliding_body_fat(10.55, b)
    (75.0, 50, 50)
    >>> sliding_body_fat(20, b), sliding_body_fat(22, b), sliding_body_fat(30, b)
    (50, 25.0, 0)
    """
    if bands.optimal_low <= value <= bands.optimal_high:
        return 100
    if _in_good_band(value, bands):
        return score_from_range(value, bands.good_low, bands.good_high, 70, 89)
    if value < bands.optimal_low:
        return score_from_range(value, max(0, bands.optimal_low - 5), bands.optimal_low, 50, 100)
    if bands.good_high < value <= bands.poor:
        return score_from_range(value, bands.good_high, bands.poor, 70, 50)
    return score_from_range(value, bands.poor, bands.poor * 1.2, 50, 0)

@dataclass(frozen=True)
class Curve:
    """Interchangeable scoring strategy; the engine only calls through these two."""
    name: str
    tiers: Callable[[float, Tiers, bool], float]
    body_fat: Callable[[float, BodyFatBands], float]

STEP = Curve("step", step_tiers, step_body_fat)
SLIDING = Curve("sliding", sliding_tiers, sliding_body_fat)

# -----------------------------
# 4) Weights and named configurations
# -----------------------------

class Weights(NamedTuple):
    metabolic: float
    cardio_fitness: float
    grip_strength: float
    body_composition: float

# Literal constants. A sums to 1.01 and B to 0.85; neither is renormalised.
SCHEME_A = Weights(0.41, 0.24, 0.12, 0.24)
SCHEME_B = Weights(0.35, 0.20, 0.10, 0.20)

@dataclass(frozen=True)
class ScoringConfig:
    name: str
    curve: Curve
    weights: Weights

CONFIGS: Dict[str, ScoringConfig] = {
    "sliding": ScoringConfig("sliding", SLIDING, SCHEME_A),
    "step": ScoringConfig("step", STEP, SCHEME_B),
}
DEFAULT_CONFIG = "sliding"

def get_config(config: Union[str, ScoringConfig, None] = None) -> ScoringConfig:
    """Resolve a config name; unknown names raise KeyError.

    >>> get_config().name, get_config("step").weights == SCHEME_B
    ('sliding', True)
    """
    if config is None:
        config = DEFAULT_CONFIG
    if isinstance(config, ScoringConfig):
        return config
    try:
        return CONFIGS[config]
    except KeyError:
        raise KeyError(f"unknown scoring config {config!r}; expected one of {sorted(CONFIGS)}") from None

# -----------------------------
# 5) Sub-score calculators
# -----------------------------

def metabolic_breakdown(data: ScoreInput, curve: Curve) -> Dict[str, float]:
    """Per-marker scores for the markers present; blood pressure needs both readings."""
    scores: Dict[str, float] = {}
    for attr in ("a1c", "ldl", "lpa", "apo_b"):
        value = getattr(data, attr)
        if value is not None:
            scores[attr] = curve.tiers(value, METABOLIC_TIERS[attr], True)

    if data.systolic is not None and data.diastolic is not None:
        sys_score = curve.tiers(data.systolic, METABOLIC_TIERS["systolic"], True)
        dia_score = curve.tiers(data.diastolic, METABOLIC_TIERS["diastolic"], True)
        scores["blood_pressure"] = (sys_score + dia_score) / 2
    elif data.systolic is not None or data.diastolic is not None:
        log.debug("blood pressure needs both systolic and diastolic; skipping")

    if data.waist_height_ratio is not None:
        scores["waist_height_ratio"] = curve.tiers(
            data.waist_height_ratio, METABOLIC_TIERS["waist_height_ratio"], True)
    return scores

def metabolic_score(data: ScoreInput, curve: Curve = SLIDING) -> float:
    """
    Mean over present markers; 0 when none are present.

    >>> metabolic_score(ScoreInput())
    0
    >>> metabolic_score(ScoreInput(a1c=6.4, ldl=90))
    85.0
    """
    return _mean_score(metabolic_breakdown(data, curve))

def _mean_score(scores: Dict[str, float]) -> float:
    if not scores:
        return 0
    return clip(sum(scores.values()) / len(scores))

def _stratified(age: Optional[int], sex: Optional[Sex], table, label: str):
    if age is None or sex not in table:
        return None
    entry = band_for(age, table[sex])
    # Under 20 there are no reference values, so the sub-score is 0 rather than
    # a score against empty thresholds (which would rate any VO2max or grip 100).
    if entry is None:
        log.debug("age %s is below the youngest %s band", age, label)
    return entry

def cardio_fitness_score(data: ScoreInput, curve: Curve = SLIDING) -> float:
    """
    >>> cardio_fitness_score(ScoreInput(age=25, sex="male", vo2_max=52))
    100
    >>> cardio_fitness_score(ScoreInput(age=25, vo2_max=52))
    0
    """
    if data.vo2_max is None:
        return 0
    tiers = _stratified(data.age, data.sex, VO2MAX_TIERS, "VO2max")
    if tiers is None:
        return 0
    return clip(curve.tiers(data.vo2_max, tiers, False))

def grip_strength_score(data: ScoreInput, curve: Curve = SLIDING) -> float:
    if data.grip_strength is None:
        return 0
    tiers = _stratified(data.age, data.sex, GRIP_TIERS, "grip strength")
    if tiers is None:
        return 0
    return clip(curve.tiers(data.grip_strength, tiers, False))

def body_composition_score(data: ScoreInput, curve: Curve = SLIDING) -> float:
    if data.body_fat is None:
        return 0
    bands = _stratified(data.age, data.sex, BODY_FAT_BANDS, "body fat")
    if bands is None:
        return 0
    return clip(curve.body_fat(data.body_fat, bands))

# -----------------------------
# 6) Grade
# -----------------------------

class Grade(NamedTuple):
    letter: str
    meaning: str
    advice: str

GRADES = (
    (90, Grade("A+", "Optimal", "Best outcome range")),
    (80, Grade("A", "Excellent", "Minimal improvement needed")),
    (70, Grade("B", "Good", "Room for improvement")),
    (60, Grade("C", "Moderate risk", "Action needed")),
    (50, Grade("D", "High risk", "Significant change needed")),
)
FAILING = Grade("F", "Critical risk", "Immediate support recommended")

def grade_for(total: float) -> Grade:
    """
    >>> grade_for(90).letter, grade_for(89).letter, grade_for(50).letter, grade_for(49).letter
    ('A+', 'A', 'D', 'F')
    """
    for floor, grade in GRADES:
        if total >= floor:
            return grade
    return FAILING

# -----------------------------
# 7) Scorecard
# -----------------------------

class Subscores(NamedTuple):
    metabolic: float
    cardio_fitness: float
    grip_strength: float
    body_composition: float

@dataclass(frozen=True)
class Scorecard:
    metabolic: int
    cardio_fitness: int
    grip_strength: int
    body_composition: int
    total: int
    grade: Grade
    details: Dict[str, object] = field(default_factory=dict, compare=False)

def weighted_total(subscores: Subscores, weights: Weights) -> float:
    """
    >>> weighted_total(Subscores(100, 100, 100, 100), SCHEME_A)
    100
    >>> round(weighted_total(Subscores(100, 100, 100, 100), SCHEME_B), 6)
    85.0
    """
    return clip(sum(s * w for s, w in zip(subscores, weights)))

def score(data: Union[ScoreInput, Mapping[str, object]],
          config: Union[str, ScoringConfig, None] = None) -> Scorecard:
    """
    Score one snapshot of the form. ``data`` may be a ScoreInput or the raw
    form mapping; ``config`` a name from CONFIGS or a ScoringConfig.

    >>> card = score({"age": "30", "sex": "male", "a1c": "4.9", "ldl": "75", "lpa": "25",
    ...               "apoB": "65", "systolic": "110", "diastolic": "68",
    ...               "waistHeightRatio": "0.42", "vo2Max": "58", "gripStrength": "52",
    ...               "bodyFat": "8"})
    >>> card.total, card.grade.letter
    (100, 'A+')
    >>> score({}).total, score({}).grade.letter
    (0, 'F')
    """
    cfg = get_config(config)
    if not isinstance(data, ScoreInput):
        data = parse_form(data)
    curve = cfg.curve

    breakdown = metabolic_breakdown(data, curve)
    raw = Subscores(
        metabolic=_mean_score(breakdown),
        cardio_fitness=cardio_fitness_score(data, curve),
        grip_strength=grip_strength_score(data, curve),
        body_composition=body_composition_score(data, curve),
    )
    total = weighted_total(raw, cfg.weights)
    rounded_total = round_half_up(total)

    return Scorecard(
        metabolic=round_half_up(raw.metabolic),
        cardio_fitness=round_half_up(raw.cardio_fitness),
        grip_strength=round_half_up(raw.grip_strength),
        body_composition=round_half_up(raw.body_composition),
        total=rounded_total,
        grade=grade_for(rounded_total),
        details={
            "config": cfg.name,
            "subscores": raw._asdict(),
            "total": total,
            "metabolic_markers": breakdown,
        },
    )

if __name__ == "__main__":
    # Simple printout demo
    profile = {"age": "45", "sex": "male", "a1c": "5.4", "ldl": "95", "lpa": "45",
               "apoB": "80", "systolic": "120", "diastolic": "78",
               "waistHeightRatio": "0.48", "vo2Max": "44", "gripStrength": "42",
               "bodyFat": "16"}
    for name in CONFIGS:
        card = score(profile, name)
        print(f"{name}: metabolic={card.metabolic} vo2={card.cardio_fitness} "
              f"grip={card.grip_strength} body={card.body_composition} "
              f"-> total={card.total} ({card.grade.letter}, {card.grade.meaning})")
