import json
import logging
import numbers
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from platformdirs import user_config_dir

from .errors import InvalidParameterError

logger = logging.getLogger(__name__)

DEFAULT_PATCH_SIZE = 5
DEFAULT_OMEGA = 0.95
DEFAULT_T0 = 0.1
DEFAULT_TOP_FRACTION = 0.002

CONFIG_FILENAME = "params.json"


def validate_patch_size(patch_size):
    if isinstance(patch_size, bool) or not isinstance(patch_size, numbers.Integral):
        raise InvalidParameterError(
            f"patch_size must be an integer, got {patch_size!r}"
        )
    if patch_size < 1:
        raise InvalidParameterError(f"patch_size must be >= 1, got {patch_size}")
    return int(patch_size)


def _as_float(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(f"{name} must be a number, got {value!r}")
    return float(value)


def validate_omega(omega):
    omega = _as_float("omega", omega)
    # 0.0 disables haze removal entirely (transmission == 1 everywhere)
    if not 0.0 <= omega <= 1.0:
        raise InvalidParameterError(f"omega must be in [0, 1], got {omega}")
    return omega


def validate_t0(t0):
    t0 = _as_float("t0", t0)
    if not 0.0 < t0 < 1.0:
        raise InvalidParameterError(f"t0 must be in (0, 1), got {t0}")
    return t0


def validate_top_fraction(top_fraction):
    top_fraction = _as_float("top_fraction", top_fraction)
    if not 0.0 < top_fraction <= 1.0:
        raise InvalidParameterError(
            f"top_fraction must be in (0, 1], got {top_fraction}"
        )
    return top_fraction


@dataclass(frozen=True)
class DehazeParams:
    """Tuning constants for the dark channel prior pipeline.

    patch_size: edge length of the square dark channel window.
    omega: fraction of the estimated haze to remove.
    t0: lower bound applied to the transmission during recovery.
    top_fraction: share of the darkest-map pixels considered when
        estimating the atmospheric light.
    """

    patch_size: int = DEFAULT_PATCH_SIZE
    omega: float = DEFAULT_OMEGA
    t0: float = DEFAULT_T0
    top_fraction: float = DEFAULT_TOP_FRACTION

    def __post_init__(self):
        # frozen dataclass: store normalised values through object.__setattr__
        object.__setattr__(self, "patch_size", validate_patch_size(self.patch_size))
        object.__setattr__(self, "omega", validate_omega(self.omega))
        object.__setattr__(self, "t0", validate_t0(self.t0))
        object.__setattr__(
            self, "top_fraction", validate_top_fraction(self.top_fraction)
        )

    @classmethod
    def from_dict(cls, data: dict) -> "DehazeParams":
        """Build params from a mapping, ignoring keys that are not parameters."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown dehaze parameters: {', '.join(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def replace(self, **overrides) -> "DehazeParams":
        """Return a copy with the non-None overrides applied."""
        values = asdict(self)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return type(self)(**values)

    def to_dict(self) -> dict:
        return asdict(self)


def load_params(path: str | Path) -> DehazeParams:
    """
    Loads dehaze parameters from a JSON file.
    Accepts either a flat object or one nested under a "settings" key.
    """
    path = Path(path)
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidParameterError(f"Invalid JSON in {path}: {e}") from e

    if isinstance(data, dict) and isinstance(data.get("settings"), dict):
        data = data["settings"]
    if not isinstance(data, dict):
        raise InvalidParameterError(f"Expected a JSON object in {path}")

    params = DehazeParams.from_dict(data)
    logger.debug(f"Loaded dehaze parameters from {path}: {params}")
    return params


def default_config_path() -> Path:
    """Per-user parameter file, read by the CLI when no --config is given."""
    return Path(user_config_dir("pydehaze")) / CONFIG_FILENAME
