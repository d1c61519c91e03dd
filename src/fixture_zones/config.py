from dataclasses import dataclass, replace

ZONE_COLORS = (
    "#4c7dff",  # primary blue
    "#f97316",  # accent orange
    "#22c55e",  # success green
    "#eab308",  # warning yellow
    "#8b5cf6",  # purple
    "#ec4899",  # pink
    "#06b6d4",  # cyan
    "#f59e0b",  # amber
    "#10b981",  # emerald
    "#6366f1",  # indigo
)

DEFAULT_CLUSTER_RADIUS = 0.4
MAX_ZONES = 12
ZONE_PADDING = 0.02
ARRANGE_PADDING = 0.02
DEFAULT_LABEL = "Area"


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """
    Tunables for zone detection and device arrangement.

    cluster_radius: float, default = 0.4
        seed distance (normalized units) below which a device joins a cluster
    max_zones: int, default = 12
        hard cap on auto-detected zones; overflow clusters are merged
    zone_padding: float, default = 0.02
        margin added around a cluster's bounds to form its zone rectangle
    arrange_padding: float, default = 0.02
        margin kept clear inside a zone's bounds when arranging devices
    palette: tuple of hex colors cycled by zone index
    default_label: zone label used when no member has a location
    """

    cluster_radius: float = DEFAULT_CLUSTER_RADIUS
    max_zones: int = MAX_ZONES
    zone_padding: float = ZONE_PADDING
    arrange_padding: float = ARRANGE_PADDING
    palette: tuple[str, ...] = ZONE_COLORS
    default_label: str = DEFAULT_LABEL

    def __post_init__(self):
        object.__setattr__(self, "palette", tuple(self.palette))
        if self.max_zones < 1:
            raise ValueError(f"max_zones must be at least 1, got {self.max_zones}")
        if self.cluster_radius < 0:
            raise ValueError(f"cluster_radius must be non-negative, got {self.cluster_radius}")
        if self.zone_padding < 0 or self.arrange_padding < 0:
            raise ValueError("Padding values must be non-negative")
        if not self.palette:
            raise ValueError("palette must contain at least one color")

    def with_(self, **changes) -> "EngineConfig":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "cluster_radius": self.cluster_radius,
            "max_zones": self.max_zones,
            "zone_padding": self.zone_padding,
            "arrange_padding": self.arrange_padding,
            "palette": list(self.palette),
            "default_label": self.default_label,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "EngineConfig":
        # unknown keys are ignored
        fields = cls.__dataclass_fields__
        return cls(**{k: v for k, v in data.items() if k in fields})
