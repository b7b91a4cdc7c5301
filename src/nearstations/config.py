from dataclasses import dataclass
from typing import Optional


@dataclass
class NearStationsConfig:
    """Configuration for the nearstations CLI."""

    station_count: int = 500
    path_point_count: int = 40
    width: float = 300.0
    height: float = 600.0
    margin: float = 10.0
    threshold: float = 20.0
    seed: Optional[int] = None
    output: Optional[str] = None
    render: bool = True
    open_browser: bool = True
    log_level: str = "WARNING"
    metrics: bool = False
