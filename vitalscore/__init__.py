"""VitalScore: composite daily health score from BP, sleep and activity data."""

from .core.logging import configure_logging
from .health_scoring import calculate_health_score, HealthScoringService

__version__ = "0.1.0"
