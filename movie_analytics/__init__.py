"""
Movie Analytics - core package.

Modules:
- models: entity records and result structures
- normalizer: gross income parsing and canonical year resolution
- data_loader: reads the catalog collections from JSON Lines files
- aggregation: grouped rankings, summaries and group profiles
- correlation: population statistics and Pearson correlation
- trends: yearly trend and growth signals
- recommender: weighted overlap recommendation scoring
- analytics: high-level facade exposing every analysis
"""

from .errors import ConfigurationError
from .config import AnalyticsSettings
from .analytics import MovieAnalytics

__all__ = ["ConfigurationError", "AnalyticsSettings", "MovieAnalytics"]
