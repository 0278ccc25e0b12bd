"""
Correlation module.
Population statistics (denominator N) and the Pearson coefficient between two series.
"""

from typing import Iterable, Optional, Tuple

import numpy as np
from loguru import logger

from .models import CorrelationResult


def population_mean(values: np.ndarray) -> Optional[float]:
	return float(np.mean(values)) if values.size else None


def population_std(values: np.ndarray) -> Optional[float]:
	if not values.size:
		return None
	# identical values are exactly 0, even where float rounding of the mean would leave a residue
	if np.ptp(values) == 0:
		return 0.0
	# ddof=0: population, not sample, standard deviation
	return float(np.std(values, ddof=0))


def population_covariance(x: np.ndarray, y: np.ndarray) -> Optional[float]:
	if not x.size:
		return None
	return float(np.mean((x - x.mean()) * (y - y.mean())))


class CorrelationCalculator:
	"""
	Pearson correlation over (x, y) pairs. Pairs with an unknown side are dropped.
	A zero standard deviation on either side yields pearson_r=None instead of NaN.
	"""

	def correlate(self, pairs: Iterable[Tuple[Optional[float], Optional[float]]]) -> CorrelationResult:
		known = [(float(x), float(y)) for x, y in pairs if x is not None and y is not None]
		x = np.array([p[0] for p in known], dtype=float)
		y = np.array([p[1] for p in known], dtype=float)

		std_x, std_y = population_std(x), population_std(y)
		pearson_r = None
		if std_x and std_y:  # None (no pairs) or exactly 0.0 both mean undefined
			pearson_r = population_covariance(x, y) / (std_x * std_y)
			# float error can push |r| a hair past 1
			pearson_r = max(-1.0, min(1.0, pearson_r))
		else:
			logger.debug(f"[Correlation] Degenerate input (n={len(known)}, std_x={std_x}, std_y={std_y}); r unknown")

		result = CorrelationResult(
			n=len(known),
			mean_x=population_mean(x),
			mean_y=population_mean(y),
			pearson_r=pearson_r,
		)
		logger.info(f"[Correlation] n={result.n} r={result.pearson_r}")
		return result
