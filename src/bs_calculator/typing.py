from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

# typing only
type FloatArray = NDArray[np.floating]
type ArrayLike = float | np.ndarray | np.floating

# Runtime types
FloatDType = np.float64  # runtime dtype only
