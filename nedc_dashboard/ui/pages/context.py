from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from nedc_dashboard.config import Settings
from nedc_dashboard.data.aggregation import ProjectStats
from nedc_dashboard.data.filters import FilterSpec


@dataclass
class PageContext:
    raw_df: pd.DataFrame
    filters: FilterSpec
    stats: ProjectStats
    settings: Settings
