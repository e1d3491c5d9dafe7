"""Welsh Government statistics ingestion, merging and reporting."""

from stats_wales_data.areas import Area, AreaStore, Measure

__all__ = ["Area", "AreaStore", "Measure"]
