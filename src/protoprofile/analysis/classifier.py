"""Field classifier: buckets access statistics into presence and usage."""

from __future__ import annotations

from typing import TYPE_CHECKING

from protoprofile.analysis.types import FieldAnalysis, Scale
from protoprofile.config import ThresholdConfig
from protoprofile.profiling.types import AccessKind

if TYPE_CHECKING:
    from protoprofile.profiling.types import AccessStats


class FieldClassifier:
    """Maps a field's AccessStats to a FieldAnalysis.

    Stateless apart from the thresholds, so one instance can classify any
    number of fields, from any thread.
    """

    def __init__(self, thresholds: ThresholdConfig | None = None) -> None:
        self.thresholds = thresholds or ThresholdConfig()

    def classify(
        self, stats: AccessStats | None, in_profile: bool | None = None
    ) -> FieldAnalysis:
        """Classify one field.

        Args:
        ----
            stats: Access statistics for the field, None if it was not profiled
            in_profile: Whether the field appears in the profile. Defaults to
                ``stats is not None``. When False, stats are not consulted.

        Returns:
        -------
            Presence and usage buckets, both DEFAULT for unprofiled fields

        """
        if in_profile is None:
            in_profile = stats is not None
        if not in_profile or stats is None:
            return FieldAnalysis()

        return FieldAnalysis(
            presence=self._presence(stats),
            usage=self._usage(stats),
        )

    def _presence(self, stats: AccessStats) -> Scale:
        if self.is_likely_present(stats):
            return Scale.LIKELY
        if self.is_rarely_present(stats):
            return Scale.RARELY
        return Scale.DEFAULT

    def _usage(self, stats: AccessStats) -> Scale:
        if stats.count(AccessKind.READ_WRITE_OTHER) <= self.thresholds.unlikely_used_threshold:
            return Scale.RARELY
        return Scale.DEFAULT

    def is_likely_present(self, stats: AccessStats) -> bool:
        hot_ratio = self.thresholds.hot_ratio
        return stats.is_hot(AccessKind.READ, hot_ratio) or stats.is_hot(
            AccessKind.WRITE, hot_ratio
        )

    def is_rarely_present(self, stats: AccessStats) -> bool:
        cold_ratio = self.thresholds.cold_ratio
        return stats.is_cold(AccessKind.READ, cold_ratio) and stats.is_cold(
            AccessKind.WRITE, cold_ratio
        )
