"""Benchmark position analysis.

Places the client against ICP baselines. The current analyst has no client
metrics to compare with, so it reports a fixed position and potential; a
richer analyst can be injected into the gatherer.
"""

from typing import Any, Dict

from contracts import BenchmarkRecord, ClientPosition, ImprovementPotential, NormalizedContext


class BenchmarkAnalyst:
    """Wraps raw baselines with the client's position and improvement potential."""

    def client_position(self, context: NormalizedContext, metrics: Dict[str, Any]) -> ClientPosition:
        return ClientPosition()

    def improvement_potential(self, context: NormalizedContext, metrics: Dict[str, Any]) -> ImprovementPotential:
        return ImprovementPotential()

    def analyze(self, context: NormalizedContext, metrics: Dict[str, Any]) -> BenchmarkRecord:
        return BenchmarkRecord(
            metrics=dict(metrics),
            client_position=self.client_position(context, metrics),
            improvement_potential=self.improvement_potential(context, metrics),
        )
