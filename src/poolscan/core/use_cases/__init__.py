"""Application use cases."""

from poolscan.core.use_cases.enrich_pools import EnrichmentPipeline, PipelineStats

__all__ = ["EnrichmentPipeline", "PipelineStats"]
