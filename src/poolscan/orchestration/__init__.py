"""Orchestration of a one-shot pool scan.

This package provides:
- run_scan: interface-only use case (fetch → enrich → sink)
- scan_pools: wires the RPC client and the tabular writer from a ScanConfig
"""

from poolscan.orchestration.orchestrator import ScanOutput, run_scan, scan_pools

__all__ = [
    "ScanOutput",
    "run_scan",
    "scan_pools",
]
