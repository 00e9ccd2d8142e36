"""Application layer - fetch orchestration, mutations, and the engine facade."""

from catalogsync.application.engine import CatalogEngine
from catalogsync.application.fetch_orchestrator import FetchIntent, FetchOrchestrator
from catalogsync.application.mutation_gateway import MutationGateway, MutationResult

__all__ = [
    "CatalogEngine",
    "FetchIntent",
    "FetchOrchestrator",
    "MutationGateway",
    "MutationResult",
]
