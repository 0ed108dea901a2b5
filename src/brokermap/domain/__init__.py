"""Domain layer for brokermap application."""

# Services are imported lazily: the database layer imports domain entities,
# and the services import the database layer.
_SERVICES = {
    "AccountService": "brokermap.domain.account",
    "ImportMappingService": "brokermap.domain.import_mapping",
    "ActivityImportService": "brokermap.domain.activity_import",
    "ImportOrchestrator": "brokermap.domain.orchestrator",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
