"""Domain layer for fincontrol application."""

# Services import the database layer, which imports domain entities; resolve
# them lazily so importing fincontrol.domain.entities stays cycle-free.
_SERVICES = {
    "CategoryService": "fincontrol.domain.category",
    "CostCenterService": "fincontrol.domain.cost_center",
    "ClientService": "fincontrol.domain.party",
    "SupplierService": "fincontrol.domain.party",
    "PayableService": "fincontrol.domain.payable",
    "ReceivableService": "fincontrol.domain.receivable",
    "ReportService": "fincontrol.domain.reports",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
