"""Fixed lookup tables feeding the snapshot derivation formulas.

Order matters: every table is indexed by ``seed % len(table)``, so entries
must only ever be appended.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class CatalogPart:
    code: str
    description: str
    min_cost: float
    max_cost: float


MODELS_BY_MAKE: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "Fiat": ("Ducato", "Doblo", "Fiorino", "Scudo"),
        "Volkswagen": ("Transporter", "Caddy", "Crafter"),
        "Ford": ("Transit", "Transit Custom", "Courier"),
        "Mercedes-Benz": ("Sprinter", "Vito"),
        "Renault": ("Master", "Trafic", "Kangoo"),
        "Iveco": ("Daily",),
    }
)
MAKES: tuple[str, ...] = tuple(MODELS_BY_MAKE)

FUELS: tuple[str, ...] = ("Diesel", "Hybrid", "Electric", "CNG")

# 36 letters and digits minus I, O and Q.
VIN_ALPHABET = "ABCDEFGHJKLMNPRSTUVWXYZ0123456789"

# World manufacturer identifiers of the makes above.
VIN_PREFIXES: tuple[str, ...] = ("ZFA", "WV1", "WF0", "WDB", "VF1", "ZCF")

PARTS_CATALOG: tuple[CatalogPart, ...] = (
    CatalogPart("OIL-5W30-5L", "Engine oil 5W-30 (5L)", 45.0, 85.0),
    CatalogPart("FLT-OIL-001", "Oil filter", 8.0, 18.0),
    CatalogPart("FLT-AIR-002", "Air filter", 10.0, 25.0),
    CatalogPart("BRK-PAD-FR", "Front brake pads set", 35.0, 120.0),
    CatalogPart("BRK-DISC-FR", "Front brake discs pair", 90.0, 220.0),
    CatalogPart("WPR-BL-650", "Wiper blades 650mm", 12.0, 35.0),
)

ORG_UNITS: tuple[str, ...] = (
    "Milan Hub",
    "Rome Hub",
    "Turin Logistics",
    "Service Ops",
    "Warehouse North",
    "Delivery South",
)

ROLES: tuple[str, ...] = ("Driver", "Technician", "Supervisor")

SERVICE_TYPES: tuple[str, ...] = (
    "Service / Oil + Filters",
    "Brake pads replacement",
    "Tyre replacement",
    "Annual inspection",
    "Diagnostics / Electrical",
)

WORKSHOP_CITIES: tuple[str, ...] = ("MI", "RM", "TO", "BO", "NA")
