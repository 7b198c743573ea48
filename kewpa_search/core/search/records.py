import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .models import (
    Asset,
    EntityKind,
    Inspection,
    InventoryItem,
    MaintenanceRecord,
    Movement,
    SearchableRecord,
    Supplier,
)

logger = logging.getLogger(__name__)

# Record attribute -> accepted row keys, in priority order.
# Rows come either from the SQLite snapshot (snake_case columns) or from the
# REST endpoints (camelCase JSON).
_FIELD_KEYS: Dict[EntityKind, Dict[str, tuple]] = {
    EntityKind.ASSET: {
        "name": ("name",),
        "asset_tag": ("asset_tag", "assetTag"),
        "category": ("category",),
        "department": ("department",),
    },
    EntityKind.INVENTORY: {
        "name": ("name",),
        "sku": ("sku",),
        "category": ("category",),
        "quantity": ("quantity",),
    },
    EntityKind.SUPPLIER: {
        "name": ("name",),
        "contact_person": ("contact_person", "contactPerson"),
        "email": ("email",),
    },
    EntityKind.MOVEMENT: {
        # asset_movements stores the kind of movement in a plain "type" column
        "movement_type": ("movement_type", "movementType", "type"),
        "from_location": ("from_location", "fromLocation"),
        "to_location": ("to_location", "toLocation"),
    },
    EntityKind.INSPECTION: {
        "inspection_type": ("inspection_type", "inspectionType"),
        "status": ("status",),
        "inspection_date": ("inspection_date", "inspectionDate"),
    },
    EntityKind.MAINTENANCE: {
        "maintenance_type": ("maintenance_type", "maintenanceType"),
        "status": ("status",),
        "scheduled_date": ("scheduled_date", "scheduledDate"),
    },
}

_RECORD_TYPES = {
    EntityKind.ASSET: Asset,
    EntityKind.INVENTORY: InventoryItem,
    EntityKind.SUPPLIER: Supplier,
    EntityKind.MOVEMENT: Movement,
    EntityKind.INSPECTION: Inspection,
    EntityKind.MAINTENANCE: MaintenanceRecord,
}


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _pick(row: Mapping[str, Any], keys: tuple) -> str:
    for key in keys:
        if key in row and row[key] is not None:
            return _text(row[key])
    return ""


def record_from_row(kind, row: Mapping[str, Any]) -> SearchableRecord:
    """
    Builds the typed record for `kind` from one raw row.
    Missing or None values become "".
    """
    kind = EntityKind.parse(kind)
    values = {attr: _pick(row, keys) for attr, keys in _FIELD_KEYS[kind].items()}
    return _RECORD_TYPES[kind](id=_text(row.get("id")), **values)


def build_collection(kind, rows: Optional[Iterable[Mapping[str, Any]]]) -> Optional[List[SearchableRecord]]:
    """
    Converts a raw collection. None (fetch failed / not loaded) stays None so the
    kind is treated as absent.
    """
    if rows is None:
        return None
    kind = EntityKind.parse(kind)
    records = []
    for row in rows:
        if not isinstance(row, Mapping):
            logger.warning(f"Skipping non-mapping {kind.value} row: {row!r}")
            continue
        records.append(record_from_row(kind, row))
    return records


def build_collections(raw: Mapping[Any, Optional[Iterable[Mapping[str, Any]]]]) -> Dict[EntityKind, List[SearchableRecord]]:
    collections = {}
    for kind, rows in raw.items():
        records = build_collection(kind, rows)
        if records is not None:
            collections[EntityKind.parse(kind)] = records
    return collections
