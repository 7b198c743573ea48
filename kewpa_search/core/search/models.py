from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Tuple


class EntityKind(str, Enum):
    ASSET = "asset"
    INVENTORY = "inventory"
    SUPPLIER = "supplier"
    MOVEMENT = "movement"
    INSPECTION = "inspection"
    MAINTENANCE = "maintenance"

    @classmethod
    def parse(cls, value) -> "EntityKind":
        """
        Accepts an EntityKind or its string value ("asset", "Supplier", ...).
        Raises ValueError for anything else.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown entity kind: {value!r}") from None


# Ties in ranking keep this order.
CANONICAL_KIND_ORDER: Tuple[EntityKind, ...] = (
    EntityKind.ASSET,
    EntityKind.INVENTORY,
    EntityKind.SUPPLIER,
    EntityKind.MOVEMENT,
    EntityKind.INSPECTION,
    EntityKind.MAINTENANCE,
)


@dataclass(frozen=True)
class MatchResult:
    score: int = 0
    highlights: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SearchResult:
    """
    One ranked hit, ready for rendering. Recomputed on every search.
    """
    id: str
    kind: EntityKind
    title: str
    subtitle: str
    score: int
    matched_fragments: Tuple[str, ...] = ()
    navigation_target: str = ""

    @property
    def key(self) -> str:
        return f"{self.kind.value}-{self.id}"


@dataclass(frozen=True)
class SearchableRecord(ABC):
    """
    Base of the six record variants. Field values are always strings
    (missing values are stored as "").
    """
    kind: ClassVar[EntityKind]

    id: str

    @abstractmethod
    def search_fields(self) -> Tuple[Tuple[str, str], ...]:
        pass

    @property
    @abstractmethod
    def display_title(self) -> str:
        pass

    @property
    @abstractmethod
    def display_subtitle(self) -> str:
        pass

    @property
    @abstractmethod
    def navigation_target(self) -> str:
        pass


@dataclass(frozen=True)
class Asset(SearchableRecord):
    kind: ClassVar[EntityKind] = EntityKind.ASSET

    name: str = ""
    asset_tag: str = ""
    category: str = ""
    department: str = ""

    def search_fields(self):
        return (
            ("name", self.name),
            ("asset_tag", self.asset_tag),
            ("category", self.category),
            ("department", self.department),
        )

    @property
    def display_title(self):
        return self.name or f"Asset {self.asset_tag}"

    @property
    def display_subtitle(self):
        return f"{self.category} • {self.department} • Tag: {self.asset_tag}"

    @property
    def navigation_target(self):
        return f"/assets?highlight={self.id}"


@dataclass(frozen=True)
class InventoryItem(SearchableRecord):
    kind: ClassVar[EntityKind] = EntityKind.INVENTORY

    name: str = ""
    sku: str = ""
    category: str = ""
    quantity: str = ""

    def search_fields(self):
        return (
            ("name", self.name),
            ("sku", self.sku),
            ("category", self.category),
        )

    @property
    def display_title(self):
        return self.name or f"Item {self.sku}"

    @property
    def display_subtitle(self):
        return f"{self.category} • SKU: {self.sku} • Qty: {self.quantity}"

    @property
    def navigation_target(self):
        return f"/inventory?highlight={self.id}"


@dataclass(frozen=True)
class Supplier(SearchableRecord):
    kind: ClassVar[EntityKind] = EntityKind.SUPPLIER

    name: str = ""
    contact_person: str = ""
    email: str = ""

    def search_fields(self):
        return (
            ("name", self.name),
            ("contact_person", self.contact_person),
        )

    @property
    def display_title(self):
        return self.name or "Unnamed Supplier"

    @property
    def display_subtitle(self):
        return f"Contact: {self.contact_person} • {self.email}"

    @property
    def navigation_target(self):
        return f"/suppliers?highlight={self.id}"


@dataclass(frozen=True)
class Movement(SearchableRecord):
    kind: ClassVar[EntityKind] = EntityKind.MOVEMENT

    movement_type: str = ""
    from_location: str = ""
    to_location: str = ""

    def search_fields(self):
        return (
            ("movement_type", self.movement_type),
            ("from_location", self.from_location),
            ("to_location", self.to_location),
        )

    @property
    def display_title(self):
        return f"{self.movement_type} Movement"

    @property
    def display_subtitle(self):
        return f"From: {self.from_location} → To: {self.to_location}"

    @property
    def navigation_target(self):
        return f"/asset-movement?highlight={self.id}"


@dataclass(frozen=True)
class Inspection(SearchableRecord):
    kind: ClassVar[EntityKind] = EntityKind.INSPECTION

    inspection_type: str = ""
    status: str = ""
    inspection_date: str = ""

    def search_fields(self):
        return (
            ("inspection_type", self.inspection_type),
            ("status", self.status),
        )

    @property
    def display_title(self):
        return f"{self.inspection_type} Inspection"

    @property
    def display_subtitle(self):
        return f"Status: {self.status} • {self.inspection_date}"

    @property
    def navigation_target(self):
        return f"/asset-inspection?highlight={self.id}"


@dataclass(frozen=True)
class MaintenanceRecord(SearchableRecord):
    kind: ClassVar[EntityKind] = EntityKind.MAINTENANCE

    maintenance_type: str = ""
    status: str = ""
    scheduled_date: str = ""

    def search_fields(self):
        return (
            ("maintenance_type", self.maintenance_type),
            ("status", self.status),
        )

    @property
    def display_title(self):
        return f"{self.maintenance_type} Maintenance"

    @property
    def display_subtitle(self):
        return f"Status: {self.status} • {self.scheduled_date}"

    @property
    def navigation_target(self):
        return f"/asset-maintenance?highlight={self.id}"
