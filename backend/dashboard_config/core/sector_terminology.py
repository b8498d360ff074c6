"""
Sector-aware terminology.

Bilingual (es/en) vocabulary per business category so a retail venue sees
"Product" where a restaurant sees "Dish".

Resolution order: venue label override > sector default > FOOD_SERVICE.
resolve_terms() never raises. A missing bucket is caught by
validate_terminology() at import.
"""

import logging
from enum import Enum
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)


class BusinessCategory(str, Enum):
    FOOD_SERVICE = "FOOD_SERVICE"
    RETAIL = "RETAIL"
    SERVICES = "SERVICES"
    HOSPITALITY = "HOSPITALITY"
    ENTERTAINMENT = "ENTERTAINMENT"
    OTHER = "OTHER"


DEFAULT_CATEGORY = BusinessCategory.FOOD_SERVICE.value
DEFAULT_LOCALE = "es"
SUPPORTED_LOCALES = ("es", "en")


class TermKey(str, Enum):
    MENU = "menu"
    MENU_PLURAL = "menuPlural"
    ITEM = "item"
    ITEM_PLURAL = "itemPlural"
    ORDER = "order"
    ORDER_PLURAL = "orderPlural"
    TABLE = "table"
    TABLE_PLURAL = "tablePlural"
    WAITER = "waiter"
    WAITER_PLURAL = "waiterPlural"
    CASHIER = "cashier"
    CASHIER_PLURAL = "cashierPlural"
    KITCHEN = "kitchen"
    KITCHEN_PLURAL = "kitchenPlural"
    HOST = "host"
    HOST_PLURAL = "hostPlural"


TERM_KEYS = tuple(key.value for key in TermKey)

SectorTerms = Dict[str, str]


SECTOR_TERMINOLOGY: Dict[str, Dict[str, SectorTerms]] = {
    "FOOD_SERVICE": {
        "es": {
            "menu": "Menu",
            "menuPlural": "Menus",
            "item": "Platillo",
            "itemPlural": "Platillos",
            "order": "Orden",
            "orderPlural": "Ordenes",
            "table": "Mesa",
            "tablePlural": "Mesas",
            "waiter": "Mesero",
            "waiterPlural": "Meseros",
            "cashier": "Cajero",
            "cashierPlural": "Cajeros",
            "kitchen": "Cocina",
            "kitchenPlural": "Cocinas",
            "host": "Host",
            "hostPlural": "Hosts",
        },
        "en": {
            "menu": "Menu",
            "menuPlural": "Menus",
            "item": "Dish",
            "itemPlural": "Dishes",
            "order": "Order",
            "orderPlural": "Orders",
            "table": "Table",
            "tablePlural": "Tables",
            "waiter": "Waiter",
            "waiterPlural": "Waiters",
            "cashier": "Cashier",
            "cashierPlural": "Cashiers",
            "kitchen": "Kitchen",
            "kitchenPlural": "Kitchens",
            "host": "Host",
            "hostPlural": "Hosts",
        },
    },
    "RETAIL": {
        "es": {
            "menu": "Catalogo",
            "menuPlural": "Catalogos",
            "item": "Producto",
            "itemPlural": "Productos",
            "order": "Venta",
            "orderPlural": "Ventas",
            "table": "Caja",
            "tablePlural": "Cajas",
            "waiter": "Vendedor",
            "waiterPlural": "Vendedores",
            "cashier": "Cajero",
            "cashierPlural": "Cajeros",
            "kitchen": "Almacen",
            "kitchenPlural": "Almacenes",
            "host": "Recepcionista",
            "hostPlural": "Recepcionistas",
        },
        "en": {
            "menu": "Catalog",
            "menuPlural": "Catalogs",
            "item": "Product",
            "itemPlural": "Products",
            "order": "Sale",
            "orderPlural": "Sales",
            "table": "Register",
            "tablePlural": "Registers",
            "waiter": "Sales Associate",
            "waiterPlural": "Sales Associates",
            "cashier": "Cashier",
            "cashierPlural": "Cashiers",
            "kitchen": "Warehouse",
            "kitchenPlural": "Warehouses",
            "host": "Receptionist",
            "hostPlural": "Receptionists",
        },
    },
    "SERVICES": {
        "es": {
            "menu": "Servicios",
            "menuPlural": "Servicios",
            "item": "Servicio",
            "itemPlural": "Servicios",
            "order": "Cita",
            "orderPlural": "Citas",
            "table": "Estacion",
            "tablePlural": "Estaciones",
            "waiter": "Especialista",
            "waiterPlural": "Especialistas",
            "cashier": "Recepcionista",
            "cashierPlural": "Recepcionistas",
            "kitchen": "Area de Servicio",
            "kitchenPlural": "Areas de Servicio",
            "host": "Recepcionista",
            "hostPlural": "Recepcionistas",
        },
        "en": {
            "menu": "Services",
            "menuPlural": "Services",
            "item": "Service",
            "itemPlural": "Services",
            "order": "Appointment",
            "orderPlural": "Appointments",
            "table": "Station",
            "tablePlural": "Stations",
            "waiter": "Specialist",
            "waiterPlural": "Specialists",
            "cashier": "Receptionist",
            "cashierPlural": "Receptionists",
            "kitchen": "Service Area",
            "kitchenPlural": "Service Areas",
            "host": "Receptionist",
            "hostPlural": "Receptionists",
        },
    },
    "HOSPITALITY": {
        "es": {
            "menu": "Servicios",
            "menuPlural": "Servicios",
            "item": "Servicio",
            "itemPlural": "Servicios",
            "order": "Reservacion",
            "orderPlural": "Reservaciones",
            "table": "Habitacion",
            "tablePlural": "Habitaciones",
            "waiter": "Concierge",
            "waiterPlural": "Concierges",
            "cashier": "Recepcionista",
            "cashierPlural": "Recepcionistas",
            "kitchen": "Servicio a Cuartos",
            "kitchenPlural": "Servicios a Cuartos",
            "host": "Recepcionista",
            "hostPlural": "Recepcionistas",
        },
        "en": {
            "menu": "Services",
            "menuPlural": "Services",
            "item": "Service",
            "itemPlural": "Services",
            "order": "Reservation",
            "orderPlural": "Reservations",
            "table": "Room",
            "tablePlural": "Rooms",
            "waiter": "Concierge",
            "waiterPlural": "Concierges",
            "cashier": "Receptionist",
            "cashierPlural": "Receptionists",
            "kitchen": "Room Service",
            "kitchenPlural": "Room Services",
            "host": "Receptionist",
            "hostPlural": "Receptionists",
        },
    },
    "ENTERTAINMENT": {
        "es": {
            "menu": "Cartelera",
            "menuPlural": "Carteleras",
            "item": "Evento",
            "itemPlural": "Eventos",
            "order": "Entrada",
            "orderPlural": "Entradas",
            "table": "Sala",
            "tablePlural": "Salas",
            "waiter": "Staff",
            "waiterPlural": "Staff",
            "cashier": "Taquillero",
            "cashierPlural": "Taquilleros",
            "kitchen": "Backstage",
            "kitchenPlural": "Backstages",
            "host": "Recepcionista",
            "hostPlural": "Recepcionistas",
        },
        "en": {
            "menu": "Events",
            "menuPlural": "Events",
            "item": "Event",
            "itemPlural": "Events",
            "order": "Ticket",
            "orderPlural": "Tickets",
            "table": "Hall",
            "tablePlural": "Halls",
            "waiter": "Staff",
            "waiterPlural": "Staff",
            "cashier": "Ticket Agent",
            "cashierPlural": "Ticket Agents",
            "kitchen": "Backstage",
            "kitchenPlural": "Backstages",
            "host": "Receptionist",
            "hostPlural": "Receptionists",
        },
    },
    "OTHER": {
        "es": {
            "menu": "Catalogo",
            "menuPlural": "Catalogos",
            "item": "Item",
            "itemPlural": "Items",
            "order": "Orden",
            "orderPlural": "Ordenes",
            "table": "Ubicacion",
            "tablePlural": "Ubicaciones",
            "waiter": "Asistente",
            "waiterPlural": "Asistentes",
            "cashier": "Cajero",
            "cashierPlural": "Cajeros",
            "kitchen": "Almacen",
            "kitchenPlural": "Almacenes",
            "host": "Recepcionista",
            "hostPlural": "Recepcionistas",
        },
        "en": {
            "menu": "Catalog",
            "menuPlural": "Catalogs",
            "item": "Item",
            "itemPlural": "Items",
            "order": "Order",
            "orderPlural": "Orders",
            "table": "Location",
            "tablePlural": "Locations",
            "waiter": "Assistant",
            "waiterPlural": "Assistants",
            "cashier": "Cashier",
            "cashierPlural": "Cashiers",
            "kitchen": "Storage",
            "kitchenPlural": "Storages",
            "host": "Receptionist",
            "hostPlural": "Receptionists",
        },
    },
}


def validate_terminology(table: Mapping[str, Mapping[str, Mapping[str, str]]] = None) -> None:
    """Assert every category defines every term for every supported locale."""
    table = SECTOR_TERMINOLOGY if table is None else table
    for category in BusinessCategory:
        buckets = table.get(category.value)
        if buckets is None:
            raise ValueError(f"Terminology missing category {category.value}")
        for locale in SUPPORTED_LOCALES:
            terms = buckets.get(locale)
            if terms is None:
                raise ValueError(f"Terminology {category.value} missing locale {locale!r}")
            for key in TERM_KEYS:
                value = terms.get(key)
                if not isinstance(value, str) or not value.strip():
                    raise ValueError(f"Terminology {category.value}/{locale} missing term {key!r}")


validate_terminology()


def normalize_locale(locale: Optional[str]) -> str:
    """``en*`` -> ``en``; everything else (including None) -> ``es``."""
    if isinstance(locale, str) and locale.strip().lower().startswith("en"):
        return "en"
    return DEFAULT_LOCALE


def normalize_category(category: Optional[str]) -> str:
    """Known category name or DEFAULT_CATEGORY."""
    if isinstance(category, str) and category in SECTOR_TERMINOLOGY:
        return category
    return DEFAULT_CATEGORY


def resolve_terms(
    category: Optional[str],
    locale: Optional[str],
    overrides: Optional[Mapping[str, str]] = None,
) -> SectorTerms:
    """Sector vocabulary for ``category`` in ``locale``. Never raises.

    ``overrides`` are venue-specific labels; only known term keys with
    non-empty string values are applied.
    """
    normalized_locale = normalize_locale(locale)
    if not (isinstance(category, str) and category in SECTOR_TERMINOLOGY):
        logger.debug("Unknown business category %r, using %s terminology", category, DEFAULT_CATEGORY)
    sector = SECTOR_TERMINOLOGY[normalize_category(category)]
    terms = dict(sector.get(normalized_locale) or sector[DEFAULT_LOCALE])

    if overrides:
        for key, value in overrides.items():
            if key in terms and isinstance(value, str) and value.strip():
                terms[key] = value.strip()
    return terms
