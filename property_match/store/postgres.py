"""PostgreSQL listing store backed by psycopg.

``PostgresDatabase`` is an explicit connection handle: callers create it,
call ``init()`` (or use it as a context manager) and ``close()`` it when
done. Repositories receive the handle instead of reaching for a global
client.
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import replace
from decimal import Decimal
from typing import Any, Iterable, Iterator

import psycopg
from psycopg.rows import dict_row

from property_match.config import PostgresConfig
from property_match.exceptions import NotFoundError, StoreUnavailableError
from property_match.models.listing import (
    BuyerRequest,
    BuyerRequestStats,
    BuyerRequestStatus,
    ContactMethod,
    FilterSpec,
    Property,
    PropertyImage,
    PropertyStats,
    PropertyStatus,
    PropertyType,
    PropertyUpdate,
    SiteVisit,
    SiteVisitStatus,
    Timeline,
    Urgency,
)
from property_match.search.sql import (
    ORDER_NEWEST_FIRST,
    PROPERTY_COLUMNS,
    compile_filters,
    compile_match,
    where,
)
from property_match.store.base import (
    DEFAULT_RECENT_DAYS,
    BuyerRequestRepository,
    PropertyRepository,
    SiteVisitRepository,
)
from property_match.validation import allowed_sources, check_property_transition

logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS properties (
        id TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
        title TEXT NOT NULL DEFAULT '',
        property_type TEXT NOT NULL CHECK (property_type IN ('land', 'house', 'commercial', 'apartment', 'villa')),
        location_district TEXT NOT NULL,
        location_town TEXT NOT NULL,
        location_village TEXT,
        distance_from_main_road TEXT,
        has_water BOOLEAN NOT NULL DEFAULT false,
        has_power BOOLEAN NOT NULL DEFAULT false,
        has_internet BOOLEAN NOT NULL DEFAULT false,
        size_acres NUMERIC CHECK (size_acres > 0),
        size_sqft NUMERIC CHECK (size_sqft > 0),
        bedrooms INTEGER,
        bathrooms INTEGER,
        asking_price NUMERIC NOT NULL CHECK (asking_price > 0),
        description TEXT,
        owner_name TEXT NOT NULL,
        owner_phone TEXT NOT NULL,
        owner_email TEXT,
        status TEXT NOT NULL DEFAULT 'pending' CHECK (status IN ('pending', 'approved', 'sold', 'withdrawn')),
        submitted_by TEXT,
        approved_by TEXT,
        approved_at TIMESTAMPTZ,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS property_images (
        id TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
        property_id TEXT NOT NULL REFERENCES properties(id) ON DELETE CASCADE,
        image_url TEXT NOT NULL,
        image_order INTEGER NOT NULL DEFAULT 0,
        is_primary BOOLEAN NOT NULL DEFAULT false,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS buyer_requests (
        id TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
        user_id TEXT,
        property_type TEXT NOT NULL CHECK (property_type IN ('land', 'house', 'commercial', 'apartment', 'villa')),
        budget_min NUMERIC NOT NULL,
        budget_max NUMERIC NOT NULL,
        preferred_districts TEXT[] NOT NULL,
        preferred_towns TEXT,
        requires_water BOOLEAN NOT NULL DEFAULT false,
        requires_power BOOLEAN NOT NULL DEFAULT false,
        requires_internet BOOLEAN NOT NULL DEFAULT false,
        min_bedrooms INTEGER,
        min_bathrooms INTEGER,
        min_size_acres NUMERIC,
        min_size_sqft NUMERIC,
        additional_requirements TEXT,
        contact_name TEXT NOT NULL,
        contact_phone TEXT NOT NULL,
        contact_email TEXT,
        urgency TEXT NOT NULL DEFAULT 'medium' CHECK (urgency IN ('low', 'medium', 'high')),
        preferred_contact_method TEXT NOT NULL DEFAULT 'phone' CHECK (preferred_contact_method IN ('phone', 'email', 'whatsapp')),
        timeline TEXT NOT NULL DEFAULT '3-6months' CHECK (timeline IN ('immediate', '1-3months', '3-6months', '6-12months')),
        status TEXT NOT NULL DEFAULT 'active' CHECK (status IN ('active', 'matched', 'fulfilled', 'cancelled')),
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        CHECK (budget_min < budget_max)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS site_visits (
        id TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
        property_id TEXT NOT NULL REFERENCES properties(id) ON DELETE CASCADE,
        visitor_name TEXT NOT NULL,
        visitor_phone TEXT NOT NULL,
        visitor_email TEXT,
        preferred_date DATE NOT NULL,
        preferred_time TIME NOT NULL,
        message TEXT,
        status TEXT NOT NULL DEFAULT 'pending' CHECK (status IN ('pending', 'confirmed', 'completed', 'cancelled')),
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_properties_status ON properties(status)",
    "CREATE INDEX IF NOT EXISTS idx_properties_created_at ON properties(created_at)",
    "CREATE INDEX IF NOT EXISTS idx_properties_status_type ON properties(status, property_type)",
    "CREATE INDEX IF NOT EXISTS idx_properties_status_district ON properties(status, location_district)",
    "CREATE INDEX IF NOT EXISTS idx_properties_price ON properties(asking_price)",
    "CREATE INDEX IF NOT EXISTS idx_property_images_property_id ON property_images(property_id, image_order)",
    "CREATE INDEX IF NOT EXISTS idx_buyer_requests_status ON buyer_requests(status)",
    "CREATE INDEX IF NOT EXISTS idx_buyer_requests_created_at ON buyer_requests(created_at)",
    "CREATE INDEX IF NOT EXISTS idx_site_visits_property_id ON site_visits(property_id)",
)

SELECT_PROPERTIES = "SELECT " + ", ".join(f"p.{c}" for c in PROPERTY_COLUMNS) + " FROM properties p"


class PostgresDatabase:
    """Connection handle with explicit ``init()``/``close()`` lifecycle."""

    def __init__(self, conninfo: str) -> None:
        """Initialize the handle without connecting.

        Parameters
        ----------
        conninfo : str
            PostgreSQL connection string.
        """
        self.conninfo = conninfo
        self.conn: psycopg.Connection | None = None
        self.round_trips = 0  # Statements sent since init()

    @classmethod
    def from_config(cls, config: PostgresConfig) -> "PostgresDatabase":
        return cls(config.connection_string)

    def init(self) -> "PostgresDatabase":
        """Open the connection (autocommit; multi-statement writes use ``transaction()``)."""
        if self.conn is not None:
            return self
        try:
            self.conn = psycopg.connect(self.conninfo, autocommit=True, row_factory=dict_row)
        except psycopg.Error as exc:
            raise StoreUnavailableError(
                "Could not connect to the listing database, please try again"
            ) from exc
        self.round_trips = 0
        logger.info("Connected to PostgreSQL")
        return self

    def close(self) -> None:
        """Close the connection if open."""
        if self.conn is not None:
            self.conn.close()
            self.conn = None
            logger.info("PostgreSQL connection closed")

    def __enter__(self) -> "PostgresDatabase":
        return self.init()

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def connection(self) -> psycopg.Connection:
        if self.conn is None:
            raise StoreUnavailableError("Database handle is not initialized; call init() first")
        return self.conn

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Run the enclosed statements atomically."""
        try:
            with self.connection.transaction():
                yield
        except psycopg.Error as exc:
            raise StoreUnavailableError("Listing database transaction failed, please try again") from exc

    def execute(self, query: str, params: list[Any] | tuple | None = None) -> list[dict[str, Any]]:
        """Run one statement and return its rows (empty for statements without results).

        Raises
        ------
        StoreUnavailableError
            If the database cannot be reached or the statement fails.
        """
        start = time.perf_counter()
        self.round_trips += 1
        try:
            with self.connection.cursor() as cur:
                cur.execute(query, params)
                rows = cur.fetchall() if cur.description else []
        except psycopg.Error as exc:
            logger.error("Query failed: %s", exc)
            raise StoreUnavailableError("Listing database is unavailable, please try again") from exc
        logger.debug("Query returned %d row(s) in %.1fms", len(rows), (time.perf_counter() - start) * 1000)
        return rows

    def create_tables(self) -> None:
        """Create tables and indexes if they do not exist."""
        with self.transaction():
            for statement in SCHEMA_STATEMENTS:
                self.execute(statement)
        logger.info("Listing tables ready")


class PostgresPropertyRepository(PropertyRepository):
    """Property repository that pushes filters and match criteria into SQL.

    Listing queries take two round trips however many rows come back: one
    for the properties and one for all of their images.
    """

    def __init__(self, db: PostgresDatabase, recent_days: int = DEFAULT_RECENT_DAYS) -> None:
        super().__init__(recent_days)
        self.db = db

    def create_with_images(self, prop: Property, image_urls: Iterable[str] = ()) -> Property:
        """Insert the listing and its images in one transaction."""
        with self.db.transaction():
            created = self.create(prop)
            images = self.add_images(created.property_id, image_urls)
        return replace(created, images=images) if images else created

    def get_approved(self, filters: FilterSpec | None = None) -> list[Property]:
        clauses, params = compile_filters(filters)
        clauses.insert(0, "p.status = %s")
        params.insert(0, PropertyStatus.APPROVED.value)
        query = f"{SELECT_PROPERTIES} {where(clauses)} {ORDER_NEWEST_FIRST}"
        if filters is not None and filters.limit is not None:
            query += " LIMIT %s"
            params.append(filters.limit)
        return self._with_images(self.db.execute(query, params))

    def get_all(self) -> list[Property]:
        return self._with_images(self.db.execute(f"{SELECT_PROPERTIES} {ORDER_NEWEST_FIRST}"))

    def get_by_id(self, property_id: str, approved_only: bool = True) -> Property | None:
        clauses = ["p.id = %s"]
        params: list[Any] = [property_id]
        if approved_only:
            clauses.append("p.status = %s")
            params.append(PropertyStatus.APPROVED.value)
        rows = self.db.execute(f"{SELECT_PROPERTIES} {where(clauses)}", params)
        found = self._with_images(rows)
        return found[0] if found else None

    def find_matches(self, request: BuyerRequest) -> list[Property]:
        clauses, params = compile_match(request)
        query = f"{SELECT_PROPERTIES} {where(clauses)} {ORDER_NEWEST_FIRST}"
        return self._with_images(self.db.execute(query, params))

    def delete(self, property_id: str) -> None:
        with self.db.transaction():
            self.db.execute("DELETE FROM property_images WHERE property_id = %s", [property_id])
            deleted = self.db.execute(
                "DELETE FROM properties WHERE id = %s RETURNING id", [property_id]
            )
            if not deleted:
                raise NotFoundError(f"Property {property_id} not found")
        logger.info("Deleted property %s", property_id, extra={"property_id": property_id})

    def get_images(self, property_id: str) -> list[PropertyImage]:
        rows = self.db.execute(
            "SELECT * FROM property_images WHERE property_id = %s ORDER BY image_order, created_at",
            [property_id],
        )
        return [_image_from_row(r) for r in rows]

    def stats(self) -> PropertyStats:
        rows = self.db.execute(
            """
            SELECT
                COUNT(*) AS total,
                COUNT(*) FILTER (WHERE status = 'pending') AS pending,
                COUNT(*) FILTER (WHERE status = 'approved') AS approved,
                COUNT(*) FILTER (WHERE status = 'sold') AS sold,
                COUNT(*) FILTER (WHERE status = 'withdrawn') AS withdrawn,
                AVG(asking_price) AS average_price,
                COUNT(*) FILTER (WHERE created_at >= NOW() - %s * INTERVAL '1 day') AS recent
            FROM properties
            """,
            [self.recent_days],
        )
        row = rows[0]
        return PropertyStats(
            total=row["total"],
            pending=row["pending"],
            approved=row["approved"],
            sold=row["sold"],
            withdrawn=row["withdrawn"],
            average_price=row["average_price"],
            recent=row["recent"],
        )

    def _insert(self, record: Property) -> Property:
        columns = (
            "title", "property_type", "location_district", "location_town", "location_village",
            "distance_from_main_road", "has_water", "has_power", "has_internet",
            "size_acres", "size_sqft", "bedrooms", "bathrooms", "asking_price",
            "description", "owner_name", "owner_phone", "owner_email", "status", "submitted_by",
        )
        values = [
            record.title,
            record.property_type.value,
            record.location_district,
            record.location_town,
            record.location_village,
            record.distance_from_main_road,
            record.has_water,
            record.has_power,
            record.has_internet,
            record.size_acres,
            record.size_sqft,
            record.bedrooms,
            record.bathrooms,
            record.asking_price,
            record.description,
            record.owner_name,
            record.owner_phone,
            record.owner_email,
            record.status.value,
            record.submitted_by,
        ]
        if record.created_at is not None:
            columns += ("created_at",)
            values.append(record.created_at)
        placeholders = ", ".join(["%s"] * len(values))
        rows = self.db.execute(
            f"INSERT INTO properties ({', '.join(columns)}) VALUES ({placeholders}) RETURNING *",
            values,
        )
        return _property_from_row(rows[0])

    def _transition(
        self, property_id: str, status: PropertyStatus, approved_by: str | None
    ) -> Property:
        sources = [s.value for s in allowed_sources(status)]
        if not sources:
            rows = []
        elif status == PropertyStatus.APPROVED:
            rows = self.db.execute(
                """
                UPDATE properties
                SET status = %s, approved_by = %s, approved_at = NOW(), updated_at = NOW()
                WHERE id = %s AND status = ANY(%s)
                RETURNING *
                """,
                [status.value, approved_by, property_id, sources],
            )
        else:
            rows = self.db.execute(
                """
                UPDATE properties
                SET status = %s, updated_at = NOW()
                WHERE id = %s AND status = ANY(%s)
                RETURNING *
                """,
                [status.value, property_id, sources],
            )
        if not rows:
            self._raise_for_failed_transition(property_id, status)
        return self._with_images(rows)[0]

    def _raise_for_failed_transition(self, property_id: str, status: PropertyStatus) -> None:
        current = self.db.execute("SELECT status FROM properties WHERE id = %s", [property_id])
        if not current:
            raise NotFoundError(f"Property {property_id} not found")
        check_property_transition(PropertyStatus(current[0]["status"]), status)
        # The row changed between the UPDATE and this read
        raise StoreUnavailableError(
            f"Property {property_id} changed concurrently, please try again"
        )

    def _apply_update(self, property_id: str, changes: PropertyUpdate) -> Property:
        rows = self.db.execute(
            """
            UPDATE properties
            SET title = COALESCE(%s, title),
                description = COALESCE(%s, description),
                property_type = COALESCE(%s, property_type),
                asking_price = COALESCE(%s, asking_price),
                updated_at = NOW()
            WHERE id = %s
            RETURNING *
            """,
            [
                changes.title,
                changes.description,
                changes.property_type.value if changes.property_type else None,
                changes.asking_price,
                property_id,
            ],
        )
        if not rows:
            raise NotFoundError(f"Property {property_id} not found")
        return self._with_images(rows)[0]

    def _insert_images(self, property_id: str, urls: list[str]) -> list[PropertyImage]:
        with self.db.transaction():
            locked = self.db.execute(
                "SELECT id FROM properties WHERE id = %s FOR UPDATE", [property_id]
            )
            if not locked:
                raise NotFoundError(f"Property {property_id} not found")
            existing = self.db.execute(
                """
                SELECT COUNT(*) AS existing, COALESCE(MAX(image_order) + 1, 0) AS next_order
                FROM property_images WHERE property_id = %s
                """,
                [property_id],
            )[0]
            rows = self.db.execute(
                """
                INSERT INTO property_images (property_id, image_url, image_order, is_primary)
                SELECT %s, u.url, %s + u.ord - 1, (%s AND u.ord = 1)
                FROM unnest(%s::text[]) WITH ORDINALITY AS u(url, ord)
                RETURNING *
                """,
                [property_id, existing["next_order"], existing["existing"] == 0, urls],
            )
        return sorted((_image_from_row(r) for r in rows), key=lambda img: img.image_order)

    def _with_images(self, rows: list[dict[str, Any]]) -> list[Property]:
        """Build properties and attach all of their images with one query."""
        properties = [_property_from_row(r) for r in rows]
        if not properties:
            return properties

        by_id = {p.property_id: p for p in properties}
        image_rows = self.db.execute(
            """
            SELECT * FROM property_images
            WHERE property_id = ANY(%s)
            ORDER BY property_id, image_order, created_at
            """,
            [list(by_id)],
        )
        for row in image_rows:
            image = _image_from_row(row)
            owner = by_id.get(image.property_id)
            if owner is not None:
                owner.images.append(image)
        return properties


class PostgresBuyerRequestRepository(BuyerRequestRepository):
    """Buyer request repository on PostgreSQL."""

    def __init__(self, db: PostgresDatabase, recent_days: int = DEFAULT_RECENT_DAYS) -> None:
        super().__init__(recent_days)
        self.db = db

    def get_all(self) -> list[BuyerRequest]:
        rows = self.db.execute("SELECT * FROM buyer_requests ORDER BY created_at DESC, id DESC")
        return [_buyer_request_from_row(r) for r in rows]

    def get_by_id(self, request_id: str) -> BuyerRequest | None:
        rows = self.db.execute("SELECT * FROM buyer_requests WHERE id = %s", [request_id])
        return _buyer_request_from_row(rows[0]) if rows else None

    def stats(self) -> BuyerRequestStats:
        row = self.db.execute(
            """
            SELECT
                COUNT(*) AS total,
                COUNT(*) FILTER (WHERE status = 'active') AS active,
                COUNT(*) FILTER (WHERE status = 'matched') AS matched,
                COUNT(*) FILTER (WHERE status = 'fulfilled') AS fulfilled,
                COUNT(*) FILTER (WHERE status = 'cancelled') AS cancelled,
                COUNT(*) FILTER (WHERE created_at >= NOW() - %s * INTERVAL '1 day') AS recent
            FROM buyer_requests
            """,
            [self.recent_days],
        )[0]
        return BuyerRequestStats(**row)

    def _insert(self, record: BuyerRequest) -> BuyerRequest:
        columns = (
            "user_id", "property_type", "budget_min", "budget_max", "preferred_districts",
            "preferred_towns", "requires_water", "requires_power", "requires_internet",
            "min_bedrooms", "min_bathrooms", "min_size_acres", "min_size_sqft",
            "additional_requirements", "contact_name", "contact_phone", "contact_email",
            "urgency", "preferred_contact_method", "timeline", "status",
        )
        values = [
            record.user_id,
            record.property_type.value,
            record.budget_min,
            record.budget_max,
            list(record.preferred_districts),
            record.preferred_towns,
            record.requires_water,
            record.requires_power,
            record.requires_internet,
            record.min_bedrooms,
            record.min_bathrooms,
            record.min_size_acres,
            record.min_size_sqft,
            record.additional_requirements,
            record.contact_name,
            record.contact_phone,
            record.contact_email,
            record.urgency.value,
            record.preferred_contact_method.value,
            record.timeline.value,
            record.status.value,
        ]
        if record.created_at is not None:
            columns += ("created_at",)
            values.append(record.created_at)
        placeholders = ", ".join(["%s"] * len(values))
        rows = self.db.execute(
            f"INSERT INTO buyer_requests ({', '.join(columns)}) VALUES ({placeholders}) RETURNING *",
            values,
        )
        return _buyer_request_from_row(rows[0])

    def _set_status(self, request_id: str, status: BuyerRequestStatus) -> BuyerRequest:
        rows = self.db.execute(
            "UPDATE buyer_requests SET status = %s, updated_at = NOW() WHERE id = %s RETURNING *",
            [status.value, request_id],
        )
        if not rows:
            raise NotFoundError(f"Buyer request {request_id} not found")
        return _buyer_request_from_row(rows[0])


class PostgresSiteVisitRepository(SiteVisitRepository):
    """Site visit repository on PostgreSQL."""

    SELECT_VISITS = """
        SELECT sv.*, p.title AS property_title, p.location_district, p.location_town
        FROM site_visits sv
        LEFT JOIN properties p ON sv.property_id = p.id
    """

    def __init__(self, db: PostgresDatabase) -> None:
        self.db = db

    def get_all(self) -> list[SiteVisit]:
        rows = self.db.execute(f"{self.SELECT_VISITS} ORDER BY sv.created_at DESC, sv.id DESC")
        return [_site_visit_from_row(r) for r in rows]

    def _insert(self, record: SiteVisit) -> SiteVisit:
        rows = self.db.execute(
            """
            INSERT INTO site_visits (
                property_id, visitor_name, visitor_phone, visitor_email,
                preferred_date, preferred_time, message, status
            )
            SELECT p.id, %s, %s, %s, %s, %s, %s, %s
            FROM properties p
            WHERE p.id = %s AND p.status = 'approved'
            RETURNING *
            """,
            [
                record.visitor_name,
                record.visitor_phone,
                record.visitor_email,
                record.preferred_date,
                record.preferred_time,
                record.message,
                record.status.value,
                record.property_id,
            ],
        )
        if not rows:
            raise NotFoundError(f"Property {record.property_id} not found")
        return _site_visit_from_row(rows[0])

    def _set_status(self, visit_id: str, status: SiteVisitStatus) -> SiteVisit:
        rows = self.db.execute(
            "UPDATE site_visits SET status = %s WHERE id = %s RETURNING *",
            [status.value, visit_id],
        )
        if not rows:
            raise NotFoundError(f"Site visit {visit_id} not found")
        return _site_visit_from_row(rows[0])


def _optional_str(value: Any) -> str | None:
    return str(value) if value is not None else None


def _optional_decimal(value: Any) -> Decimal | None:
    return Decimal(str(value)) if value is not None else None


def _property_from_row(row: dict[str, Any]) -> Property:
    return Property(
        property_id=str(row["id"]),
        title=row.get("title") or "",
        property_type=PropertyType(row["property_type"]),
        location_district=row["location_district"],
        location_town=row["location_town"],
        location_village=row.get("location_village"),
        distance_from_main_road=row.get("distance_from_main_road"),
        has_water=bool(row.get("has_water")),
        has_power=bool(row.get("has_power")),
        has_internet=bool(row.get("has_internet")),
        size_acres=_optional_decimal(row.get("size_acres")),
        size_sqft=_optional_decimal(row.get("size_sqft")),
        bedrooms=row.get("bedrooms"),
        bathrooms=row.get("bathrooms"),
        asking_price=Decimal(str(row["asking_price"])),
        description=row.get("description"),
        owner_name=row["owner_name"],
        owner_phone=row["owner_phone"],
        owner_email=row.get("owner_email"),
        status=PropertyStatus(row["status"]),
        submitted_by=_optional_str(row.get("submitted_by")),
        approved_by=_optional_str(row.get("approved_by")),
        approved_at=row.get("approved_at"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def _image_from_row(row: dict[str, Any]) -> PropertyImage:
    return PropertyImage(
        image_id=str(row["id"]),
        property_id=str(row["property_id"]),
        image_url=row["image_url"],
        image_order=row.get("image_order") or 0,
        is_primary=bool(row.get("is_primary")),
        created_at=row.get("created_at"),
    )


def _buyer_request_from_row(row: dict[str, Any]) -> BuyerRequest:
    return BuyerRequest(
        request_id=str(row["id"]),
        user_id=_optional_str(row.get("user_id")),
        property_type=PropertyType(row["property_type"]),
        budget_min=Decimal(str(row["budget_min"])),
        budget_max=Decimal(str(row["budget_max"])),
        preferred_districts=list(row["preferred_districts"] or []),
        preferred_towns=row.get("preferred_towns"),
        requires_water=bool(row.get("requires_water")),
        requires_power=bool(row.get("requires_power")),
        requires_internet=bool(row.get("requires_internet")),
        min_bedrooms=row.get("min_bedrooms"),
        min_bathrooms=row.get("min_bathrooms"),
        min_size_acres=_optional_decimal(row.get("min_size_acres")),
        min_size_sqft=_optional_decimal(row.get("min_size_sqft")),
        additional_requirements=row.get("additional_requirements"),
        contact_name=row["contact_name"],
        contact_phone=row["contact_phone"],
        contact_email=row.get("contact_email"),
        urgency=Urgency(row.get("urgency") or Urgency.MEDIUM.value),
        preferred_contact_method=ContactMethod(
            row.get("preferred_contact_method") or ContactMethod.PHONE.value
        ),
        timeline=Timeline(row.get("timeline") or Timeline.THREE_TO_SIX_MONTHS.value),
        status=BuyerRequestStatus(row["status"]),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def _site_visit_from_row(row: dict[str, Any]) -> SiteVisit:
    return SiteVisit(
        visit_id=str(row["id"]),
        property_id=str(row["property_id"]),
        visitor_name=row["visitor_name"],
        visitor_phone=row["visitor_phone"],
        visitor_email=row.get("visitor_email"),
        preferred_date=row["preferred_date"],
        preferred_time=row["preferred_time"],
        message=row.get("message"),
        status=SiteVisitStatus(row["status"]),
        created_at=row.get("created_at"),
        property_title=row.get("property_title"),
        location_district=row.get("location_district"),
        location_town=row.get("location_town"),
    )
