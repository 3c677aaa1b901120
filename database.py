"""
Database setup and CRUD operations for SQLite and PostgreSQL.
"""

import logging
from typing import Optional, List, Dict, Any, Tuple

from sqlalchemy import create_engine, and_
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import (
    Base,
    ListingModel,
    SpotModel,
    FavoriteModel,
    InquiryModel,
    ProfileModel,
    ComparisonItemModel,
)
from config import get_db_path
from config import is_production, get_database_url

logger = logging.getLogger(__name__)

# Maximum number of listings a client can hold in the comparison basket
MAX_COMPARISON_ITEMS = 4


class Database:
    """Database manager for SQLite and PostgreSQL operations."""

    def __init__(
        self, db_path: Optional[str] = None, database_url: Optional[str] = None
    ):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database (used in development mode)
            database_url: PostgreSQL connection URL (used in production mode)
        """

        if is_production():
            db_url = database_url or get_database_url()
            if not db_url:
                raise ValueError(
                    "Production mode requires PostgreSQL configuration. "
                    "Please set DB_HOST, DB_USER, DB_PASSWORD, and DB_NAME environment variables."
                )
            logger.info("Connecting to PostgreSQL database (production mode)")
            self.db_type = "postgresql"
            self.db_path = None
            self.engine = create_engine(
                db_url,
                echo=False,
                pool_pre_ping=True,  # Verify connections before using
                pool_size=5,
                max_overflow=10,
            )
        else:
            self.db_path = db_path or get_db_path()
            self.db_type = "sqlite"
            logger.info(
                f"Connecting to SQLite database at {self.db_path} (development mode)"
            )
            if self.db_path == ":memory:":
                # One shared connection, otherwise every thread sees an empty database
                self.engine = create_engine(
                    "sqlite://",
                    echo=False,
                    connect_args={"check_same_thread": False},
                    poolclass=StaticPool,
                )
            else:
                self.engine = create_engine(
                    f"sqlite:///{self.db_path}",
                    echo=False,
                    connect_args={
                        "check_same_thread": False,
                        "timeout": 30.0,  # Increase timeout for concurrent access
                    },
                    pool_pre_ping=True,
                )
                self._enable_wal_mode()

        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )

    def _enable_wal_mode(self):
        """Enable WAL (Write-Ahead Logging) mode for better SQLite concurrency."""
        if self.db_type != "sqlite":
            return

        import sqlite3

        try:
            conn = sqlite3.connect(self.db_path, timeout=30.0)
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("PRAGMA synchronous=NORMAL")
            conn.execute("PRAGMA temp_store=memory")
            conn.close()
            logger.debug("Enabled WAL mode for SQLite database")
        except sqlite3.Error as e:
            logger.warning(f"Could not enable WAL mode: {e}")

    def create_tables(self):
        """Create all database tables."""
        try:
            Base.metadata.create_all(bind=self.engine)
            if self.db_type == "sqlite":
                logger.info(f"Database tables created successfully in {self.db_path}")
            else:
                logger.info("Database tables created successfully in PostgreSQL")
        except SQLAlchemyError as e:
            logger.error(f"Error creating database tables: {e}")
            raise

    def get_session(self) -> Session:
        """Get a database session."""
        return self.SessionLocal()

    def close(self):
        """Close database connection."""
        self.engine.dispose()


class ListingRepository:
    """Repository for Listing operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_listing_by_id(self, listing_id: str) -> Optional[ListingModel]:
        """Get listing by ID."""
        return (
            self.session.query(ListingModel)
            .filter(ListingModel.id == listing_id)
            .first()
        )

    def get_listings_by_ids(self, listing_ids: List[str]) -> List[ListingModel]:
        """Get listings by ID, preserving the order of listing_ids."""
        if not listing_ids:
            return []
        rows = (
            self.session.query(ListingModel)
            .filter(ListingModel.id.in_(listing_ids))
            .all()
        )
        by_id = {row.id: row for row in rows}
        return [by_id[i] for i in listing_ids if i in by_id]

    def get_listings_by_owner(self, user_id: str) -> List[ListingModel]:
        """Get all listings owned by a user, newest first."""
        return (
            self.session.query(ListingModel)
            .filter(ListingModel.user_id == user_id)
            .order_by(ListingModel.created_at.desc())
            .all()
        )

    def create_listing(self, user_id: str, data: Dict[str, Any]) -> ListingModel:
        """Create a new listing owned by user_id."""
        listing = ListingModel(user_id=user_id, **data)
        self.session.add(listing)
        self.session.flush()
        return listing

    def update_listing(
        self, listing: ListingModel, changes: Dict[str, Any]
    ) -> ListingModel:
        """Apply a partial update to a listing."""
        for field, value in changes.items():
            setattr(listing, field, value)
        self.session.flush()
        return listing

    def delete_listing(self, listing: ListingModel) -> None:
        """Delete a listing (favorites, inquiries and comparison items cascade)."""
        self.session.delete(listing)
        self.session.flush()

    def increment_views(self, listing: ListingModel) -> None:
        listing.views = (listing.views or 0) + 1
        self.session.flush()


class SpotRepository:
    """Repository for Spot (point of interest) operations."""

    def __init__(self, session: Session):
        self.session = session

    def list_spots(
        self,
        city: Optional[str] = None,
        area: Optional[str] = None,
        category: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[SpotModel]:
        """List spots filtered by city, area and category."""
        query = self.session.query(SpotModel)
        if city:
            query = query.filter(SpotModel.city == city)
        if area:
            query = query.filter(SpotModel.area == area)
        if category:
            query = query.filter(SpotModel.category == category)
        query = query.order_by(SpotModel.name)
        if limit:
            query = query.limit(limit)
        return query.all()

    def create_spot(self, data: Dict[str, Any]) -> SpotModel:
        """Create a new spot."""
        spot = SpotModel(**data)
        self.session.add(spot)
        self.session.flush()
        return spot


class FavoriteRepository:
    """Repository for Favorite operations."""

    def __init__(self, session: Session):
        self.session = session

    def _find(self, user_id: str, listing_id: str) -> Optional[FavoriteModel]:
        return (
            self.session.query(FavoriteModel)
            .filter(
                and_(
                    FavoriteModel.user_id == user_id,
                    FavoriteModel.listing_id == listing_id,
                )
            )
            .first()
        )

    def get_favorite_ids(self, user_id: str) -> List[str]:
        """Get IDs of a user's favorite listings, most recent first."""
        rows = (
            self.session.query(FavoriteModel.listing_id)
            .filter(FavoriteModel.user_id == user_id)
            .order_by(FavoriteModel.created_at.desc())
            .all()
        )
        return [row[0] for row in rows]

    def is_favorited(self, user_id: str, listing_id: str) -> bool:
        return self._find(user_id, listing_id) is not None

    def add_favorite(self, user_id: str, listing_id: str) -> bool:
        """Add a favorite. Returns False if it already existed."""
        if self._find(user_id, listing_id) is not None:
            return False
        try:
            # a concurrent request may insert the same pair after the check
            with self.session.begin_nested():
                self.session.add(FavoriteModel(user_id=user_id, listing_id=listing_id))
        except IntegrityError:
            logger.info("Favorite %s/%s already exists", user_id, listing_id)
            return False
        return True

    def remove_favorite(self, user_id: str, listing_id: str) -> bool:
        """Remove a favorite. Returns False if it did not exist."""
        favorite = self._find(user_id, listing_id)
        if favorite is None:
            return False
        self.session.delete(favorite)
        self.session.flush()
        return True

    def toggle_favorite(self, user_id: str, listing_id: str) -> bool:
        """Toggle a favorite. Returns the new favorited state."""
        if self.remove_favorite(user_id, listing_id):
            return False
        self.add_favorite(user_id, listing_id)
        return True


class ComparisonRepository:
    """Repository for a client's comparison basket."""

    def __init__(self, session: Session):
        self.session = session

    def get_listing_ids(self, client_id: str) -> List[str]:
        """Get listing IDs in the basket, in the order they were added."""
        rows = (
            self.session.query(ComparisonItemModel.listing_id)
            .filter(ComparisonItemModel.client_id == client_id)
            .order_by(ComparisonItemModel.added_at, ComparisonItemModel.id)
            .all()
        )
        return [row[0] for row in rows]

    def add_listing(self, client_id: str, listing_id: str) -> Tuple[bool, Optional[str]]:
        """Add a listing to the basket.

        Returns:
            (added, reason) where reason is "duplicate" or "full" when not added
        """
        listing_ids = self.get_listing_ids(client_id)
        if listing_id in listing_ids:
            return False, "duplicate"
        if len(listing_ids) >= MAX_COMPARISON_ITEMS:
            return False, "full"
        try:
            with self.session.begin_nested():
                self.session.add(
                    ComparisonItemModel(client_id=client_id, listing_id=listing_id)
                )
        except IntegrityError:
            logger.info("Listing %s already in basket of %s", listing_id, client_id)
            return False, "duplicate"
        return True, None

    def remove_listing(self, client_id: str, listing_id: str) -> bool:
        deleted = (
            self.session.query(ComparisonItemModel)
            .filter(
                and_(
                    ComparisonItemModel.client_id == client_id,
                    ComparisonItemModel.listing_id == listing_id,
                )
            )
            .delete(synchronize_session=False)
        )
        return deleted > 0

    def clear(self, client_id: str) -> int:
        return (
            self.session.query(ComparisonItemModel)
            .filter(ComparisonItemModel.client_id == client_id)
            .delete(synchronize_session=False)
        )


class InquiryRepository:
    """Repository for Inquiry operations."""

    def __init__(self, session: Session):
        self.session = session

    def create_inquiry(
        self,
        listing: ListingModel,
        sender_id: Optional[str],
        sender_name: str,
        sender_email: str,
        message: str,
        sender_phone: Optional[str] = None,
    ) -> InquiryModel:
        """Create an inquiry addressed to the listing's owner."""
        inquiry = InquiryModel(
            listing_id=listing.id,
            owner_id=listing.user_id,
            sender_id=sender_id,
            sender_name=sender_name,
            sender_email=sender_email,
            sender_phone=sender_phone or None,
            message=message,
            inquiry_type="rent" if listing.listing_type == "rent" else "buy",
        )
        self.session.add(inquiry)
        self.session.flush()
        return inquiry

    def get_inquiry_by_id(self, inquiry_id: str) -> Optional[InquiryModel]:
        return (
            self.session.query(InquiryModel)
            .filter(InquiryModel.id == inquiry_id)
            .first()
        )

    def get_received(self, owner_id: str) -> List[InquiryModel]:
        """Inquiries received by an owner, newest first."""
        return (
            self.session.query(InquiryModel)
            .filter(InquiryModel.owner_id == owner_id)
            .order_by(InquiryModel.created_at.desc())
            .all()
        )

    def get_sent(self, sender_id: str) -> List[InquiryModel]:
        """Inquiries sent by a user, newest first."""
        return (
            self.session.query(InquiryModel)
            .filter(InquiryModel.sender_id == sender_id)
            .order_by(InquiryModel.created_at.desc())
            .all()
        )

    def update_status(self, inquiry: InquiryModel, status: str) -> InquiryModel:
        inquiry.status = status
        self.session.flush()
        return inquiry


class ProfileRepository:
    """Repository for owner Profile operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_user_ids(self, user_ids: List[str]) -> Dict[str, ProfileModel]:
        """Map user_id to profile for the given users."""
        if not user_ids:
            return {}
        rows = (
            self.session.query(ProfileModel)
            .filter(ProfileModel.user_id.in_(set(user_ids)))
            .all()
        )
        return {row.user_id: row for row in rows}

    def upsert_profile(self, user_id: str, data: Dict[str, Any]) -> ProfileModel:
        """Create or update the profile of user_id."""
        profile = (
            self.session.query(ProfileModel)
            .filter(ProfileModel.user_id == user_id)
            .first()
        )
        if profile is None:
            profile = ProfileModel(user_id=user_id)
            self.session.add(profile)
        for field, value in data.items():
            setattr(profile, field, value)
        self.session.flush()
        return profile
