"""SQLAlchemy ORM models for the property scraper database."""

from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, DECIMAL, Boolean, Index
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class ScrapeCacheEntry(Base):
    """Short-lived copy of a scrape result, promoted into a property later."""

    __tablename__ = 'scrape_cache'

    id = Column(String(255), primary_key=True)  # cache_<epoch-ms>_<random>
    address = Column(String(500), nullable=False)
    county = Column(String(100))
    bedrooms = Column(Integer)
    bathrooms = Column(DECIMAL(3, 1))
    sqft = Column(Integer)
    homestead = Column(Boolean)  # NULL = unknown, not "no exemption"
    parcel_number = Column(String(100))  # stored verbatim, internal spaces matter
    qpublic_url = Column(String(500))
    assessment_pdf_url = Column(Text)
    property_tax = Column(String(50))  # display string, e.g. "15,262.32"
    tax_record_url = Column(Text)
    created_at = Column(TIMESTAMP, server_default=func.current_timestamp())
    expires_at = Column(TIMESTAMP, nullable=False)

    __table_args__ = (
        Index('idx_scrape_cache_address', 'address'),
        Index('idx_scrape_cache_expires_at', 'expires_at'),
    )

    def __repr__(self):
        return f"<ScrapeCacheEntry(id='{self.id}', address='{self.address}', county='{self.county}')>"
