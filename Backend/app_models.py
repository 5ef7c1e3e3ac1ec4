from sqlalchemy import Column, Integer, String, Float, Boolean, Text, ForeignKey, DateTime, UniqueConstraint, Index
from sqlalchemy.sql import func
from database import Base
import uuid


def _uuid():
    return str(uuid.uuid4())


class Organization(Base):
    __tablename__ = "organizations"

    id = Column(String, primary_key=True, default=_uuid)
    name = Column(String, nullable=False, index=True)
    type = Column(String, nullable=False, index=True)  # church, ministry, nonprofit, civic_group
    borough = Column(String, nullable=False, index=True)
    neighborhood = Column(String, nullable=True, index=True)
    address = Column(String, nullable=True)
    contact_email = Column(String, nullable=True)
    contact_phone = Column(String, nullable=True)
    website = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    active = Column(Boolean, default=True, nullable=False)

    # Filled from the address by the geocoder, may stay empty
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class ServiceCategory(Base):
    __tablename__ = "service_categories"

    id = Column(String, primary_key=True, default=_uuid)
    name = Column(String, unique=True, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


# names are unique regardless of case
Index("ix_service_categories_name_lower", func.lower(ServiceCategory.__table__.c.name), unique=True)


class OrganizationService(Base):
    __tablename__ = "organization_services"
    __table_args__ = (
        UniqueConstraint("organization_id", "service_category_id", name="uq_organization_service"),
    )

    id = Column(String, primary_key=True, default=_uuid)
    organization_id = Column(String, ForeignKey("organizations.id"), nullable=False, index=True)
    service_category_id = Column(String, ForeignKey("service_categories.id"), nullable=False, index=True)
    capacity = Column(String, nullable=True)  # low, medium, high
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class GapReport(Base):
    __tablename__ = "gap_reports"

    id = Column(String, primary_key=True, default=_uuid)
    service_category_id = Column(String, ForeignKey("service_categories.id"), nullable=False, index=True)
    borough = Column(String, nullable=False, index=True)
    neighborhood = Column(String, nullable=True)
    severity = Column(String, nullable=False)  # critical, high, medium, low
    description = Column(Text, nullable=False)
    reported_by = Column(String, nullable=True)  # free-text reporter name
    created_by_user = Column(Integer, ForeignKey("users.id"), nullable=True)  # ID of signed-in user who filed it

    status = Column(String, default="open", nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    resolved_at = Column(DateTime(timezone=True))


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class UserSession(Base):
    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    token_hash = Column(String, unique=True, index=True, nullable=False)  # sha256 of the bearer token
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    last_seen_at = Column(DateTime(timezone=True), nullable=True)


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, ForeignKey("users.id"), primary_key=True)  # same as users.id
    full_name = Column(String, nullable=False)
    organization = Column(String, nullable=True)
    organization_type = Column(String, nullable=True)
    organization_email = Column(String, nullable=True)
    organization_phone = Column(String, nullable=True)
    role = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
