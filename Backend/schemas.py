from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional
from datetime import datetime


# User Schemas
class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)

class UserLogin(BaseModel):
    email: str
    password: str

class UserResponse(BaseModel):
    id: int
    email: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Profile Schemas
class ProfileUpdate(BaseModel):
    full_name: str
    organization: Optional[str] = None
    organization_type: Optional[str] = None
    organization_email: Optional[str] = None
    organization_phone: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None

class ProfileResponse(BaseModel):
    id: int
    full_name: str
    organization: Optional[str] = None
    organization_type: Optional[str] = None
    organization_email: Optional[str] = None
    organization_phone: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Service Category Schemas
class ServiceCategoryCreate(BaseModel):
    name: str
    description: Optional[str] = None

class ServiceCategoryResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None

    class Config:
        from_attributes = True


# Organization Schemas
class ServiceSelection(BaseModel):
    service_category_id: str
    capacity: Optional[str] = None   # low, medium, high
    notes: Optional[str] = None

class OrganizationCreate(BaseModel):
    name: str
    type: str
    borough: str
    neighborhood: Optional[str] = None
    address: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    active: bool = True
    services: List[ServiceSelection] = []


# Gap Report Schemas
class GapReportCreate(BaseModel):
    service_category_id: str
    borough: str
    neighborhood: Optional[str] = None
    severity: str = "medium"
    description: str
    reported_by: Optional[str] = None

class GapStatusUpdate(BaseModel):
    status: str


class MessageResponse(BaseModel):
    status: str
    message: str
