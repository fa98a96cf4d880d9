from pydantic import BaseModel
from typing import Optional


class VendorSummary(BaseModel):
    id: str
    businessName: str
    slug: str
    businessAddress: Optional[str] = None
    commissionRate: float
    activeProductCount: int


class VendorDetail(BaseModel):
    id: str
    businessName: str
    slug: str
    description: Optional[str] = None
    logo: Optional[str] = None
    banner: Optional[str] = None
    shopOpen: bool
    productCount: int
