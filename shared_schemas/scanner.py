"""
Sustainability Scanner API schemas.
Type-safe contracts for the upload, analyze and health endpoints,
plus the shapes exchanged with the classification and vision services.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


# ============================================================================
# Health Check
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str  # "healthy"
    version: str


# ============================================================================
# Upload
# ============================================================================

class UploadResponse(BaseModel):
    """Response from image upload."""
    message: str
    url: str


# ============================================================================
# Classification Service
# ============================================================================

class ClassifierResponse(BaseModel):
    """Body returned by the classification service's /analyze endpoint."""
    categories: List[str]


# ============================================================================
# Sustainability Analysis
# ============================================================================

class ResalableFacet(BaseModel):
    """Whether the item can be resold, and where."""
    is_resalable: bool = False
    platforms: List[str] = Field(default_factory=list)


class RecyclableFacet(BaseModel):
    """Whether the item can be recycled, and nearby centers."""
    is_recyclable: bool = False
    centers: List[str] = Field(default_factory=list)


class ReusableFacet(BaseModel):
    """Whether the item can be reused, and how."""
    is_reusable: bool = False
    ways: List[str] = Field(default_factory=list)


class AnalysisResult(BaseModel):
    """
    Structured sustainability analysis generated by the vision model.

    Missing facets fall back to their empty values. Suggestion lists are
    returned as the model produced them, even when the paired flag is false.
    """
    resalable: ResalableFacet = Field(default_factory=ResalableFacet)
    recyclable: RecyclableFacet = Field(default_factory=RecyclableFacet)
    reusable: ReusableFacet = Field(default_factory=ReusableFacet)
    biodegradable: bool = False


# ============================================================================
# Analyze
# ============================================================================

class ImageDetails(BaseModel):
    """Metadata of the received image."""
    filename: str
    size: int  # bytes


class AnalyzeResponse(BaseModel):
    """
    Response from image analysis.

    `categories` and `analysis` are only present when the full
    classification pipeline is enabled.
    """
    message: str
    details: ImageDetails
    categories: Optional[List[str]] = None
    analysis: Optional[AnalysisResult] = None
