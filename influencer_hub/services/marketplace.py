# Copyright (c) 2026 Mohammed Hassan. All rights reserved.
# Proprietary and confidential. Unauthorized copying, modification, distribution, or use is prohibited.

from sqlalchemy import or_
from influencer_hub.models import BrandCollaboration

COLLABORATION_TYPES = ("sponsored_post", "brand_ambassador", "affiliate", "product_review", "event")

# Decisions a brand can make on a pending application
REVIEW_DECISIONS = ("approved", "rejected")

def format_collaboration_type(collaboration_type: str) -> str:
    """sponsored_post -> Sponsored Post"""
    return " ".join(word[:1].upper() + word[1:] for word in (collaboration_type or "").split("_"))

def search_filter(query: str | None):
    """Case-insensitive substring match on name, description and type. None when there is nothing to match."""
    if not query or not query.strip():
        return None
    pattern = f"%{query.strip()}%"
    return or_(
        BrandCollaboration.brand_name.ilike(pattern),
        BrandCollaboration.brand_description.ilike(pattern),
        BrandCollaboration.collaboration_type.ilike(pattern),
    )
