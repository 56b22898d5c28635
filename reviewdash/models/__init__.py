"""SQLAlchemy ORM models package."""

from reviewdash.database import Base
from reviewdash.models.business import Business
from reviewdash.models.platform import BusinessPlatform, ReviewPlatform
from reviewdash.models.review import Review
from reviewdash.models.ai_response import AIResponse

__all__ = ["Base", "Business", "BusinessPlatform", "ReviewPlatform", "Review", "AIResponse"]
