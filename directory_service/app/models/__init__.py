# Import all models to ensure they are registered with SQLAlchemy
from shared.models.users import Users
from shared.models.user_login_session import UserLoginSession
from .businesses import Business
from .ownership_claims import OwnershipClaim
from .featured_requests import FeaturedRequest
from .social_media_links import SocialMediaLink
