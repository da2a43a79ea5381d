"""Domain layer module.

Contains exceptions, value objects and typing rules that carry no
knowledge of persistence or transport.
"""

from listings.domain.base import ValueObject
from listings.domain.features import (
    FeatureDefinition,
    FeatureInput,
    FeatureType,
    FeatureValue,
    parse_feature_value,
)
from listings.domain.policies import CapabilityPolicy
from listings.domain.sessions import (
    AccessDetails,
    TenantClaims,
    TokenDetails,
    refresh_session_id,
)

__all__ = [
    "ValueObject",
    # Features
    "FeatureDefinition",
    "FeatureInput",
    "FeatureType",
    "FeatureValue",
    "parse_feature_value",
    # Policies
    "CapabilityPolicy",
    # Sessions
    "AccessDetails",
    "TenantClaims",
    "TokenDetails",
    "refresh_session_id",
]
