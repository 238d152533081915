"""
Utils Package - Centralized utility modules initialization

Modules that depend on the database (submissions) are imported directly
from their module to keep extensions.py free of import cycles.
"""

from .errors import (
    PortfolioError,
    ConfigurationError,
    ValidationError,
    BadRequestError,
    PersistenceError,
    TransportError,
    UnknownTemplateError,
    DispatchError
)
from .decorators import rate_limited
from .security import get_client_ip, check_rate_limit
from .similarity import category_of, score, related_projects, similarity_label
from .wizard import ProjectDiscussionWizard, project_type_questions, is_valid_email

__all__ = [
    # Errors
    'PortfolioError',
    'ConfigurationError',
    'ValidationError',
    'BadRequestError',
    'PersistenceError',
    'TransportError',
    'UnknownTemplateError',
    'DispatchError',

    # Decorators
    'rate_limited',

    # Security
    'get_client_ip',
    'check_rate_limit',

    # Similarity
    'category_of',
    'score',
    'related_projects',
    'similarity_label',

    # Wizard
    'ProjectDiscussionWizard',
    'project_type_questions',
    'is_valid_email'
]
