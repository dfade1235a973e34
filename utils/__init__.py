"""
Utils Package - Centralized utility modules initialization
"""

from .data import PortfolioStore, PortfolioNotFoundError, PortfolioSaveError
from .images import (
    discover_project_images,
    filter_original_images,
    enrich_projects_with_images,
    get_optimized_image_paths
)
from .optimization import (
    optimize_image,
    optimize_project_images,
    optimize_all_project_images,
    generate_optimized_srcset
)
from .notifications import (
    ContactConfigError,
    ContactDeliveryError,
    send_contact_email,
    missing_contact_settings
)
from .security import get_client_ip, check_rate_limit, is_honeypot_filled
from .helpers import paragraphs, format_validation_errors, skill_dots

__all__ = [
    # Data
    'PortfolioStore',
    'PortfolioNotFoundError',
    'PortfolioSaveError',

    # Images
    'discover_project_images',
    'filter_original_images',
    'enrich_projects_with_images',
    'get_optimized_image_paths',

    # Optimization
    'optimize_image',
    'optimize_project_images',
    'optimize_all_project_images',
    'generate_optimized_srcset',

    # Notifications
    'ContactConfigError',
    'ContactDeliveryError',
    'send_contact_email',
    'missing_contact_settings',

    # Security
    'get_client_ip',
    'check_rate_limit',
    'is_honeypot_filled',

    # Helpers
    'paragraphs',
    'format_validation_errors',
    'skill_dots'
]
