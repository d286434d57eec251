from shortlinks.services.generator import generate_shortcode
from shortlinks.services.resolver import UniquenessResolver
from shortlinks.services.shortening import ShorteningService, CreatedShortLink
from shortlinks.services.resolution import ResolutionService
from shortlinks.services.statistics import StatisticsService
from shortlinks.services.deletion import DeletionService


__all__ = [
    'generate_shortcode',
    'UniquenessResolver',
    'ShorteningService',
    'CreatedShortLink',
    'ResolutionService',
    'StatisticsService',
    'DeletionService',
]
