import logging

from shortlinks.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlinks.constants import VALIDATION_FAILED
from shortlinks.models import ShortenerPolicy
from shortlinks.dao.redis import RedisSettings, ShortLinkRedisDAO
from shortlinks.exceptions import ConfigurationError, LinkNotFoundError, ValidationError
from shortlinks.services import DeletionService
from shortlinks.utils import load_config, app_prefix, guarantee_500_response
from shortlinks.utils.responses import response_200, response_400, response_404, response_500, response_validation_failed
from shortlinks.utils.validation import validate_shortcode
from shortlinks.lambdas.delete_url.constants import (
    CONFIGURATION_ERROR,
    MISSING_SHORTCODE,
    SHORT_LINK_NOT_FOUND,
    LINK_DELETED,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to delete short links

    Deletion is terminal: the shortcode is free for reuse right away.

    HTTP responses:
        200: Short link deleted
            success: true
            message: confirmation
            data: shortCode, originalUrl
        400: Bad client request
            missing or malformed shortCode in path parameters
        404: Not found
            short URL does not exist
        500: Internal server error
    """
    # 0- Get application's config
    try:
        app_config = load_config('delete_url')
        policy = ShortenerPolicy.from_config(app_config.get('policy'))
        redis_settings = RedisSettings.from_config(app_config.get('redis'))
    except ConfigurationError:
        logger.exception('Failed to load AppConfig for delete URL function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500(error_code=CONFIGURATION_ERROR)

    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortCode')
    if shortcode is None:
        logger.info('Missing "shortCode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="Missing 'shortCode' in path", error_code=MISSING_SHORTCODE)
    try:
        validate_shortcode(shortcode, policy)
    except ValidationError as e:
        logger.info('Malformed shortcode in path. Responding with 400.', extra={'event': VALIDATION_FAILED})
        return response_validation_failed(e)

    # 2- Remove the short link
    service = DeletionService(ShortLinkRedisDAO(settings=redis_settings, prefix=app_prefix()))
    try:
        link = service.delete(shortcode)
    except LinkNotFoundError:
        logger.info('Short link not found in database. Responding with 404.', extra={'shortcode': shortcode, 'event': SHORT_LINK_NOT_FOUND})
        return response_404(message='The requested short URL does not exist', error_code=SHORT_LINK_NOT_FOUND)

    logger.info('Short link deleted. Responding with 200.', extra={'shortcode': shortcode, 'event': LINK_DELETED})
    return response_200(
        message='Short URL deleted successfully',
        data={
            'shortCode': link.shortcode,
            'originalUrl': link.original_url,
        },
    )
