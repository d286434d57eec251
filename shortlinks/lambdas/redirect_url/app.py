import logging

from shortlinks.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlinks.constants import VALIDATION_FAILED
from shortlinks.models import ShortenerPolicy
from shortlinks.dao.redis import RedisSettings, ShortLinkRedisDAO
from shortlinks.exceptions import ConfigurationError, LinkExpiredError, LinkNotFoundError, ValidationError
from shortlinks.services import ResolutionService
from shortlinks.utils import load_config, get_short_url, app_prefix, guarantee_500_response
from shortlinks.utils.responses import (
    response_301,
    response_400,
    response_404,
    response_410,
    response_500,
    response_validation_failed,
)
from shortlinks.utils.validation import validate_shortcode
from shortlinks.lambdas.redirect_url.constants import (
    CONFIGURATION_ERROR,
    MISSING_SHORTCODE,
    SHORT_LINK_NOT_FOUND,
    SHORT_LINK_EXPIRED,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect short URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract and validate shortCode from request path
    - Step 2: Resolve the short link, counting the click (via ResolutionService)
    - Step 3: Redirect client to the original URL

    HTTP responses:
        301: Successful redirect
            headers:
                Location: original URL
        400: Bad client request
            missing or malformed shortCode in path parameters
        404: Not found
            short URL does not exist
        410: Gone
            short URL has expired
        500: Internal server error

    Example:
        >>> event = {'pathParameters': {'shortCode': 'docs-1'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        301
        >>> response['headers']['Location']
        'https://example.com/a/b'
    """
    # 0- Get application's config
    try:
        app_config = load_config('redirect_url')
        policy = ShortenerPolicy.from_config(app_config.get('policy'))
        redis_settings = RedisSettings.from_config(app_config.get('redis'))
    except ConfigurationError:
        logger.exception('Failed to load AppConfig for redirect URL function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
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
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event))

    # 2- Resolve the short link
    short_link_dao = ShortLinkRedisDAO(settings=redis_settings, prefix=app_prefix())
    service = ResolutionService(short_link_dao)

    try:
        original_url = service.resolve(shortcode)
    except LinkNotFoundError:
        logger.info('Short link not found in database. Responding with 404.', extra={'shortcode': shortcode, 'event': SHORT_LINK_NOT_FOUND})
        return response_404(message='The requested short URL does not exist', error_code=SHORT_LINK_NOT_FOUND)
    except LinkExpiredError:
        logger.info('Short link has expired. Responding with 410.', extra={'shortcode': shortcode, 'event': SHORT_LINK_EXPIRED})
        return response_410(
            message='This short URL has expired and is no longer available',
            error_code=SHORT_LINK_EXPIRED,
        )

    # 3- Redirect client to original URL
    logger.info('Redirecting client to original URL. Responding with 301.', extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS})
    return response_301(location=original_url)
