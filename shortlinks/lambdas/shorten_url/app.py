import json
import logging

from shortlinks.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlinks.constants import VALIDATION_FAILED
from shortlinks.models import ShortenerPolicy
from shortlinks.dao.redis import RedisSettings, ShortLinkRedisDAO
from shortlinks.exceptions import AliasConflictError, ConfigurationError, GenerationExhaustedError, ValidationError
from shortlinks.services import ShorteningService
from shortlinks.utils import load_config, base_url, app_prefix, guarantee_500_response
from shortlinks.utils.responses import (
    iso_timestamp,
    response_201,
    response_400,
    response_409,
    response_500,
    response_validation_failed,
)
from shortlinks.utils.validation import validate_original_url, validate_shortcode, parse_expires_at
from shortlinks.lambdas.shorten_url.constants import (
    CONFIGURATION_ERROR,
    INVALID_JSON_BODY,
    ALIAS_CONFLICT,
    GENERATION_EXHAUSTED,
    LINK_CREATED,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract and validate originalUrl, customAlias, expiresAt from request body
    - Step 2: Reserve a shortcode and store the short link (via ShorteningService)
    - Step 3: Respond to user with 201 Created

    HTTP responses:
        201: Successful URL shortening
            success: true
            data: originalUrl, shortUrl, shortCode, customAlias, expiresAt, createdAt
        400: Bad client request
            invalid JSON body or field validation failure
        409: Conflict
            requested custom alias already exists
        500: Internal server error
            configuration error, shortcode generation exhausted or data store failure

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            JSON-serializable response following API Gateway Lambda Proxy
            output format.

    Example:
        >>> event = {'body': '{"originalUrl": "https://example.com", "customAlias": "docs-1"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['data']['shortUrl']
        'http://localhost:3000/docs-1'
    """
    # 0- Get application's config
    try:
        app_config = load_config('shorten_url')
        policy = ShortenerPolicy.from_config(app_config.get('policy'))
        redis_settings = RedisSettings.from_config(app_config.get('redis'))
    except ConfigurationError:
        logger.exception('Failed to load AppConfig for shorten URL function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500(error_code=CONFIGURATION_ERROR)

    # 1- Extract and validate request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='Request body must be valid JSON', error_code=INVALID_JSON_BODY)
    if not isinstance(request_body, dict):
        logger.info('JSON body is not an object. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='Request body must be a JSON object', error_code=INVALID_JSON_BODY)

    try:
        original_url = validate_original_url(request_body.get('originalUrl'))
        custom_alias = request_body.get('customAlias')
        if custom_alias is not None:
            custom_alias = validate_shortcode(custom_alias, policy, field='customAlias')
        expires_at = parse_expires_at(request_body.get('expiresAt'))
    except ValidationError as e:
        logger.info('Request validation failed. Responding with 400.', extra={'field': e.field, 'event': VALIDATION_FAILED})
        return response_validation_failed(e)

    # 2- Reserve a shortcode and store the short link
    short_link_dao = ShortLinkRedisDAO(settings=redis_settings, prefix=app_prefix())
    service = ShorteningService(short_link_dao, base_url=base_url(event), policy=policy)

    try:
        created = service.create(original_url, custom_alias=custom_alias, expires_at=expires_at)
    except AliasConflictError:
        logger.info('Custom alias already exists. Responding with 409.', extra={'shortcode': custom_alias, 'event': ALIAS_CONFLICT})
        return response_409(
            error='Custom alias already exists',
            message='Please choose a different custom alias',
            error_code=ALIAS_CONFLICT,
        )
    except GenerationExhaustedError:
        logger.error('Shortcode generation exhausted. Responding with 500.', extra={'event': GENERATION_EXHAUSTED})
        return response_500(message='Failed to create short URL', error_code=GENERATION_EXHAUSTED)

    # 3- Return successful response to user
    link = created.link
    logger.info(
        'Short link created. Responding with 201.',
        extra={'shortcode': link.shortcode, 'customAlias': link.custom_alias, 'event': LINK_CREATED},
    )
    return response_201(
        data={
            'originalUrl': link.original_url,
            'shortUrl': created.short_url,
            'shortCode': link.shortcode,
            'customAlias': link.custom_alias,
            'expiresAt': iso_timestamp(link.expires_at),
            'createdAt': iso_timestamp(link.created_at),
        }
    )
