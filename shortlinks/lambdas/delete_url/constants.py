# Logging event / response error codes
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_LINK_NOT_FOUND = 'SHORT_LINK_NOT_FOUND'
LINK_DELETED = 'LINK_DELETED'
