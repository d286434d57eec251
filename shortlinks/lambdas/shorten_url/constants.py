# Logging event / response error codes
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
ALIAS_CONFLICT = 'ALIAS_CONFLICT'
GENERATION_EXHAUSTED = 'GENERATION_EXHAUSTED'
LINK_CREATED = 'LINK_CREATED'
