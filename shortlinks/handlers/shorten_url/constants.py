# Event / error codes
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MISSING_URLS = 'MISSING_URLS'
TOO_MANY_URLS = 'TOO_MANY_URLS'
VALIDATION_FAILED = 'VALIDATION_FAILED'
SHORTCODE_GENERATION_FAILED = 'SHORTCODE_GENERATION_FAILED'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
