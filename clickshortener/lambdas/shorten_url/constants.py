# Client errors
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MISSING_TARGET_URL = 'MISSING_TARGET_URL'
INVALID_TARGET_URL = 'INVALID_TARGET_URL'

# Successful shortening
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
