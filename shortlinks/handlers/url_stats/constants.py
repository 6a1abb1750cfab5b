# Event / error codes
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
STATS_SUCCESS = 'STATS_SUCCESS'

# Link status labels
ACTIVE = 'active'
EXPIRED = 'expired'
