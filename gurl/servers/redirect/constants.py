# Log event codes
SHORT_PATH = 'SHORT_PATH'
METHOD_NOT_ALLOWED = 'METHOD_NOT_ALLOWED'
KEY_NOT_FOUND = 'KEY_NOT_FOUND'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
