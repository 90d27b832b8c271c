# User
USER_BASE = '/api/user'
USER_CREATE = USER_BASE
USER_LOGIN = f'{USER_BASE}/login'
USER_ME = f'{USER_BASE}/me'
USER_GET = f'{USER_BASE}/{{user_id}}'

# Product
PRODUCT_BASE = '/api/product'
PRODUCT_MINE = f'{PRODUCT_BASE}/mine'
PRODUCT_SEARCH = f'{PRODUCT_BASE}/search'
PRODUCT_OVERVIEW = f'{PRODUCT_BASE}/overview'
PRODUCT_GET = f'{PRODUCT_BASE}/{{product_id}}'
PRODUCT_QUANTITY = f'{PRODUCT_BASE}/{{product_id}}/quantity'

# Common
HEALTH = '/health'
METRICS = '/metrics'
