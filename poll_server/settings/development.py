"""
Development settings for poll_server project.
"""

from decouple import config
from .base import *

DEBUG = config('DEBUG', default=True, cast=bool)

# Database - MySQL/MariaDB for development
DATABASES['default'].update({
    'NAME': config('MYSQL_DATABASE', default='poll_server_dev'),
    'USER': config('MYSQL_USER', default='root'),
    'PASSWORD': config('MYSQL_PASSWORD', default='dev_password'),
    'CONN_MAX_AGE': config('DB_CONN_MAX_AGE', default=60, cast=int),
    'CONN_HEALTH_CHECKS': True,
})

# Logging for development
LOGGING['handlers']['console']['level'] = config('LOG_LEVEL', default='DEBUG')
LOGGING['root']['level'] = config('LOG_LEVEL', default='DEBUG')
