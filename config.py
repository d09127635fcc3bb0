"""
Configuration settings for the phishing email analysis service.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Base directory of the project
BASE_DIR = Path(__file__).parent.absolute()

# Optional log file; console logging is always on
LOG_FILE = os.getenv('LOG_FILE') or None
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

# Logging configuration
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
    },
    'handlers': {
        'console': {
            'level': LOG_LEVEL,
            'class': 'logging.StreamHandler',
            'formatter': 'standard',
            'stream': 'ext://sys.stderr',
        },
    },
    'loggers': {
        '': {  # root logger
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': True
        },
        'heuristics': {
            'level': LOG_LEVEL,
            'propagate': True
        },
    }
}

if LOG_FILE:
    LOGGING['handlers']['file'] = {
        'level': 'DEBUG',
        'class': 'logging.handlers.RotatingFileHandler',
        'filename': LOG_FILE,
        'maxBytes': 10 * 1024 * 1024,  # 10MB
        'backupCount': 5,
        'formatter': 'standard',
        'encoding': 'utf-8',
    }
    LOGGING['loggers']['']['handlers'].append('file')

# Email input settings
MAX_EMAIL_SIZE = int(os.getenv('MAX_EMAIL_SIZE', str(1024 * 1024)))  # 1MB of text
# Artificial latency before answering, for UIs that show a loading state
ANALYSIS_DELAY_SECONDS = float(os.getenv('ANALYSIS_DELAY_SECONDS', '0'))

# Web server settings
HOST = os.getenv('HOST', '127.0.0.1')
PORT = int(os.getenv('PORT', '8080'))
DEBUG = os.getenv('DEBUG', 'false').lower() in ('true', '1', 'yes')

# Export commonly used paths and settings
__all__ = [
    'BASE_DIR', 'LOG_FILE', 'LOG_LEVEL', 'LOGGING', 'MAX_EMAIL_SIZE',
    'ANALYSIS_DELAY_SECONDS', 'HOST', 'PORT', 'DEBUG'
]
