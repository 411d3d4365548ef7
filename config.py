import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.path.join(BASE_DIR, 'data')

class Config:
    """Base configuration"""
    # Security - MUST be set in production
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-only-secret')

    # Debug mode - default to False for safety
    DEBUG = os.environ.get('DEBUG', 'False').lower() == 'true'
    TESTING = False

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # Quiz content (loaded once at startup)
    QUESTIONS_PATH = os.environ.get('QUESTIONS_PATH', os.path.join(DATA_DIR, 'quiz_questions.json'))
    WEIGHTS_PATH = os.environ.get('WEIGHTS_PATH', os.path.join(DATA_DIR, 'key_choice_weights.csv'))

    # Kiosk vs embedded iframe behaviour
    KIOSK_MODE = os.environ.get('KIOSK_MODE', 'False').lower() == 'true'
    IDLE_TIMEOUT_SECONDS = int(os.environ.get('IDLE_TIMEOUT_SECONDS', '120'))
    KIOSK_IDLE_TIMEOUT_SECONDS = int(os.environ.get('KIOSK_IDLE_TIMEOUT_SECONDS', '30'))

    # Cap for "multi-limit-2" questions
    MAX_MULTI_SELECT = int(os.environ.get('MAX_MULTI_SELECT', '2'))

    # Session configuration
    SESSION_PERMANENT = False

    @classmethod
    def idle_timeout(cls):
        return cls.KIOSK_IDLE_TIMEOUT_SECONDS if cls.KIOSK_MODE else cls.IDLE_TIMEOUT_SECONDS

    # Configuration validation
    @classmethod
    def validate(cls):
        """Validate settings, raising ValueError with every problem found"""
        errors = []

        if cls.MAX_MULTI_SELECT < 1:
            errors.append("MAX_MULTI_SELECT must be at least 1")
        if cls.IDLE_TIMEOUT_SECONDS <= 0 or cls.KIOSK_IDLE_TIMEOUT_SECONDS <= 0:
            errors.append("Idle timeouts must be positive")

        # Warn about default values
        if cls.DEBUG:
            logger.warning("⚠️ Debug mode is enabled. Disable in production!")

        if errors:
            error_msg = "\n".join(errors)
            raise ValueError(f"Configuration validation failed:\n{error_msg}")

        return True


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    SECRET_KEY = os.environ.get('SECRET_KEY')
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    # The quiz is embedded in a retailer page, so the cookie travels cross-site
    SESSION_COOKIE_SAMESITE = 'None'

    @classmethod
    def validate(cls):
        if not cls.SECRET_KEY:
            raise ValueError("Configuration validation failed:\nSECRET_KEY is not set in environment variables")
        return super().validate()


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True


class TestingConfig(Config):
    """Configuration used by the test suite"""
    TESTING = True
    SECRET_KEY = 'test-secret'
    LOG_LEVEL = 'DEBUG'


# Determine which configuration to use based on environment
def get_config(env=None):
    """Get the appropriate configuration class based on environment"""
    env = env or os.environ.get('FLASK_ENV', 'development')

    config_map = {
        'development': DevelopmentConfig,
        'production': ProductionConfig,
        'testing': TestingConfig,
        'default': DevelopmentConfig
    }

    config_class = config_map.get(env, config_map['default'])

    try:
        config_class.validate()
        return config_class
    except ValueError as e:
        logger.error(f"❌ Configuration Error: {e}")
        logger.error("💡 Make sure you have a .env file with all required variables")
        raise
