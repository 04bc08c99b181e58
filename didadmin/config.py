# didadmin/config.py
import os
import logging
from logging.handlers import RotatingFileHandler
from dotenv import load_dotenv

# Determine the base directory of the project (where .env should be)
# This assumes config.py is in didadmin/
basedir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
package_dir = os.path.abspath(os.path.dirname(__file__))

# Load the .env file from the project root
dotenv_path = os.path.join(basedir, '.env')
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path)
    print(f"INFO: Loaded environment variables from {dotenv_path}")
else:
    print(f"WARNING: .env file not found at {dotenv_path}. Using environment variables or defaults.")


def _env_flag(name, default='False'):
    return os.environ.get(name, default).lower() in ('true', '1', 't', 'yes')


class Config:
    """Base configuration class."""
    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        print("WARNING: SECRET_KEY not found in environment. Using default. THIS IS INSECURE FOR PRODUCTION.")
        SECRET_KEY = 'a-default-insecure-secret-key-CHANGE-ME'

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URI')

    # Where record stores persist: 'memory', 'file' or 'database'
    STORAGE_BACKEND = os.environ.get('STORAGE_BACKEND', 'memory')
    STORAGE_DIR = os.environ.get('STORAGE_DIR') or os.path.join(basedir, 'data')

    # Uploads
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024  # 10 MiB; larger requests get 413
    ALLOWED_UPLOAD_EXTENSIONS = {'.csv', '.xlsx', '.json'}

    # Seed data used when a store has nothing persisted yet
    SEED_SAMPLE_DATA = _env_flag('SEED_SAMPLE_DATA')
    AREA_CODE_SEED_FILE = os.environ.get('AREA_CODE_SEED_FILE') or os.path.join(package_dir, 'data', 'area_codes.csv')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    @staticmethod
    def init_app(app):
        """Perform app-specific initialization if needed."""
        pass


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URI') or \
        'sqlite:///' + os.path.join(basedir, 'didadmin_dev.db')  # Development fallback
    SEED_SAMPLE_DATA = _env_flag('SEED_SAMPLE_DATA', 'True')
    SQLALCHEMY_ECHO = _env_flag('SQLALCHEMY_ECHO')


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SECRET_KEY = 'testing-secret-key'
    STORAGE_BACKEND = 'memory'
    SEED_SAMPLE_DATA = False
    # In-memory SQLite unless a dedicated test database is configured
    SQLALCHEMY_DATABASE_URI = os.environ.get('TEST_DATABASE_URI') or 'sqlite://'
    SQLALCHEMY_ECHO = False


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    STORAGE_BACKEND = os.environ.get('STORAGE_BACKEND', 'database')
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URI')
    if not SQLALCHEMY_DATABASE_URI and STORAGE_BACKEND == 'database':
        # create_app refuses to start in this state
        print("CRITICAL: DATABASE_URI not set for production environment!")

    if not Config.SECRET_KEY or Config.SECRET_KEY == 'a-default-insecure-secret-key-CHANGE-ME':
        print("CRITICAL: SECRET_KEY is not set or is using the default insecure value for production!")

    @classmethod
    def init_app(cls, app):
        """Initialize production-specific settings."""
        Config.init_app(app)

        # --- Production Logging Setup ---
        log_level = os.environ.get('LOG_LEVEL', 'INFO').upper()
        log_dir = os.path.join(basedir, 'logs')

        try:
            os.makedirs(log_dir, exist_ok=True)

            log_file = os.path.join(log_dir, 'didadmin.log')
            # Rotate logs at 10MB, keep 5 backups
            file_handler = RotatingFileHandler(log_file, maxBytes=10*1024*1024, backupCount=5)
            log_format = logging.Formatter(
                '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
            )
            file_handler.setFormatter(log_format)

            log_level_numeric = getattr(logging, log_level, logging.INFO)
            file_handler.setLevel(log_level_numeric)
            app.logger.addHandler(file_handler)
            app.logger.setLevel(log_level_numeric)

            app.logger.info(f'DID Admin startup in production mode. Log Level: {log_level}')

        except OSError as e:
            app.logger.error(f"Failed to configure file logging: {e}", exc_info=True)


# Dictionary to access configuration classes by name
config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
