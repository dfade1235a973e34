import os


class Config:
    """Base configuration"""

    # Portfolio Data Settings
    PORTFOLIO_DATA_FILE = os.environ.get('PORTFOLIO_DATA_FILE', 'portfolio-data.json')

    # Asset Settings
    PROJECT_ASSETS_DIR = os.environ.get('PROJECT_ASSETS_DIR', 'project_assets')
    PERSONAL_ASSETS_DIR = os.environ.get('PERSONAL_ASSETS_DIR', 'personal_assets')
    BUILD_DIR = os.environ.get('BUILD_DIR', 'dist')
    # Serve the client bundle and optimized images out of BUILD_DIR/public
    SERVE_BUILD = False

    # Request Settings
    MAX_CONTENT_LENGTH = 1 * 1024 * 1024  # 1MB

    # Contact Email Settings (SendGrid)
    SENDGRID_API_KEY = os.environ.get('SENDGRID_API_KEY')
    SENDGRID_API_URL = os.environ.get('SENDGRID_API_URL', 'https://api.sendgrid.com/v3/mail/send')
    CONTACT_FROM_EMAIL = os.environ.get('CONTACT_FROM_EMAIL')
    CONTACT_TO_EMAIL = os.environ.get('CONTACT_TO_EMAIL')

    # Contact Rate Limit
    CONTACT_RATE_LIMIT = 10  # Max 10 submissions
    CONTACT_RATE_WINDOW = 60  # Per 60 seconds


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False
    SERVE_BUILD = True
    PORTFOLIO_DATA_FILE = os.environ.get('PORTFOLIO_DATA_FILE', os.path.join('dist', 'portfolio-data.json'))


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    # Tests supply their own provider credentials per case
    SENDGRID_API_KEY = None
    CONTACT_FROM_EMAIL = None
    CONTACT_TO_EMAIL = None


# Select configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(config_name=None):
    """Get configuration by name, falling back to FLASK_ENV"""
    env = config_name or os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
