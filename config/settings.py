"""Application configuration settings.

This module centralizes all configuration values loaded from:
1. config.base.yaml (shared defaults)
2. config.{env}.yaml (environment-specific: dev, staging, prod)
3. config.local.yaml (local overrides, git-ignored)
4. Environment variables (highest priority)

Default environment is 'development' (DEV).

Usage:
    from config.settings import config

    backend = config.STORE_BACKEND
    debug = config.DEBUG

    # Check current environment
    env = config.ENV  # 'development', 'staging', or 'production'
"""
import os
from pathlib import Path
from typing import Optional, Any, Dict
import yaml


# Environment name mappings
ENV_ALIASES = {
    'dev': 'development',
    'development': 'development',
    'staging': 'staging',
    'stage': 'staging',
    'prod': 'production',
    'production': 'production',
}

# Default environment
DEFAULT_ENV = 'development'


class Config:
    """Centralized application configuration.

    Loads configuration from YAML files based on environment.

    Priority (highest to lowest):
    1. Environment variables
    2. config.local.yaml (for local development overrides)
    3. config.{env}.yaml (environment-specific: dev, staging, prod)
    4. config.base.yaml (shared defaults)

    Environment is determined by:
    1. FLASK_ENV environment variable
    2. APP_ENV environment variable
    3. Default: 'development'
    """

    _config_data: Dict[str, Any] = {}
    _loaded: bool = False
    _current_env: str = DEFAULT_ENV

    def __init__(self):
        if not Config._loaded:
            self._load_config()

    @classmethod
    def _get_environment(cls) -> str:
        """Determine current environment from env vars or default to dev."""
        env = os.getenv('FLASK_ENV') or os.getenv('APP_ENV') or DEFAULT_ENV
        env = env.lower().strip()
        return ENV_ALIASES.get(env, DEFAULT_ENV)

    def _load_config(self):
        """Load configuration from YAML files based on environment."""
        config_dir = Path(__file__).parent
        Config._current_env = self._get_environment()

        # Start with empty config
        Config._config_data = {}

        # 1. Load base config (shared defaults)
        base_config_path = config_dir / 'config.base.yaml'
        if base_config_path.exists():
            with open(base_config_path, 'r', encoding='utf-8') as f:
                Config._config_data = yaml.safe_load(f) or {}

        # 2. Load environment-specific config
        env_config_map = {
            'development': 'config.dev.yaml',
            'staging': 'config.staging.yaml',
            'production': 'config.prod.yaml',
        }
        env_config_file = env_config_map.get(Config._current_env, 'config.dev.yaml')
        env_config_path = config_dir / env_config_file

        if env_config_path.exists():
            with open(env_config_path, 'r', encoding='utf-8') as f:
                env_data = yaml.safe_load(f) or {}
                Config._config_data = self._deep_merge(Config._config_data, env_data)

        # 3. Load local overrides (not in git)
        local_config_path = config_dir / 'config.local.yaml'
        if local_config_path.exists():
            with open(local_config_path, 'r', encoding='utf-8') as f:
                local_data = yaml.safe_load(f) or {}
                Config._config_data = self._deep_merge(Config._config_data, local_data)

        Config._loaded = True

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def _get_yaml_value(self, *keys, default=None) -> Any:
        """Get a nested value from YAML config."""
        value = Config._config_data
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
            if value is None:
                return default
        return value

    @staticmethod
    def _env_bool(name: str) -> Optional[bool]:
        env_val = os.getenv(name, '').lower()
        if env_val:
            return env_val in ('1', 'true', 'yes')
        return None

    @classmethod
    def reload(cls):
        """Reload configuration (useful for testing)."""
        cls._loaded = False
        cls._config_data = {}
        instance = cls()
        return instance

    # ==========================================================================
    # Environment Info
    # ==========================================================================

    @property
    def CURRENT_ENV(self) -> str:
        """Current environment name."""
        return Config._current_env

    @property
    def IS_DEV(self) -> bool:
        """Check if running in development environment."""
        return Config._current_env == 'development'

    @property
    def IS_STAGING(self) -> bool:
        """Check if running in staging environment."""
        return Config._current_env == 'staging'

    @property
    def IS_PROD(self) -> bool:
        """Check if running in production environment."""
        return Config._current_env == 'production'

    # ==========================================================================
    # Application Settings
    # ==========================================================================

    @property
    def DEBUG(self) -> bool:
        """Flask debug mode."""
        env_val = self._env_bool('FLASK_DEBUG')
        if env_val is not None:
            return env_val
        return self._get_yaml_value('app', 'debug', default=False)

    @property
    def ENV(self) -> str:
        """Application environment (development, staging, production)."""
        return Config._current_env

    @property
    def PORT(self) -> int:
        """Server port."""
        env_val = os.getenv('PORT')
        if env_val:
            return int(env_val)
        return self._get_yaml_value('app', 'port', default=5000)

    @property
    def APP_NAME(self) -> str:
        """Application name."""
        return os.getenv('APP_NAME') or self._get_yaml_value('app', 'name', default='TopVan Manager API')

    @property
    def APP_VERSION(self) -> str:
        """Application version."""
        return self._get_yaml_value('app', 'version', default='1.0.0')

    # ==========================================================================
    # Database Settings
    # ==========================================================================

    @property
    def STORE_BACKEND(self) -> str:
        """Document store implementation: 'mongo' or 'memory'."""
        return (os.getenv('STORE_BACKEND') or self._get_yaml_value('database', 'backend', default='mongo')).lower()

    @property
    def MONGO_URI(self) -> str:
        """MongoDB connection URI."""
        return os.getenv('MONGO_URI') or self._get_yaml_value('database', 'mongo_uri', default='mongodb://localhost:27017')

    @property
    def MONGO_DB(self) -> str:
        """MongoDB database name."""
        return os.getenv('MONGO_DB') or self._get_yaml_value('database', 'name', default='topvan')

    @property
    def MONGO_TIMEOUT_MS(self) -> int:
        """Server selection timeout for MongoDB operations."""
        env_val = os.getenv('MONGO_TIMEOUT_MS')
        if env_val:
            return int(env_val)
        return self._get_yaml_value('database', 'timeout_ms', default=5000)

    # ==========================================================================
    # CORS Settings
    # ==========================================================================

    @property
    def CORS_ORIGINS(self) -> str:
        """Allowed CORS origins."""
        return os.getenv('CORS_ORIGINS') or self._get_yaml_value('cors', 'origins', default='*')

    @property
    def CORS_ORIGINS_LIST(self) -> list:
        """Get CORS origins as a list."""
        origins = self.CORS_ORIGINS
        if origins == '*':
            return ['*']
        return [o.strip() for o in origins.split(',') if o.strip()]

    # ==========================================================================
    # Timezone Settings
    # ==========================================================================

    @property
    def DEFAULT_TIMEZONE(self) -> str:
        """Timezone used to decide which trips are upcoming."""
        return os.getenv('DEFAULT_TIMEZONE') or self._get_yaml_value('timezone', 'default', default='America/Sao_Paulo')

    # ==========================================================================
    # Logging Settings
    # ==========================================================================

    @property
    def LOG_LEVEL(self) -> str:
        """Logging level."""
        env_val = os.getenv('LOG_LEVEL')
        if env_val:
            return env_val.upper()
        # If debug mode, use DEBUG level
        if self.LOG_DEBUG:
            return 'DEBUG'
        return str(self._get_yaml_value('logging', 'level', default='INFO')).upper()

    @property
    def LOG_DEBUG(self) -> bool:
        """Enable debug logging (verbose)."""
        env_val = self._env_bool('LOG_DEBUG')
        if env_val is not None:
            return env_val
        return self._get_yaml_value('logging', 'debug', default=False)

    @property
    def LOG_PATTERN(self) -> str:
        """Log format pattern."""
        env_val = os.getenv('LOG_PATTERN')
        if env_val:
            return env_val
        return self._get_yaml_value('logging', 'pattern', default='%(message)s')

    @property
    def LOG_INCLUDE_DATETIME(self) -> bool:
        """Include datetime in logs."""
        env_val = self._env_bool('LOG_INCLUDE_DATETIME')
        if env_val is not None:
            return env_val
        return self._get_yaml_value('logging', 'include_datetime', default=True)

    @property
    def LOG_INCLUDE_NAME(self) -> bool:
        """Include logger name in logs."""
        env_val = self._env_bool('LOG_INCLUDE_NAME')
        if env_val is not None:
            return env_val
        return self._get_yaml_value('logging', 'include_name', default=True)

    @property
    def LOG_INCLUDE_LEVEL(self) -> bool:
        """Include log level in logs."""
        env_val = self._env_bool('LOG_INCLUDE_LEVEL')
        if env_val is not None:
            return env_val
        return self._get_yaml_value('logging', 'include_level', default=True)

    @property
    def LOG_DATE_FORMAT(self) -> str:
        """Date format for logs."""
        return self._get_yaml_value('logging', 'date_format', default='%H:%M:%S')

    @property
    def LOG_FORMAT(self) -> str:
        """Build log format string based on config options."""
        # If custom pattern is set, use it
        pattern = self.LOG_PATTERN
        if pattern and pattern != '%(message)s':
            return pattern

        # Build format dynamically
        parts = []
        if self.LOG_INCLUDE_DATETIME:
            parts.append('%(asctime)s')
        if self.LOG_INCLUDE_NAME:
            parts.append('%(name)s')
        if self.LOG_INCLUDE_LEVEL:
            parts.append('%(levelname)s')
        parts.append('%(message)s')

        return ' - '.join(parts) if len(parts) > 1 else parts[0]

    # ==========================================================================
    # OpenAI / AI Settings
    # ==========================================================================

    @property
    def OPENAI_API_KEY(self) -> Optional[str]:
        """OpenAI API key. Without it every expense is categorized as Outros."""
        return os.getenv('OPENAI_API_KEY') or self._get_yaml_value('openai', 'api_key')

    @property
    def OPENAI_MODEL(self) -> str:
        """Default OpenAI model."""
        return os.getenv('OPENAI_MODEL') or self._get_yaml_value('openai', 'model', default='gpt-4o-mini')

    @property
    def OPENAI_TEMPERATURE(self) -> float:
        """Default temperature for OpenAI."""
        env_val = os.getenv('OPENAI_TEMPERATURE')
        if env_val:
            return float(env_val)
        return self._get_yaml_value('openai', 'temperature', default=0.0)

    @property
    def OPENAI_TIMEOUT(self) -> int:
        """OpenAI request timeout in seconds."""
        env_val = os.getenv('OPENAI_TIMEOUT')
        if env_val:
            return int(env_val)
        return self._get_yaml_value('openai', 'timeout', default=30)

    # ==========================================================================
    # Business Rules
    # ==========================================================================

    @property
    def RESET_TRIP_POLICY(self) -> str:
        """What the monthly reset does with trips: keep, archive_paid or delete_all."""
        return (os.getenv('RESET_TRIP_POLICY') or self._get_yaml_value('reset', 'trip_policy', default='keep')).lower()

    def to_dict(self) -> Dict[str, Any]:
        """Non-secret summary of the active configuration."""
        return {
            'env': self.ENV,
            'app': {
                'name': self.APP_NAME,
                'version': self.APP_VERSION,
                'debug': self.DEBUG,
                'port': self.PORT,
            },
            'database': {
                'backend': self.STORE_BACKEND,
                'mongo_uri': '***' if self.MONGO_URI else None,
                'name': self.MONGO_DB,
            },
            'cors': {
                'origins': self.CORS_ORIGINS,
            },
            'timezone': {
                'default': self.DEFAULT_TIMEZONE,
            },
            'logging': {
                'level': self.LOG_LEVEL,
            },
            'openai': {
                'configured': bool(self.OPENAI_API_KEY),
                'model': self.OPENAI_MODEL,
            },
            'reset': {
                'trip_policy': self.RESET_TRIP_POLICY,
            },
        }


# Singleton config instance
config = Config()


# =============================================================================
# Convenience exports
# =============================================================================

def get_env() -> str:
    return config.ENV

def is_dev() -> bool:
    return config.IS_DEV

def is_prod() -> bool:
    return config.IS_PROD
