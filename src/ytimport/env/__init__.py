from ytimport.env.env import (
    DEFAULT_ENV_FILE,
    ConfigError,
    Environment,
    LoggingEnvironment,
    get_env,
    get_logging_env,
    load_env_file,
    reset_env_caches,
)

from ytimport.env.paths import PROJECT_ROOT

__all__ = [
    "DEFAULT_ENV_FILE",
    "ConfigError",
    "Environment",
    "LoggingEnvironment",
    "get_env",
    "get_logging_env",
    "load_env_file",
    "reset_env_caches",
    "PROJECT_ROOT",
]
