import copy
import os
import yaml
from pathlib import Path

loaded_config = None

# Default configuration
DEFAULT_CONFIG = {
    'database': {
        'type': 'mysql',
        'user': 'root',
        'database': None,
        'host': 'localhost',
        'port': 3306,
        'password': '',
    },
    'context': {
        'TEST_DATABASE_DBNAME': 'am_admin_test',
        'DISTRICT_TEST_DATABASE_DBNAME': 'amd_district_test',
    },
    'debug': False,
}


def _config_paths():
    paths = []
    if os.getenv('SQLSCENARIO_CONFIG'):
        paths.append(Path(os.getenv('SQLSCENARIO_CONFIG')))
    paths.append(Path.cwd() / 'sqlscenario.yaml')
    return paths


def load_config():
    """
    Load configuration from environment variables with fallback to config files.
    Priority: env vars > sqlscenario.yaml > defaults
    """
    global loaded_config
    if loaded_config:
        return copy.deepcopy(loaded_config)

    config_dict = copy.deepcopy(DEFAULT_CONFIG)

    found = None
    for config_path in _config_paths():
        if config_path.exists():
            found = config_path
            with open(config_path, encoding="utf-8") as f:
                file_config = yaml.safe_load(f)
            if file_config:
                for section, value in file_config.items():
                    if isinstance(value, dict) and isinstance(config_dict.get(section), dict):
                        config_dict[section].update(value)
                    else:
                        config_dict[section] = value
            break

    # Environment variables override file config
    env_mapping = {
        'SQLSCENARIO_DB_TYPE': ('database', 'type'),
        'SQLSCENARIO_DB_USER': ('database', 'user'),
        'SQLSCENARIO_DB_NAME': ('database', 'database'),
        'SQLSCENARIO_DB_HOST': ('database', 'host'),
        'SQLSCENARIO_DB_PORT': ('database', 'port'),
        'SQLSCENARIO_DB_PASSWORD': ('database', 'password'),
        'TEST_DATABASE_DBNAME': ('context', 'TEST_DATABASE_DBNAME'),
        'DISTRICT_TEST_DATABASE_DBNAME': ('context', 'DISTRICT_TEST_DATABASE_DBNAME'),
    }

    for env_var, (section, key) in env_mapping.items():
        if os.getenv(env_var):
            if section not in config_dict:
                config_dict[section] = {}
            config_dict[section][key] = os.getenv(env_var)

    if os.getenv('SQLSCENARIO_DEBUG'):
        config_dict['debug'] = True

    if config_dict["debug"]:
        print(f"####: config file: {found or 'none found, using defaults'}")

    config_dict['database']['port'] = int(config_dict['database']['port'])

    loaded_config = config_dict

    return copy.deepcopy(config_dict)


def reset_config():
    """Forgets the cached configuration, so the next load_config() reads it again."""
    global loaded_config
    loaded_config = None


def debug_enabled() -> bool:
    return bool(load_config().get('debug'))


def config_db_get(cfg={}):
    """
    Returns a dictionary with database connection parameters, with defaults filled in.
    """

    config = load_config()
    if config is None or 'database' not in config:
        raise Exception("Database configuration not found")

    result = config['database']

    # Overwrite whatever is in the override config
    for key, value in cfg.items():
        result[key] = value

    if not result.get('database'):
        result['database'] = config['context']['TEST_DATABASE_DBNAME']

    result.pop('type', None)

    return result


def db_type_get() -> str:
    return load_config()['database']['type']
