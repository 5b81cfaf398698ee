import os

_ENV_ALIASES = {
    "prod": "production",
    "production": "production",
    "test": "testing",
    "testing": "testing",
}


def get_settings_module() -> str:
    # APP_ENV chọn module cấu hình; mặc định là 'development'
    env = os.getenv("APP_ENV", "development").strip().lower()
    return f"config.{_ENV_ALIASES.get(env, 'development')}"
