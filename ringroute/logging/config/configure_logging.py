from ringroute.env import Env, load_env

from .logging_config import LoggingConfig


def configure_logging(env: Env | None = None) -> LoggingConfig:
    """
    Apply RINGROUTE_LOG_LEVEL and RINGROUTE_LOG_OUTPUT to the current
    context.

    Rings only read the logging configuration. Applications call this
    once while setting up, or call ``LoggingConfig().update`` directly.
    """
    if env is None:
        env = load_env(Env)

    config = LoggingConfig()
    config.update(
        log_level=env.RINGROUTE_LOG_LEVEL,
        log_output=env.RINGROUTE_LOG_OUTPUT,
    )

    return config
