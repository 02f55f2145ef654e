from .logging_config import LoggingConfig as LoggingConfig, LogOutput as LogOutput
from .stream_type import StreamType as StreamType
from .configure_logging import configure_logging as configure_logging
