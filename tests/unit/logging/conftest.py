import pytest

from ringroute.logging import Entry, LoggingConfig, LogLevel, LoggerStream


@pytest.fixture(autouse=True)
def logging_config():
    """Run at DEBUG, then put back whatever the context held before."""
    config = LoggingConfig()
    level = config.level
    output = config.output
    disabled_loggers = config.disabled_loggers

    config.update(log_level="debug")

    yield config

    config.update(
        log_level=level.value.lower(),
        log_output=output.value,
        disabled_loggers=list(disabled_loggers),
    )


@pytest.fixture
def temp_log_directory(tmp_path) -> str:
    return str(tmp_path)


@pytest.fixture
def sample_entry() -> Entry:
    return Entry(
        message="Test log message",
        level=LogLevel.INFO,
    )


@pytest.fixture
def sample_entry_factory():
    def create_entry(
        message: str = "Test log message",
        level: LogLevel = LogLevel.INFO,
    ) -> Entry:
        return Entry(message=message, level=level)

    return create_entry


@pytest.fixture
def json_logger_stream(temp_log_directory: str):
    stream = LoggerStream(
        name="test_json",
        filename="test.json",
        directory=temp_log_directory,
    )

    yield stream

    stream.close()
