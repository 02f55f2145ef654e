from __future__ import annotations

import datetime
import os
import pathlib
import sys
import threading
from collections import defaultdict
from typing import (
    Any,
    Callable,
    Dict,
    IO,
    TypeVar,
)

import msgspec

from ringroute.logging.config import LoggingConfig, StreamType
from ringroute.logging.models import Entry, Log, LogLevel


T = TypeVar('T', bound=Entry)


DEFAULT_TEMPLATE = "{timestamp} - {level} - {thread_id} - {filename}:{function_name}.{line_number} - {message}"


class LoggerStream:
    """
    Writes entries for one named logger.

    Entries are rendered through a template to stdout/stderr, or, when a
    file path is configured, appended to that file as msgspec JSON
    ``Log`` records, one per line. Writes are serialized per destination
    so the stream can be shared between threads.
    """

    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        filename: str | None = None,
        directory: str | None = None,
        models: dict[
            str,
            tuple[
                type[T],
                dict[str, Any],
            ]
        ] | None = None,
    ) -> None:
        if name is None:
            name = "default"

        self._name = name
        self._default_template = template
        self._default_logfile = filename
        self._default_log_directory = directory

        self._config = LoggingConfig()
        self._files: Dict[str, IO[bytes]] = {}
        self._file_locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)
        self._stream_lock = threading.Lock()
        self._closed = False

        self._models: Dict[str, tuple[type[Entry], dict[str, Any]]] = {}

        if models is None:
            models = {}

        for model_name, config in models.items():
            model, defaults = config

            self._models[model_name] = (
                model,
                defaults
            )

        self._models.update({
            'default': (
                Entry,
                {
                    'level': LogLevel.INFO
                }
            )
        })

    @property
    def name(self):
        return self._name

    def log(
        self,
        entry: T,
        template: str | None = None,
        path: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        filename: str | None = None
        directory: str | None = None

        if path:
            logfile_path = pathlib.Path(path)
            is_logfile = len(logfile_path.suffix) > 0

            filename = logfile_path.name if is_logfile else None
            directory = str(logfile_path.parent.absolute()) if is_logfile else str(logfile_path.absolute())

        if template is None:
            template = self._default_template

        if filename is None:
            filename = self._default_logfile

        if directory is None:
            directory = self._default_log_directory

        if filename or directory:
            self._log_to_file(
                entry,
                filename=filename,
                directory=directory,
                filter=filter,
            )

        else:
            self._log(
                entry,
                template=template,
                filter=filter,
            )

    def log_message(
        self,
        message: str,
        model: str = 'default',
    ):
        self.log(self._to_entry(message, model))

    def _to_entry(
        self,
        message: str,
        name: str,
    ):
        model, defaults = self._models.get(
            name,
            self._models.get('default')
        )

        return model(
            message=message,
            **defaults
        )

    def _log(
        self,
        entry_or_log: T | Log[T],
        template: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        entry: Entry = None
        if isinstance(entry_or_log, Log):
            entry = entry_or_log.entry

        else:
            entry = entry_or_log

        if self._closed or self._config.enabled(self._name, entry.level) is False:
            return

        if filter and filter(entry) is False:
            return

        if template is None:
            template = DEFAULT_TEMPLATE

        if isinstance(entry_or_log, Log):
            log_file = entry_or_log.filename
            line_number = entry_or_log.line_number
            function_name = entry_or_log.function_name

        else:
            log_file, line_number, function_name = self._find_caller()

        stream = sys.stdout if self._config.output == StreamType.STDOUT else sys.stderr

        line = entry.to_template(
            template,
            context={
                "filename": log_file,
                "function_name": function_name,
                "line_number": line_number,
                "thread_id": threading.get_native_id(),
                "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
            },
        )

        with self._stream_lock:
            stream.write(line + "\n")
            stream.flush()

    def _log_to_file(
        self,
        entry_or_log: T | Log[T],
        filename: str | None = None,
        directory: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        entry: Entry = None
        if isinstance(entry_or_log, Log):
            entry = entry_or_log.entry

        else:
            entry = entry_or_log

        if self._closed or self._config.enabled(self._name, entry.level) is False:
            return

        if filter and filter(entry) is False:
            return

        if isinstance(entry_or_log, Log):
            log = entry_or_log

        else:
            log_file, line_number, function_name = self._find_caller()
            log = Log(
                entry=entry,
                filename=log_file,
                function_name=function_name,
                line_number=line_number,
            )

        logfile_path = self._to_logfile_path(filename, directory)

        with self._file_locks[logfile_path]:
            logfile = self._files.get(logfile_path)
            if logfile is None or logfile.closed:
                logfile = self._open_file(logfile_path)

            logfile.write(msgspec.json.encode(log) + b"\n")
            logfile.flush()

    def _to_logfile_path(
        self,
        filename: str | None,
        directory: str | None,
    ):
        if filename is None:
            filename = "logs.json"

        if directory is None:
            directory = os.path.join(os.getcwd(), "logs")

        return os.path.join(directory, filename)

    def _open_file(self, logfile_path: str):
        directory = os.path.dirname(logfile_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        logfile = open(logfile_path, "ab+")
        self._files[logfile_path] = logfile

        return logfile

    def read(
        self,
        path: str,
        filter: Callable[[Log], bool] | None = None,
    ) -> list[Log]:
        """Decode every ``Log`` record previously written to ``path``."""
        decoder = msgspec.json.Decoder(Log[Entry])

        logs: list[Log] = []
        with open(path, "rb") as logfile:
            for line in logfile:
                if not line.strip():
                    continue

                log = decoder.decode(line)
                if filter is None or filter(log):
                    logs.append(log)

        return logs

    def close(self):
        self._closed = True

        for logfile_path, logfile in list(self._files.items()):
            with self._file_locks[logfile_path]:
                if not logfile.closed:
                    logfile.close()

        self._files.clear()

    def _find_caller(self):
        """
        Find the stack frame of the caller so that we can note the source
        file name, line number and function name.
        """
        frame = sys._getframe(3)
        code = frame.f_code

        return (
            code.co_filename,
            frame.f_lineno,
            code.co_name,
        )
