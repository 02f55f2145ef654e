from __future__ import annotations

import datetime
import pathlib
import sys
import threading
from typing import (
    Any,
    Callable,
    Dict,
    TypeVar,
)

from ringroute.logging.models import Entry, Log

from .logger_stream import LoggerStream

T = TypeVar('T', bound=Entry)


class Logger:
    def __init__(self) -> None:
        self._streams: Dict[str, LoggerStream] = {}
        self._lock = threading.Lock()

    def __getitem__(self, name: str) -> LoggerStream:
        with self._lock:
            if self._streams.get(name) is None:
                self._streams[name] = LoggerStream(name=name)

            return self._streams[name]

    def get_stream(
        self,
        name: str | None = None,
        template: str | None = None,
        path: str | None = None,
        models: dict[
            str,
            tuple[
                type[T],
                dict[str, Any],
            ]
        ] | None = None,
    ) -> LoggerStream:
        if name is None:
            name = 'default'

        filename: str | None = None
        directory: str | None = None

        if path:
            logfile_path = pathlib.Path(path)
            is_logfile = len(logfile_path.suffix) > 0

            filename = logfile_path.name if is_logfile else None
            directory = str(logfile_path.parent.absolute()) if is_logfile else str(logfile_path.absolute())

        stream = LoggerStream(
            name=name,
            template=template,
            filename=filename,
            directory=directory,
            models=models,
        )

        with self._lock:
            previous = self._streams.get(name)
            self._streams[name] = stream

        if previous is not None:
            previous.close()

        return stream

    def log(
        self,
        entry: T,
        name: str | None = None,
        template: str | None = None,
        path: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        if name is None:
            name = 'default'

        frame = sys._getframe(1)
        code = frame.f_code

        self[name].log(
            Log(
                entry=entry,
                filename=code.co_filename,
                function_name=code.co_name,
                line_number=frame.f_lineno,
                thread_id=threading.get_native_id(),
                timestamp=datetime.datetime.now(datetime.UTC).isoformat()
            ),
            template=template,
            path=path,
            filter=filter,
        )

    def close(self):
        with self._lock:
            streams = list(self._streams.values())
            self._streams.clear()

        for stream in streams:
            stream.close()
