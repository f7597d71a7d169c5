import logging
from typing import Callable, List, Optional

from csv_grid.codec import CsvFormatError, ParseError
from csv_grid.notices import ERROR_NOTICE_TIMEOUT_MS, NoticeCenter

logger = logging.getLogger(__name__)


class LoadError(Exception):
    """A document that could not be brought into the grid."""


class MalformedCsv(LoadError):
    def __init__(self, errors: List[ParseError]) -> None:
        super().__init__(f"{len(errors)} malformed row(s)")
        self.errors = list(errors)


class UnknownLoadFailure(LoadError):
    def __init__(self, cause: BaseException) -> None:
        super().__init__(str(cause) or type(cause).__name__)
        self.cause = cause


def classify(exc: BaseException) -> LoadError:
    if isinstance(exc, LoadError):
        return exc
    if isinstance(exc, CsvFormatError):
        return MalformedCsv(exc.errors)
    return UnknownLoadFailure(exc)


class LoadErrorClassifier:
    """Reports load failures and tears the document session down.

    ``teardown`` must destroy the grid and close the hosting view; a
    document that failed to load is never left open.
    """

    def __init__(
        self,
        notices: NoticeCenter,
        teardown: Callable[[], None],
        timeout_ms: int = ERROR_NOTICE_TIMEOUT_MS,
    ) -> None:
        self._notices = notices
        self._teardown = teardown
        self._timeout_ms = timeout_ms

    def handle(self, exc: BaseException, identity: Optional[str]) -> LoadError:
        error = classify(exc)
        if isinstance(error, MalformedCsv):
            logger.error(
                "Caught %s during the loading of the data from %r.",
                "multiple errors" if len(error.errors) > 1 else "an error",
                identity,
            )
            for parse_error in error.errors:
                logger.error("%s (row %s, code %s)", parse_error.message, parse_error.row, parse_error.code)
                self._notices.notify(parse_error.message, self._timeout_ms)
        else:
            cause = error.cause if isinstance(error, UnknownLoadFailure) else error
            logger.error(
                "Caught error during the loading of the data from %r",
                identity,
                exc_info=(type(cause), cause, cause.__traceback__),
            )
            self._notices.notify(f"Couldn't load {identity}: {error}", self._timeout_ms)
        self._teardown()
        return error
