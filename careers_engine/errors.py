"""Exception hierarchy for the careers engine."""


class CareersEngineError(Exception):
    """Base class for every error raised by this package."""


class InputFileError(CareersEngineError):
    """The company input CSV is missing or unreadable."""


class UnknownCompanyError(CareersEngineError):
    """No input row or no site adapter exists for the requested company."""


class FetchError(CareersEngineError):
    """A page could not be fetched or navigated."""


class ScrapeError(CareersEngineError):
    """A listing page failed and the company run was halted."""

    def __init__(self, message: str, page: int, jobs_written: int = 0) -> None:
        super().__init__(message)
        self.page = page
        self.jobs_written = jobs_written
