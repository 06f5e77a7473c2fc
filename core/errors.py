"""Errors raised while filtering a PDF.

Every error carries the user-facing message returned in the JSON body.
Internal details stay in the server log.
"""

MISSING_FILE = "Nedostaje PDF fajl."
INVALID_PARAMS = "Neispravni parametri pretrage."
NO_TERMS = "Unesite bar jedan pojam za pretragu."
NO_MATCHES = "Nijedna stranica ne sadrži tražene pojmove."
PROCESSING_FAILED = "Greška pri obradi PDF fajla."


class FilterError(Exception):
    message = PROCESSING_FAILED

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ClientInputError(FilterError):
    """Missing file, unparsable terms or no terms at all."""

    message = INVALID_PARAMS


class NoMatchError(FilterError):
    """No page contains the requested terms. Not a failure for previews."""

    message = NO_MATCHES


class ProcessingError(FilterError):
    """The document could not be read, extracted or assembled."""

    message = PROCESSING_FAILED
