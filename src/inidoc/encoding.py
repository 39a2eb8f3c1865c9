import logging
from collections.abc import Iterable

import chardet

_log = logging.getLogger(__name__)

FALLBACK_ENCODING = "utf_8"


def detect_encoding(file: Iterable[bytes]) -> str | None:
    """Determine the encoding of a binary file.

    Args:
        file: The file to detect the encoding of, as chunks of bytes.

    Returns:
        The encoding if detected successfully, otherwise None.
    """

    detector = chardet.UniversalDetector()

    for chunk in file:
        if detector.done:
            break

        detector.feed(chunk)

    result = detector.close()

    if encoding := result["encoding"]:
        encoding = encoding.lower()

        # Plain ASCII is a subset of UTF-8, so prefer the latter for any non-ASCII values.
        if encoding == "ascii":
            encoding = FALLBACK_ENCODING

        _log.debug("detected encoding %s (confidence %.2f)", encoding, result["confidence"])
        return encoding

    return None
